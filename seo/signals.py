# FILE: seo/signals.py
from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import SeoModelMixin


@receiver(pre_save, dispatch_uid="seo_before_save")
def seo_before_save(sender, instance, raw=False, **kwargs):
    # фикстуры (loaddata) сохраняем как есть
    if raw or not isinstance(instance, SeoModelMixin):
        return
    instance.seo.before_save()
