# FILE: seo/models.py
from __future__ import annotations

from .behaviors import SeoModelBehavior


class SeoModelMixin:
    """
    Подмешивается к модели перед models.Model:

        class Post(SeoModelMixin, models.Model):
            seo_url = models.CharField(max_length=80, unique=True, blank=True)
            seo_meta = models.JSONField(default=dict, blank=True)

            seo_config = {
                "url_field": "seo_url",
                "meta_field": "seo_meta",
                "title_produce_func": "title",
            }

    clean()   -> SEO:url + обрезка мета-полей
    pre_save  -> то же + генерация пустых мета-полей (см. seo.signals)
    from_db   -> мета-поле всегда dict
    """

    seo_config: dict = {}

    @property
    def seo(self) -> SeoModelBehavior:
        behavior = self.__dict__.get("_seo_behavior")
        # после copy.copy() в __dict__ остаётся поведение исходного объекта
        if behavior is None or behavior.owner is not self:
            behavior = SeoModelBehavior(self)
            self.__dict__["_seo_behavior"] = behavior
        return behavior

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance.seo.after_find()
        return instance

    def clean(self):
        super().clean()
        self.seo.before_validate()

    def get_seo_data(self, lang=None) -> dict:
        return self.seo.get_seo_data(lang)

    def get_absolute_url(self) -> str:
        return self.seo.get_view_url()
