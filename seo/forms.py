# FILE: seo/forms.py
from __future__ import annotations

from django import forms

from .utils import DESC_KEY


class SeoFormMixin:
    """
    Для ModelForm модели с SeoModelMixin.
    Добавляет поле SEO:url и мета-поля по языкам (если client_change разрешает),
    а введённые значения записывает обратно в мета-поле модели.

        class PostForm(SeoFormMixin, forms.ModelForm):
            class Meta:
                model = Post
                fields = ["title", "body"]
    """

    seo_widget_attrs = {"class": "input"}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._seo_meta_names: dict[str, tuple[str, str]] = {}
        self._seo_url_added = False

        behavior = self.instance.seo
        opts = behavior.options
        if not behavior.client_change:
            # редактировать SEO нельзя: убираем и поля модели из Meta.fields
            for name in (opts.url_field, opts.meta_field):
                if name:
                    self.fields.pop(name, None)
            return

        if opts.url_field and opts.url_field not in self.fields:
            model_field = self.instance._meta.get_field(opts.url_field)
            self.fields[opts.url_field] = forms.CharField(
                label=model_field.verbose_name,
                required=False,
                initial=getattr(self.instance, opts.url_field, ""),
                widget=forms.TextInput(attrs=dict(self.seo_widget_attrs)),
            )
            self._seo_url_added = True

        if not opts.meta_field:
            return

        several = len(behavior.languages) > 1
        for lang in behavior.languages:
            for key in behavior.meta_fields():
                name = f"{opts.meta_field}_{key}_{lang}"
                label = f"SEO: {key}"
                if several:
                    label += f" {lang.upper()}"
                widget = forms.Textarea if key == DESC_KEY else forms.TextInput
                attrs = dict(self.seo_widget_attrs)
                if key == DESC_KEY:
                    attrs["rows"] = 3
                self.fields[name] = forms.CharField(
                    label=label,
                    required=False,
                    initial=behavior.get_meta_value(key, lang) or "",
                    widget=widget(attrs=attrs),
                )
                self._seo_meta_names[name] = (key, lang)

    def clean(self):
        cleaned = super().clean()
        behavior = self.instance.seo
        # до instance.full_clean(): SEO:url и мета-поля уже лежат в модели
        url_field = behavior.options.url_field
        if self._seo_url_added:
            setattr(self.instance, url_field, cleaned.get(url_field) or "")
        for name, (key, lang) in self._seo_meta_names.items():
            behavior.set_meta_value(key, lang, cleaned.get(name) or "")
        return cleaned
