# FILE: seo/conf.py
from __future__ import annotations

from django.conf import settings
from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured

# ── project-wide defaults (override via settings.SEO = {...}) ─────────────────
DEFAULTS = {
    "MAX_URL_LENGTH": 70,
    "MAX_TITLE_LENGTH": 70,
    "MAX_DESC_LENGTH": 130,
    "MAX_KEYS_LENGTH": 150,
    "STOP_NAMES": ["create", "update", "delete", "view", "index"],
    "TO_LOWER_SEO_URL": True,
    "MAX_UNIQUE_ATTEMPTS": 50,
    "LINK_TITLE_PARAM_NAME": "title",
    "TITLE_TEMPLATE": "{title} - {appName}",
    "DESCRIPTION_TEMPLATE": "{description}",
    "KEYWORDS_TEMPLATE": "{keywords}",
    "APP_NAME": "",
    "BASE_URL": "",
}


def get_setting(name: str):
    """Значение из settings.SEO с откатом на DEFAULTS."""
    if name not in DEFAULTS:
        raise ImproperlyConfigured(f"Unknown SEO setting: {name}")
    user = getattr(settings, "SEO", None) or {}
    return user.get(name, DEFAULTS[name])


class SeoOptions:
    """
    Опции SEO для конкретной модели.
    Собираются из DEFAULTS/settings.SEO и перекрываются атрибутом модели `seo_config`.
    """

    KEYS = (
        "url_field",
        "url_produce_field",
        "title_produce_func",
        "description_produce_func",
        "keys_produce_func",
        "meta_field",
        "client_change",
        "max_url_length",
        "max_title_length",
        "max_desc_length",
        "max_keys_length",
        "stop_names",
        "view_route",
        "link_title_param_name",
        "additional_link_params",
        "languages",
        "url_namespace",
        "to_lower_seo_url",
        "unique_url_filter",
        "check_seo_url_regexp",
        "max_unique_attempts",
    )

    def __init__(self, model, overrides: dict | None = None):
        opts = model._meta

        self.url_field = None
        self.url_produce_field = "title"
        self.title_produce_func = None
        self.description_produce_func = None
        self.keys_produce_func = None
        self.meta_field = None
        self.client_change = True
        self.max_url_length = get_setting("MAX_URL_LENGTH")
        self.max_title_length = get_setting("MAX_TITLE_LENGTH")
        self.max_desc_length = get_setting("MAX_DESC_LENGTH")
        self.max_keys_length = get_setting("MAX_KEYS_LENGTH")
        self.stop_names = list(get_setting("STOP_NAMES"))
        self.view_route = ""
        self.link_title_param_name = get_setting("LINK_TITLE_PARAM_NAME")
        self.additional_link_params = {}
        self.languages = []
        self.url_namespace = None
        self.to_lower_seo_url = get_setting("TO_LOWER_SEO_URL")
        self.unique_url_filter = None
        self.check_seo_url_regexp = ""
        self.max_unique_attempts = get_setting("MAX_UNIQUE_ATTEMPTS")

        for key, value in (overrides or {}).items():
            if key not in self.KEYS:
                raise ImproperlyConfigured(
                    f"{opts.label}.seo_config: unknown option '{key}'"
                )
            setattr(self, key, value)

        if isinstance(self.languages, str):
            self.languages = [self.languages]
        self.languages = list(self.languages or [])

        if not self.view_route:
            self.view_route = f"{opts.app_label}:{opts.model_name}-detail"

        for name in (self.url_field, self.meta_field):
            if name:
                try:
                    opts.get_field(name)
                except FieldDoesNotExist as e:
                    raise ImproperlyConfigured(
                        f"{opts.label}.seo_config refers to missing field '{name}'"
                    ) from e

        if self.url_field and self.url_namespace:
            from .routes import route_stop_names

            for name in route_stop_names(self.url_namespace):
                if name not in self.stop_names:
                    self.stop_names.append(name)
