# FILE: seo/behaviors.py
from __future__ import annotations

import re
import logging
from typing import Optional

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.db.models import Q
from django.http import HttpResponsePermanentRedirect
from django.urls import reverse
from django.utils import translation

from .conf import SeoOptions, get_setting
from .utils import (
    DESC_KEY,
    KEYS_KEY,
    TITLE_KEY,
    fill_metadata,
    generate_slug,
    meta_param,
    random_slug,
    resolve_unique_slug,
    truncate,
)

logger = logging.getLogger(__name__)

# model class -> SeoOptions (опции собираются один раз на класс)
_options_cache: dict = {}


def get_options(model) -> SeoOptions:
    opts = _options_cache.get(model)
    if opts is None:
        opts = SeoOptions(model, getattr(model, "seo_config", None))
        _options_cache[model] = opts
    return opts


def clear_options_cache() -> None:
    _options_cache.clear()


class SeoModelBehavior:
    """
    SEO-поведение, привязанное к экземпляру модели:
    SEO:url (slug) + мета-данные title/desc/keys по языкам.
    """

    TITLE_KEY = TITLE_KEY
    DESC_KEY = DESC_KEY
    KEYS_KEY = KEYS_KEY

    def __init__(self, owner, options: Optional[SeoOptions] = None):
        self.owner = owner
        self.options = options or get_options(type(owner))

    # ── helpers ──────────────────────────────────────────────────────────────
    @property
    def languages(self) -> list[str]:
        # без seo_config["languages"]: активный язык (тот же, что читает get_seo_data)
        if self.options.languages:
            return self.options.languages
        return [translation.get_language() or settings.LANGUAGE_CODE]

    @property
    def client_change(self) -> bool:
        value = self.options.client_change
        if callable(value):
            return bool(value(self.owner))
        return bool(value)

    def meta_fields(self) -> dict:
        """{ключ мета-поля: генератор (имя поля модели или callable)}"""
        return {
            TITLE_KEY: self.options.title_produce_func,
            DESC_KEY: self.options.description_produce_func,
            KEYS_KEY: self.options.keys_produce_func,
        }

    def max_length(self, key: str) -> int:
        if key == TITLE_KEY:
            return self.options.max_title_length
        if key == DESC_KEY:
            return self.options.max_desc_length
        return self.options.max_keys_length

    def produce_value(self, produce, lang: Optional[str] = None) -> str:
        """Значение генератора: callable(model, lang) или имя поля модели."""
        if callable(produce):
            return str(produce(self.owner, lang) or "")
        return str(getattr(self.owner, produce, "") or "")

    def _get_meta(self) -> dict:
        meta = getattr(self.owner, self.options.meta_field, None)
        return meta if isinstance(meta, dict) else {}

    def get_meta_value(self, key: str, lang: str) -> Optional[str]:
        if not self.options.meta_field:
            return None
        return self._get_meta().get(meta_param(key, lang))

    def set_meta_value(self, key: str, lang: str, value) -> None:
        meta = dict(self._get_meta())
        meta[meta_param(key, lang)] = "" if value is None else str(value)
        setattr(self.owner, self.options.meta_field, meta)

    # ── lifecycle ────────────────────────────────────────────────────────────
    def apply_max_length(self, key: str, lang: str) -> None:
        value = truncate(self.get_meta_value(key, lang), self.max_length(key))
        self.set_meta_value(key, lang, value)

    def before_validate(self) -> None:
        opts = self.options

        if opts.meta_field:
            for lang in self.languages:
                for key in self.meta_fields():
                    self.apply_max_length(key, lang)

        if not opts.url_field:
            return

        source = str(getattr(self.owner, opts.url_field, "") or "").strip()
        if source == "":
            source = self.produce_value(opts.url_produce_field)

        slug = generate_slug(source, opts.max_url_length, opts.to_lower_seo_url)
        if not slug:
            slug = random_slug()
            logger.warning(
                f"Empty SEO url for {self.owner._meta.label} pk={self.owner.pk}, using random '{slug}'"
            )

        slug = resolve_unique_slug(
            slug, self.is_unique_url, opts.stop_names, opts.max_unique_attempts
        )
        logger.debug(f"SEO url for {self.owner._meta.label} pk={self.owner.pk}: '{slug}'")
        setattr(self.owner, opts.url_field, slug)

    def unique_url_queryset(self):
        model = type(self.owner)
        qs = model._default_manager.all()
        flt = self.options.unique_url_filter
        if callable(flt):
            flt = flt(self.owner)
        if isinstance(flt, Q):
            qs = qs.filter(flt)
        elif isinstance(flt, dict):
            qs = qs.filter(**flt)
        elif flt is not None:
            raise ImproperlyConfigured(
                f"{model._meta.label}.seo_config['unique_url_filter'] must be Q, dict or callable"
            )
        return qs

    def is_unique_url(self, value: str) -> bool:
        qs = self.unique_url_queryset().filter(**{self.options.url_field: value})
        return not qs.exclude(pk=self.owner.pk).exists()

    def before_save(self) -> None:
        self.before_validate()
        if not self.options.meta_field:
            return
        self.fill_meta()

    def after_find(self) -> None:
        field = self.options.meta_field
        if field and not isinstance(getattr(self.owner, field, None), dict):
            setattr(self.owner, field, {})

    def fill_meta(self) -> None:
        """Пустые мета-поля генерируются, заполненные пользователем остаются как есть."""
        generators = {}
        for key, produce in self.meta_fields().items():
            if produce is not None:
                generators[key] = lambda lang, produce=produce: self.produce_value(produce, lang)

        limits = {key: self.max_length(key) for key in self.meta_fields()}
        meta = fill_metadata(self._get_meta(), generators, self.languages, limits)
        setattr(self.owner, self.options.meta_field, meta)

    # ── public API ───────────────────────────────────────────────────────────
    def get_seo_data(self, lang: Optional[str] = None) -> dict:
        """
        Мета-данные модели для языка lang:
        {"title": ..., "desc": ..., "keys": ...}
        Если meta_field не задан: значения генерируются на лету.
        """
        if not lang:
            lang = translation.get_language() or settings.LANGUAGE_CODE

        if self.options.meta_field:
            self.fill_meta()
            return {key: self.get_meta_value(key, lang) for key in self.meta_fields()}

        data = {}
        for key, produce in self.meta_fields().items():
            data[key] = self.produce_value(produce, lang) if produce is not None else ""
        return data

    def get_view_url(
        self,
        title: Optional[str] = None,
        anchor: Optional[str] = None,
        absolute: bool = False,
        request=None,
    ) -> str:
        """
        URL страницы просмотра модели.
        title  -- SEO:url для ссылки, если строим её не из модели
        anchor -- #якорь
        """
        opts = self.options

        params = opts.additional_link_params
        if callable(params):
            params = params(self.owner)

        # без SEO:url ссылка строится по первичному ключу
        if not opts.url_field and not title:
            title = self.owner.pk

        value = title if title else getattr(self.owner, opts.url_field)
        kwargs = {opts.link_title_param_name: value}
        kwargs.update(params or {})

        url = reverse(opts.view_route, kwargs=kwargs)
        if anchor:
            url = f"{url}#{anchor}"

        if absolute:
            if request is not None:
                return request.build_absolute_uri(url)
            base = get_setting("BASE_URL")
            if not base:
                raise ImproperlyConfigured(
                    "SEO['BASE_URL'] is required to build absolute urls without a request"
                )
            return base.rstrip("/") + url
        return url

    def get_absolute_view_url(self, title=None, anchor=None, request=None) -> str:
        return self.get_view_url(title, anchor, absolute=True, request=request)

    def check_seo_url(self, request):
        """
        Если запрос пришёл в обход SEO:url (совпал check_seo_url_regexp):
        возвращает 301 на правильный адрес, иначе None.
        """
        pattern = self.options.check_seo_url_regexp
        if not pattern:
            return None
        if not re.search(pattern, request.path_info):
            return None
        url = self.get_view_url()
        if request.path == url:
            return None
        return HttpResponsePermanentRedirect(url)
