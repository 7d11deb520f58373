# FILE: seo/page.py
from __future__ import annotations

from typing import Optional

from django.apps import apps
from django.utils.html import format_html, format_html_join
from django.utils.safestring import SafeString

from .behaviors import SeoModelBehavior
from .conf import get_setting
from .models import SeoModelMixin
from .utils import DESC_KEY, KEYS_KEY, TITLE_KEY, fill_template, normalize_str


def get_app_name(request=None) -> str:
    """SEO['APP_NAME'] или имя текущего сайта (django.contrib.sites)."""
    name = get_setting("APP_NAME")
    if name:
        return name
    if apps.is_installed("django.contrib.sites"):
        from django.contrib.sites.shortcuts import get_current_site

        return get_current_site(request).name
    return ""


class PageSeo:
    """
    SEO-параметры страницы: <title>, meta description/keywords, robots.
    Экземпляр живёт в request.seo (см. SeoMiddleware).
    """

    def __init__(
        self,
        title_template: Optional[str] = None,
        description_template: Optional[str] = None,
        keywords_template: Optional[str] = None,
    ):
        self.title_template = title_template or get_setting("TITLE_TEMPLATE")
        self.description_template = description_template or get_setting("DESCRIPTION_TEMPLATE")
        self.keywords_template = keywords_template or get_setting("KEYWORDS_TEMPLATE")

        self._page_title = ""
        self._meta_description = ""
        self._meta_keywords = ""
        self._no_index = ""

    @property
    def title(self) -> str:
        return self._page_title

    @property
    def description(self) -> str:
        return self._meta_description

    @property
    def keywords(self) -> str:
        return self._meta_keywords

    @property
    def robots(self) -> str:
        return self._no_index

    def set_seo_data(self, title, desc="", keys="") -> "PageSeo":
        """
        title может быть:
          1) моделью с SeoModelMixin или её SeoModelBehavior
          2) dict {"title": ..., "desc": ..., "keys": ...}
          3) строкой заголовка (тогда desc/keys берутся из аргументов)
        keys -- строка или список ключевых слов
        """
        data = title
        if isinstance(title, SeoModelMixin):
            title = title.seo
        if isinstance(title, SeoModelBehavior):
            meta = title.get_seo_data()
            data = {
                "title": meta[TITLE_KEY],
                "desc": meta[DESC_KEY],
                "keys": meta[KEYS_KEY],
            }
        elif isinstance(title, str):
            data = {
                "title": title,
                "desc": desc,
                "keys": keys if isinstance(keys, str) else ", ".join(str(k) for k in keys or []),
            }

        if not isinstance(data, dict):
            data = {}
        if data.get("title") is not None:
            self._page_title = normalize_str(data["title"])
        if data.get("desc") is not None:
            self._meta_description = normalize_str(data["desc"])
        if data.get("keys") is not None:
            self._meta_keywords = normalize_str(data["keys"])
        return self

    def no_index(self, follow: bool = True) -> "PageSeo":
        """meta robots: noindex + follow/nofollow."""
        self._no_index = "noindex, " + ("follow" if follow else "nofollow")
        return self

    def get_title(self, default_title: Optional[str] = None, request=None) -> str:
        app_name = get_app_name(request)
        title = self._page_title or normalize_str(default_title)
        if title:
            title = fill_template(self.title_template, title=title, appName=app_name)
        else:
            # без заголовка страницы: имя приложения
            title = app_name
        return normalize_str(title)

    def get_meta_tags(self) -> list[dict]:
        tags = []
        if self._meta_description:
            content = fill_template(self.description_template, description=self._meta_description)
            tags.append({"name": "description", "content": normalize_str(content)})
        if self._meta_keywords:
            content = fill_template(self.keywords_template, keywords=self._meta_keywords)
            tags.append({"name": "keywords", "content": normalize_str(content)})
        if self._no_index:
            tags.append({"name": "robots", "content": self._no_index})
        return tags

    def render_meta_tags(self, default_title: Optional[str] = None, request=None) -> SafeString:
        """
        <title>...</title>
        <meta name="description" content="...">
        <meta name="keywords" content="...">
        <meta name="robots" content="noindex, follow|nofollow">  (только после no_index())
        """
        html = format_html("<title>{}</title>\n", self.get_title(default_title, request))
        tags = self.get_meta_tags()
        if tags:
            html += format_html_join(
                "\n", '<meta name="{}" content="{}">', ((t["name"], t["content"]) for t in tags)
            )
        return html
