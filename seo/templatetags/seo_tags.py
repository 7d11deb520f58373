from __future__ import annotations

from django import template

from ..conf import get_setting
from ..page import PageSeo
from ..utils import generate_slug

register = template.Library()


@register.simple_tag(takes_context=True)
def seo_meta_tags(context):
    """
    {% seo_meta_tags %} -> <title> + <meta> теги текущей страницы.
    Если заголовок не задан через set_seo_data(), берём {{ title }} из контекста.
    """
    request = context.get("request")
    page = context.get("seo")
    if not isinstance(page, PageSeo):
        page = getattr(request, "seo", None)
    if not isinstance(page, PageSeo):
        page = PageSeo()
    return page.render_meta_tags(default_title=context.get("title"), request=request)


@register.filter
def seo_slug(value):
    return generate_slug(value or "", get_setting("MAX_URL_LENGTH"), get_setting("TO_LOWER_SEO_URL"))


@register.simple_tag(takes_context=True)
def seo_url(context, obj, anchor=None, absolute=False):
    """{% seo_url post %} / {% seo_url post "comments" True %}"""
    request = context.get("request")
    return obj.seo.get_view_url(anchor=anchor, absolute=absolute, request=request)
