# FILE: seo/routes.py
from __future__ import annotations

import re
import logging

from django.urls import URLPattern, URLResolver, get_resolver

logger = logging.getLogger(__name__)

_SEGMENT_RE = re.compile(r"[\w-]+")

# namespace -> список литеральных сегментов маршрутов
_namespace_routes: dict[str, list[str]] = {}


def _find_resolver(patterns, namespace: str):
    for p in patterns:
        if not isinstance(p, URLResolver):
            continue
        if p.namespace == namespace:
            return p
        found = _find_resolver(p.url_patterns, namespace)
        if found is not None:
            return found
    return None


def _first_segment(pattern) -> str:
    raw = str(pattern).lstrip("^")
    seg = raw.split("/", 1)[0].rstrip("$")
    return seg if _SEGMENT_RE.fullmatch(seg) else ""


def _collect(patterns, out: list[str]) -> None:
    for p in patterns:
        if isinstance(p, URLPattern):
            seg = _first_segment(p.pattern)
            if seg and seg not in out:
                out.append(seg)
        elif isinstance(p, URLResolver) and not p.namespace:
            # include() без namespace: его маршруты тоже принадлежат приложению
            seg = _first_segment(p.pattern)
            if seg:
                if seg not in out:
                    out.append(seg)
            else:
                _collect(p.url_patterns, out)


def route_stop_names(namespace: str) -> list[str]:
    """
    Литеральные первые сегменты всех маршрутов внутри URL-namespace.
    Нужны, чтобы SEO:url не совпал с существующим адресом ("create", "tag", ...).
    """
    if namespace in _namespace_routes:
        return list(_namespace_routes[namespace])

    resolver = get_resolver()
    for part in namespace.split(":"):
        resolver = _find_resolver(resolver.url_patterns, part)
        if resolver is None:
            logger.warning(f"URL namespace '{namespace}' not found, no route stop names added")
            return []

    names: list[str] = []
    _collect(resolver.url_patterns, names)
    _namespace_routes[namespace] = names
    return list(names)


def clear_cache() -> None:
    _namespace_routes.clear()
