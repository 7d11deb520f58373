# FILE: seo/utils.py
import re
import uuid
import hashlib
import logging
from typing import Callable, Iterable, Optional

from django.utils.html import strip_tags

logger = logging.getLogger(__name__)

TITLE_KEY = "title"
DESC_KEY = "desc"
KEYS_KEY = "keys"
META_KEYS = (TITLE_KEY, DESC_KEY, KEYS_KEY)

# Транслитерация кириллицы (фиксированная таблица, регистр сохраняется)
TRANSLIT_MAP = {
    "а": "a", "б": "b", "в": "v", "г": "g", "д": "d", "е": "e", "ё": "yo",
    "ж": "j", "з": "z", "и": "i", "й": "i", "к": "k", "л": "l", "м": "m",
    "н": "n", "о": "o", "п": "p", "р": "r", "с": "s", "т": "t", "у": "y",
    "ф": "f", "х": "h", "ц": "c", "ч": "ch", "ш": "sh", "щ": "sh", "ы": "i",
    "э": "e", "ю": "u", "я": "ya",
    "А": "A", "Б": "B", "В": "V", "Г": "G", "Д": "D", "Е": "E", "Ё": "Yo",
    "Ж": "J", "З": "Z", "И": "I", "Й": "I", "К": "K", "Л": "L", "М": "M",
    "Н": "N", "О": "O", "П": "P", "Р": "R", "С": "S", "Т": "T", "У": "Y",
    "Ф": "F", "Х": "H", "Ц": "C", "Ч": "Ch", "Ш": "Sh", "Щ": "Sh", "Ы": "I",
    "Э": "E", "Ю": "U", "Я": "Ya",
    "ь": "", "Ь": "", "ъ": "", "Ъ": "",
}
_TRANSLIT_TABLE = str.maketrans(TRANSLIT_MAP)

_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9_-]+")
_SPACES_RE = re.compile(r"\s+")


def transliterate(value: str) -> str:
    return (value or "").translate(_TRANSLIT_TABLE)


def generate_slug(source_text: Optional[str], max_length: int = 255, lowercase: bool = True) -> str:
    """
    SEO-slug из произвольного текста:
    - транслитерация кириллицы по таблице
    - всё, кроме [a-zA-Z0-9_-], заменяется одним дефисом
    - дефисы по краям убираются
    - длина режется по символам (code points), а не по байтам
    """
    slug = transliterate(str(source_text or ""))
    slug = _DISALLOWED_RE.sub("-", slug).strip("-")
    if lowercase:
        slug = slug.lower()
    if len(slug) > max_length:
        # после обрезки на конце мог остаться дефис
        slug = slug[:max_length].rstrip("-")
    return slug


def random_slug() -> str:
    """Непрозрачный случайный идентификатор (md5 от свежего uuid4)."""
    return hashlib.md5(uuid.uuid4().hex.encode("utf-8")).hexdigest()


def resolve_unique_slug(
    candidate: str,
    is_unique: Callable[[str], bool],
    stop_words: Iterable[str] = (),
    max_attempts: int = 50,
) -> str:
    """
    Подбирает свободный slug: пока кандидат в стоп-листе или занят: дописываем "_".
    После max_attempts неудачных повторов возвращаем случайный идентификатор.
    is_unique вызывается не больше max_attempts + 1 раз.
    """
    stop = set(stop_words or ())
    slug = candidate
    while slug in stop:
        slug += "_"

    for _ in range(max_attempts + 1):
        if slug not in stop and is_unique(slug):
            return slug
        slug += "_"

    fallback = random_slug()
    logger.warning(
        f"Could not find a unique slug for '{candidate}' after {max_attempts} attempts, "
        f"using random '{fallback}'"
    )
    return fallback


def normalize_str(value) -> str:
    """Убирает html-теги, схлопывает пробелы/переносы/табы в один пробел."""
    text = strip_tags(str(value or ""))
    return _SPACES_RE.sub(" ", text).strip()


def truncate(value, max_length: int) -> str:
    text = str(value or "").strip()
    if len(text) > max_length:
        text = text[:max_length]
    return text


def meta_param(key: str, lang: str) -> str:
    return f"{key}_{lang}"


def fill_metadata(
    meta: Optional[dict],
    generators: dict,
    languages: Iterable[str],
    limits: dict,
) -> dict:
    """
    Заполняет мета-поля для каждого языка.

    meta       -- сохранённые значения вида {"title_ru": "...", "desc_ru": "...", ...}
    generators -- {key: callable(lang) -> str | None}
    limits     -- {key: max_length}

    Непустые значения остаются как есть, пустые генерируются и нормализуются.
    В конце каждое поле обрезается до своего лимита.
    """
    result = dict(meta) if isinstance(meta, dict) else {}
    for lang in languages:
        for key in META_KEYS:
            param = meta_param(key, lang)
            value = result.get(param)
            generator = generators.get(key)
            if not value and generator is not None:
                value = normalize_str(generator(lang))
            result[param] = truncate(value, limits[key])
    return result


_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


def fill_template(template: str, **values) -> str:
    """Подстановка {name} за один проход; неизвестные плейсхолдеры не трогаем."""
    return _PLACEHOLDER_RE.sub(
        lambda m: str(values[m.group(1)]) if m.group(1) in values else m.group(0),
        template or "",
    )
