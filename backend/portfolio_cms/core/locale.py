"""Locale resolution for localized content.

Content is stored in one of two layouts:

- flattened columns / keys: ``title_en``, ``title_ru``, ``title_uz``
- a ``locales`` collection of translation rows, each with a ``locale``
  attribute and the field attributes (``title``, ``description``)

``resolve`` hides the difference. It is pure and never raises for an
unknown locale; it falls back to English instead.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from portfolio_cms.config import settings

SUPPORTED_LOCALES: tuple[str, ...] = tuple(settings.supported_locales)
DEFAULT_LOCALE: str = settings.default_locale


def is_supported_locale(value: str | None) -> bool:
    """Check whether ``value`` is one of the supported locale codes."""
    return value in SUPPORTED_LOCALES


def normalize_locale(value: str | None) -> str:
    """Return ``value`` if supported, otherwise the default locale."""
    if value and value.lower() in SUPPORTED_LOCALES:
        return value.lower()
    return DEFAULT_LOCALE


def _lookup(record: Any, field: str, locale: str) -> str | None:
    """Find the raw value of ``field`` for ``locale`` in either layout."""
    if isinstance(record, Mapping):
        return record.get(f"{field}_{locale}")

    translations = getattr(record, "locales", None)
    if translations is not None:
        for translation in translations:
            if getattr(translation, "locale", None) == locale:
                return getattr(translation, field, None)
        return None

    return getattr(record, f"{field}_{locale}", None)


def resolve(record: Any, field: str, locale: str | None) -> str:
    """Return the best available localized value of ``field``.

    The requested locale wins when its value is non-empty; otherwise the
    English value is returned, or ``""`` when that is missing too.

    Example:
        >>> resolve({"title_en": "Portfolio", "title_ru": ""}, "title", "ru")
        'Portfolio'
    """
    locale = normalize_locale(locale)

    if locale != DEFAULT_LOCALE:
        value = _lookup(record, field, locale)
        if value:
            return value

    return _lookup(record, field, DEFAULT_LOCALE) or ""


def resolve_many(record: Any, fields: Iterable[str], locale: str | None) -> dict[str, str]:
    """Resolve several fields at once, keyed by base field name."""
    return {field: resolve(record, field, locale) for field in fields}


def negotiate_locale(accept_language: str | None) -> str | None:
    """Pick the first supported locale from an Accept-Language header.

    Quality values are honoured; region subtags are ignored
    (``ru-RU`` matches ``ru``). Returns ``None`` when nothing matches.
    """
    if not accept_language:
        return None

    candidates: list[tuple[float, int, str]] = []
    for position, part in enumerate(accept_language.split(",")):
        piece = part.strip()
        if not piece:
            continue

        tag, _, params = piece.partition(";")
        quality = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                quality = float(params[2:])
            except ValueError:
                quality = 0.0

        language = tag.strip().split("-")[0].lower()
        if language in SUPPORTED_LOCALES and quality > 0:
            candidates.append((-quality, position, language))

    if not candidates:
        return None

    candidates.sort()
    return candidates[0][2]
