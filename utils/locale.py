"""Locale registry for the public site and the content API.

Provides:
- LOCALES / DEFAULT_LOCALE / LOCALE_PREFIX: the ordered locale set and prefix policy
- get_locale_mapping(): returns dict mapping locale codes to {cms, label}
- is_supported_locale(value): membership test against the registry
- cast_locale(value): default for missing values, passthrough otherwise

Unrecognized locale values are deliberately not rejected here; the document
store falls back to DEFAULT_LOCALE when it has no translation for them.
"""
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping, Optional

LOCALES = ("uk", "ru", "en")
DEFAULT_LOCALE = "uk"
LOCALE_PREFIX = "always"

_LOCALE_MAP = {
    "uk": {"cms": "uk", "label": "Українська"},
    "ru": {"cms": "ru", "label": "Русский"},
    "en": {"cms": "en", "label": "English"},
}


@lru_cache(maxsize=1)
def get_locale_mapping() -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({code: dict(_LOCALE_MAP[code]) for code in LOCALES})


def is_supported_locale(value: Optional[str]) -> bool:
    return value in LOCALES


def cast_locale(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_LOCALE
    return value


__all__ = [
    "LOCALES",
    "DEFAULT_LOCALE",
    "LOCALE_PREFIX",
    "get_locale_mapping",
    "is_supported_locale",
    "cast_locale",
]
