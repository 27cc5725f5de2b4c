"""
CardKit Kernel — Label lookup

Translation lookup for the few strings composites emit themselves (CTA text,
date prefix). A miss falls back to the key.
"""

from __future__ import annotations

from collections.abc import Callable

from cardkit.config import settings

LabelLookup = Callable[[str], str]

CATALOGS: dict[str, dict[str, str]] = {
    "en": {
        "cta": "Read article",
        "articleDate": "Published on",
        "articleItem": "Article",
        "invalidArticleData": "Invalid article data",
    },
}


def get_label(key: str, locale: str | None = None) -> str:
    """Look up `key` in the catalog for `locale` (settings.LOCALE by default)."""
    catalog = CATALOGS.get(locale or settings.LOCALE) or CATALOGS["en"]
    return catalog.get(key, key)


def make_lookup(locale: str) -> LabelLookup:
    """Bind a locale so the result matches the (key) -> str collaborator shape."""

    def lookup(key: str) -> str:
        return get_label(key, locale)

    return lookup
