"""
CardKit configuration — all environment variables in one place.

Read from environment at import time. Nothing here is required; every
setting has a default suitable for the site.
"""

from __future__ import annotations

import os


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """Library settings from environment variables."""

    # Routing — article links are built as /{collection}/{encoded slug}
    ARTICLES_COLLECTION: str = os.environ.get("CARDKIT_ARTICLES_COLLECTION", "articles")

    # Identity
    ID_PREFIX: str = os.environ.get("CARDKIT_ID_PREFIX", "ck")
    DEBUG_MODE: bool = _env_flag("CARDKIT_DEBUG")

    # Labels
    LOCALE: str = os.environ.get("CARDKIT_LOCALE", "en")


# Singleton instance
settings = Settings()
