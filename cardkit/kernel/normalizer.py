"""
CardKit Kernel — Field normalizer

Pure function: (source record) → CanonicalProjection | SUPPRESSED
No IO. Never raises for malformed content.

The source record may be anything: None, a bare string, a dict with some
fields missing or wrongly typed, a pydantic model, or an earlier projection.
Intake goes through a lenient pydantic model whose before-validators turn
wrongly-typed fields into "absent", then every field is trimmed.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import quote, unquote

from pydantic import BaseModel, field_validator

from cardkit.config import settings
from cardkit.kernel.content import is_renderable
from cardkit.kernel.dates import format_date_safely
from cardkit.kernel.types import (
    RECORD_FIELDS,
    SUPPRESSED,
    CanonicalProjection,
    NormalizeResult,
)

DateFormatter = Callable[[str], str]


# ---------------------------------------------------------------------------
# Intake model
# ---------------------------------------------------------------------------


class SourceRecord(BaseModel):
    """Loosely-shaped article record as it arrives from content queries."""

    model_config = {"extra": "ignore", "frozen": True}

    title: str | None = None
    description: str | None = None
    date: str | None = None
    slug: str | None = None
    image: str | None = None
    tags: list[str] | None = None

    @field_validator("title", "description", "date", "slug", "image", mode="before")
    @classmethod
    def _text_or_none(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_strings(cls, value: Any) -> list[str] | None:
        # a bare string is not a tag sequence
        if not isinstance(value, (list, tuple)):
            return None
        return [item for item in value if isinstance(item, str)]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def build_route(collection: str, encoded_slug: str) -> str:
    """Route template: /{collection}/{encoded slug}."""
    return f"/{collection.strip('/')}/{encoded_slug}"


def encode_path_slug(slug: str, collection: str | None = None) -> str | None:
    """Route path for a trimmed slug, or None if the slug is empty."""
    trimmed = slug.strip()
    if not trimmed:
        return None
    return build_route(collection or settings.ARTICLES_COLLECTION, quote(trimmed, safe=""))


def decode_path_slug(path_slug: str, collection: str | None = None) -> str:
    """
    Inverse of encode_path_slug: percent-decode the segment after the route
    prefix. Raises ValueError if `path_slug` is not under that prefix.
    """
    prefix = build_route(collection or settings.ARTICLES_COLLECTION, "")
    if not path_slug.startswith(prefix):
        raise ValueError(f"{path_slug!r} is not under {prefix!r}")
    return unquote(path_slug[len(prefix) :])


def normalize(
    record: Any,
    *,
    collection: str | None = None,
    date_formatter: DateFormatter | None = None,
) -> NormalizeResult:
    """
    Turn a source record into a CanonicalProjection, or SUPPRESSED if the
    record is absent or not record-shaped.

    Idempotent: normalize(normalize(r)) == normalize(r).
    """
    intake = _intake(record)
    if intake is None:
        return SUPPRESSED

    formatter = date_formatter or format_date_safely

    title = _trim(intake.title)
    description = _trim(intake.description)
    raw_date = _trim(intake.date)
    slug = _trim(intake.slug)
    image = _trim(intake.image)

    return CanonicalProjection(
        title=title,
        description=description,
        date=raw_date or None,
        formatted_date=formatter(raw_date) if raw_date else "",
        slug=slug,
        path_slug=encode_path_slug(slug, collection),
        tags=tuple(tag.strip() for tag in intake.tags or () if is_renderable(tag)),
        image=image or None,
    )


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _trim(value: str | None) -> str:
    return value.strip() if value else ""


def _intake(record: Any) -> SourceRecord | None:
    """Validate any record-shaped value into a SourceRecord; None otherwise."""
    if record is None or isinstance(record, (str, bytes, bytearray, int, float, bool, list, tuple, set)):
        return None
    if isinstance(record, SourceRecord):
        return record
    if isinstance(record, CanonicalProjection):
        return SourceRecord.model_validate(
            {
                "title": record.title,
                "description": record.description,
                "date": record.date,
                "slug": record.slug,
                "image": record.image,
                "tags": list(record.tags),
            }
        )
    if isinstance(record, Mapping):
        return SourceRecord.model_validate({key: record[key] for key in RECORD_FIELDS if key in record})
    if isinstance(record, BaseModel):
        return SourceRecord.model_validate(record.model_dump())
    fields = {key: getattr(record, key) for key in RECORD_FIELDS if hasattr(record, key)}
    if not fields:
        return None
    return SourceRecord.model_validate(fields)
