"""
CardKit Kernel — Shared Types

Data classes used across normalizer, planner, aria linker, identity and
the composite archetypes. These are the contracts that bind the kernel
together.

Key contracts:
- `normalize()` returns CanonicalProjection or the SUPPRESSED marker, never a
  half-validated record
- SlotEligibility: `cta` is only ever true when every other slot is
- AriaLinkage: a root reference is only ever emitted alongside the slot id it
  points at; both ends read from the same value
- IdentityContext is created once per mounted instance and never rebuilt
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Regex patterns
# ---------------------------------------------------------------------------

# Safe characters for ids that end up in data attributes and id references
SAFE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
UNSAFE_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


# ---------------------------------------------------------------------------
# Slot registry
# ---------------------------------------------------------------------------

SLOT_NAMES: tuple[str, ...] = ("title", "link", "date", "description", "cta")

# Slots that carry an id and can be the target of a root cross-reference
LINKED_SLOTS: tuple[str, ...] = ("title", "description", "date")

RECORD_FIELDS: tuple[str, ...] = ("title", "description", "date", "slug", "image", "tags")


class SlotPolicy(str, Enum):
    """How a composite treats a record with incomplete data."""

    PARTIAL = "partial"  # each slot decides for itself
    STRICT = "strict"  # any missing required field suppresses the composite


# ---------------------------------------------------------------------------
# Normalizer output
# ---------------------------------------------------------------------------


class Suppressed:
    """Marker for "nothing to render". Use the SUPPRESSED singleton."""

    _instance: Suppressed | None = None

    def __new__(cls) -> Suppressed:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "SUPPRESSED"


SUPPRESSED = Suppressed()


@dataclass(frozen=True)
class CanonicalProjection:
    """
    Trimmed, canonical view of a source record.

    All strings are whitespace-trimmed. `path_slug` is None or the route
    prefix followed by the percent-encoded slug. `date` is None when the
    trimmed date is empty; `formatted_date` is "" when it does not parse.
    """

    title: str = ""
    description: str = ""
    date: str | None = None
    formatted_date: str = ""
    slug: str = ""
    path_slug: str | None = None
    tags: tuple[str, ...] = ()
    image: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "date": self.date,
            "formatted_date": self.formatted_date,
            "slug": self.slug,
            "path_slug": self.path_slug,
            "tags": list(self.tags),
            "image": self.image,
        }


NormalizeResult = CanonicalProjection | Suppressed


# ---------------------------------------------------------------------------
# Planner output
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SlotEligibility:
    """Which optional sub-parts of a composite may render."""

    title: bool = False
    link: bool = False
    date: bool = False
    description: bool = False
    cta: bool = False

    def __post_init__(self) -> None:
        if self.cta and not (self.title and self.link and self.date and self.description):
            raise ValueError("cta requires title, link, date and description to be eligible")

    @classmethod
    def none(cls) -> SlotEligibility:
        return cls()

    def any(self) -> bool:
        return self.title or self.link or self.date or self.description or self.cta

    def to_dict(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in SLOT_NAMES}


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class IdentityContext:
    """Per-instance diagnostic identity. Owned by exactly one mounted composite."""

    instance_id: str
    debug_mode: bool = False


# ---------------------------------------------------------------------------
# Accessibility linkage
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AriaLinkage:
    """
    Element ids and root cross-references for one render.

    Build with `link_aria()`. Root references must equal the slot id they
    point at; anything else is rejected here so a dangling reference cannot
    be represented.
    """

    root_labelled_by: str | None = None
    root_described_by: str | None = None
    title_id: str | None = None
    description_id: str | None = None
    date_id: str | None = None

    def __post_init__(self) -> None:
        if self.root_labelled_by is not None and self.root_labelled_by != self.title_id:
            raise ValueError(f"aria-labelledby {self.root_labelled_by!r} has no matching title id")
        if self.root_described_by is not None and self.root_described_by != self.description_id:
            raise ValueError(f"aria-describedby {self.root_described_by!r} has no matching description id")

    def root_attributes(self) -> dict[str, str]:
        """Cross-reference attributes for the composite root. Absent refs are omitted."""
        attrs: dict[str, str] = {}
        if self.root_labelled_by is not None:
            attrs["aria-labelledby"] = self.root_labelled_by
        if self.root_described_by is not None:
            attrs["aria-describedby"] = self.root_described_by
        return attrs

    def slot_id(self, slot: str) -> str | None:
        if slot not in LINKED_SLOTS:
            return None
        return getattr(self, f"{slot}_id")

    def slot_attributes(self, slot: str) -> dict[str, str]:
        """`id` attribute for a slot element, or {} when the slot carries none."""
        slot_id = self.slot_id(slot)
        return {"id": slot_id} if slot_id is not None else {}


# ---------------------------------------------------------------------------
# Host engine nodes
# ---------------------------------------------------------------------------


class Ref:
    """Caller-owned instance handle. The engine points `current` at the output node."""

    def __init__(self) -> None:
        self.current: Any = None

    def __repr__(self) -> str:
        return f"Ref(current={self.current!r})"


@dataclass
class Element:
    """A host-engine node: tag, attributes, children."""

    tag: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[Any] = field(default_factory=list)

    def get(self, name: str, default: Any = None) -> Any:
        return self.attributes.get(name, default)

    def find(self, predicate: Callable[[Element], bool]) -> Element | None:
        """Depth-first search of this subtree (self included)."""
        if predicate(self):
            return self
        for child in self.children:
            if isinstance(child, Element):
                found = child.find(predicate)
                if found is not None:
                    return found
        return None

    def find_by_id(self, element_id: str) -> Element | None:
        return self.find(lambda el: el.attributes.get("id") == element_id)

    def text(self) -> str:
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text())
            elif child is not None:
                parts.append(str(child))
        return "".join(parts)


# A component is anything the engine can call in place of a tag string:
#   component(attributes, children, ref) -> node
Component = Callable[[dict[str, Any], list[Any], Ref | None], Any]
TagOrComponent = str | Component


@dataclass(frozen=True)
class RenderPlan:
    """The emit outcome of the pipeline: everything the engine needs, fully decided."""

    archetype: str
    tag: Any  # TagOrComponent
    eligibility: SlotEligibility
    linkage: AriaLinkage
    identity: IdentityContext
    projection: CanonicalProjection


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_safe_id(value: str) -> bool:
    """Check if a string is usable verbatim in id / data attributes."""
    return bool(SAFE_ID_PATTERN.match(value))


def sanitize_id(value: str) -> str:
    """Strip characters that are not allowed in generated ids."""
    return UNSAFE_ID_CHARS.sub("", value)
