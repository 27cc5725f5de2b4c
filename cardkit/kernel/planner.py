"""
CardKit Kernel — Slot planner

Pure function: (projection, policy) → SlotEligibility

Two policies exist for the same "is this article good enough" question and
they disagree on purpose; each composite archetype picks one.

PARTIAL
  title, description   eligible when non-empty
  date                 eligible when the raw date string is present, even if
                       it does not parse (the eyebrow then shows blank text)
  link                 eligible when the trimmed slug is non-empty
  cta                  eligible only when all four above are

STRICT
  title, slug, description must be non-empty and date must parse.
  If any is missing every slot is ineligible and the composite is suppressed.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from cardkit.kernel.content import is_renderable
from cardkit.kernel.dates import is_parseable_date
from cardkit.kernel.types import (
    CanonicalProjection,
    NormalizeResult,
    SlotEligibility,
    SlotPolicy,
)

DateCheck = Callable[[Any], bool]


def plan_slots(
    projection: NormalizeResult,
    policy: SlotPolicy,
    *,
    date_check: DateCheck | None = None,
) -> SlotEligibility:
    """
    Decide which slots may render. A SUPPRESSED projection plans nothing.

    `date_check` decides whether a date parses under the STRICT policy;
    it defaults to the ISO parser from cardkit.kernel.dates.
    """
    if not isinstance(projection, CanonicalProjection):
        return SlotEligibility.none()

    if policy is SlotPolicy.STRICT:
        return _plan_strict(projection, date_check or is_parseable_date)
    if policy is SlotPolicy.PARTIAL:
        return _plan_partial(projection)
    raise ValueError(f"Unknown slot policy: {policy!r}")


def is_suppressed(eligibility: SlotEligibility, policy: SlotPolicy) -> bool:
    """
    Whether a composite planned with `policy` renders nothing at all.

    STRICT composites render all-or-nothing, so they are suppressed unless the
    cta made it. PARTIAL composites are suppressed only when no content slot
    survived; the link alone has nothing to wrap.
    """
    if policy is SlotPolicy.STRICT:
        return not eligibility.cta
    return not (eligibility.title or eligibility.date or eligibility.description)


# ---------------------------------------------------------------------------
# Policies
# ---------------------------------------------------------------------------


def _plan_partial(projection: CanonicalProjection) -> SlotEligibility:
    title = is_renderable(projection.title)
    link = is_renderable(projection.slug)
    date = is_renderable(projection.date)
    description = is_renderable(projection.description)
    return SlotEligibility(
        title=title,
        link=link,
        date=date,
        description=description,
        cta=title and link and date and description,
    )


def _plan_strict(projection: CanonicalProjection, date_check: DateCheck) -> SlotEligibility:
    complete = (
        is_renderable(projection.title)
        and is_renderable(projection.slug)
        and is_renderable(projection.date)
        and date_check(projection.date)
        and is_renderable(projection.description)
    )
    if not complete:
        return SlotEligibility.none()
    return SlotEligibility(title=True, link=True, date=True, description=True, cta=True)
