"""
CardKit Kernel — Accessibility linkage

Pure function: (instance_id, eligibility) → AriaLinkage

Slot ids are "{instance_id}-{slot}". The root's aria-labelledby and
aria-describedby are derived in the same step as the slot ids, so the root
can never point at an id that no slot carries.
"""

from __future__ import annotations

from cardkit.kernel.types import LINKED_SLOTS, AriaLinkage, SlotEligibility


def slot_element_id(instance_id: str, slot: str) -> str:
    return f"{instance_id}-{slot}"


def link_aria(instance_id: str, eligibility: SlotEligibility) -> AriaLinkage:
    """Build the id / cross-reference set for one render."""
    ids: dict[str, str | None] = {
        slot: slot_element_id(instance_id, slot) if getattr(eligibility, slot) else None
        for slot in LINKED_SLOTS
    }
    return AriaLinkage(
        root_labelled_by=ids["title"],
        root_described_by=ids["description"],
        title_id=ids["title"],
        description_id=ids["description"],
        date_id=ids["date"],
    )
