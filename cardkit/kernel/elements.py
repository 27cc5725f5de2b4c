"""
CardKit Kernel — Element resolution

Single dispatch point for the "as" override. Every composite root and slot
resolves its output tag here, and every element is created through
create_element so the caller's ref and pass-through attributes reach the
output no matter which tag was chosen.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from cardkit.kernel.types import Element, Ref, TagOrComponent


def resolve_element(explicit_tag: TagOrComponent | None, default_tag: TagOrComponent) -> TagOrComponent:
    """Return `explicit_tag` when supplied, else `default_tag`."""
    if explicit_tag is None or explicit_tag == "":
        return default_tag
    return explicit_tag


def create_element(
    tag: TagOrComponent,
    attributes: Mapping[str, Any] | None = None,
    children: Iterable[Any] = (),
    ref: Ref | None = None,
) -> Any:
    """
    Build a node for `tag`.

    A tag string produces an Element and points `ref.current` at it.
    A component is called as component(attributes, children, ref) with the
    attributes and ref forwarded verbatim; what it returns is the node.
    """
    attrs = dict(attributes or {})
    kids = [child for child in children if child is not None]

    if isinstance(tag, str):
        if not tag.strip():
            raise TypeError("Element tag must be a non-empty string or a component")
        element = Element(tag=tag, attributes=attrs, children=kids)
        if ref is not None:
            ref.current = element
        return element

    if callable(tag):
        return tag(attrs, kids, ref)

    raise TypeError(f"Element tag must be a non-empty string or a component, got {type(tag).__name__}")


def merge_attributes(*sources: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Merge attribute dicts left to right. A None value removes the attribute,
    so an omitted cross-reference never shows up as an empty string.
    """
    merged: dict[str, Any] = {}
    for source in sources:
        if not source:
            continue
        for name, value in source.items():
            if value is None:
                merged.pop(name, None)
            else:
                merged[name] = value
    return merged
