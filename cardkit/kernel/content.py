"""
CardKit Kernel — Content validation

Decides whether a value counts as present content. Every slot and every
composite asks this before it renders anything.
"""

from __future__ import annotations

from typing import Any


def is_renderable(value: Any) -> bool:
    """
    Return True if `value` is worth rendering.

      None                 → False
      str                  → True iff non-blank after trimming
      list / tuple         → True iff some element is itself renderable
      anything else        → True (mappings, numbers, bools, elements)

    Pure and total over all inputs.
    """
    if value is None:
        return False
    if isinstance(value, str):
        return len(value.strip()) > 0
    if isinstance(value, (list, tuple)):
        return any(is_renderable(item) for item in value)
    return True
