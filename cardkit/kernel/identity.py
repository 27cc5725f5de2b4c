"""
CardKit Kernel — Instance identity

Per-instance diagnostic ids. The host framework hands each mounted composite
a stable handle; the registry creates that instance's IdentityContext once,
at construction, and returns the same context on every re-render until the
handle is released. A generated id never changes; an explicit id supplied on
a later render replaces it through update().

The registry is an ordinary object owned by the host. There is no
module-level counter or cache.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Hashable

from cardkit.config import settings
from cardkit.kernel.types import IdentityContext, is_safe_id, sanitize_id

logger = logging.getLogger(__name__)


class IdentityRegistry:
    """
    Handle → IdentityContext cache.

    Usage:
        registry = IdentityRegistry()
        ctx = registry.register(handle)            # at construction
        ctx = registry.resolve(handle)             # on each render
        ctx = registry.update(handle, explicit_id) # per-render overrides
        registry.release(handle)                   # on unmount
    """

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = sanitize_id(prefix if prefix is not None else settings.ID_PREFIX)
        self._contexts: dict[Hashable, IdentityContext] = {}
        self._generated: set[str] = set()

    def register(
        self,
        handle: Hashable,
        explicit_id: str | None = None,
        debug_mode: bool = False,
    ) -> IdentityContext:
        """
        Create the identity for `handle`. Registering a handle twice returns
        the context created the first time.
        """
        existing = self._contexts.get(handle)
        if existing is not None:
            return existing

        instance_id = explicit_id if explicit_id else self._generate_id()
        ctx = IdentityContext(instance_id=instance_id, debug_mode=bool(debug_mode))
        self._contexts[handle] = ctx
        return ctx

    def update(
        self,
        handle: Hashable,
        explicit_id: str | None = None,
        debug_mode: bool | None = None,
    ) -> IdentityContext:
        """
        Apply per-render identity inputs to a registered handle.

        A supplied explicit id replaces the current id; without one the
        current id (generated or explicit) is kept. Returns the existing
        context unchanged when nothing differs.
        """
        current = self.resolve(handle)
        instance_id = explicit_id if explicit_id else current.instance_id
        debug = current.debug_mode if debug_mode is None else bool(debug_mode)
        if instance_id == current.instance_id and debug == current.debug_mode:
            return current

        if instance_id != current.instance_id:
            self._generated.discard(current.instance_id)
        ctx = IdentityContext(instance_id=instance_id, debug_mode=debug)
        self._contexts[handle] = ctx
        return ctx

    def resolve(self, handle: Hashable) -> IdentityContext:
        """Return the context created at registration. KeyError if never registered."""
        try:
            return self._contexts[handle]
        except KeyError:
            raise KeyError(f"No identity registered for handle {handle!r}") from None

    def release(self, handle: Hashable) -> None:
        ctx = self._contexts.pop(handle, None)
        if ctx is not None:
            self._generated.discard(ctx.instance_id)

    def __contains__(self, handle: object) -> bool:
        return handle in self._contexts

    def __len__(self) -> int:
        return len(self._contexts)

    def _generate_id(self) -> str:
        while True:
            candidate = f"{self.prefix}-{uuid.uuid4().hex[:12]}" if self.prefix else uuid.uuid4().hex[:12]
            if candidate not in self._generated:
                self._generated.add(candidate)
                return candidate


# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------


def debug_attributes(identity: IdentityContext, suffix: str) -> dict[str, str]:
    """
    Data attributes for inspection tooling. Empty unless debug mode is on.

    data-testid is "{id}-{suffix}-root" and is skipped when either part has
    characters outside [A-Za-z0-9_-].
    """
    if not identity.debug_mode:
        return {}

    attrs = {"data-instance-id": identity.instance_id}
    instance_id = identity.instance_id.strip()
    suffix = suffix.strip()
    if is_safe_id(instance_id) and is_safe_id(suffix):
        attrs["data-testid"] = f"{instance_id}-{suffix}-root"
    else:
        logger.debug("debug_attributes: skipping data-testid for id=%r suffix=%r", instance_id, suffix)
    attrs["data-debug-mode"] = "true"
    return attrs


def log_render(identity: IdentityContext, component_name: str) -> None:
    """Debug-mode render trace."""
    if identity.debug_mode:
        logger.info("%s rendered with ID: %s", component_name, identity.instance_id)
