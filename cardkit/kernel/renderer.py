"""
CardKit Kernel — HTML host engine

Pure function: render_html(node) → HTML string
No IO. Deterministic: same node → same output, always. Attributes render in
insertion order; None children are skipped.

HtmlHost is the default host around the kernel: it owns the identity
registry, mounts composites with a stable handle, and serializes what they
return. Callers with their own engine can use plan_composite() and
create_element() directly instead.
"""

from __future__ import annotations

import logging
import re
from html import escape as _html_escape
from typing import Any

import chevron

from cardkit.kernel.composites import ARCHETYPES, Composite
from cardkit.kernel.dates import format_date_safely
from cardkit.kernel.identity import IdentityRegistry
from cardkit.kernel.labels import LabelLookup, get_label, make_lookup
from cardkit.kernel.normalizer import DateFormatter
from cardkit.kernel.planner import DateCheck
from cardkit.kernel.types import Element

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------

_ATTRS = '{{#attributes}} {{name}}="{{value}}"{{/attributes}}'
ELEMENT_TEMPLATE = "<{{tag}}" + _ATTRS + ">{{{content}}}</{{tag}}>"
VOID_TEMPLATE = "<{{tag}}" + _ATTRS + ">"

VOID_TAGS: set[str] = {"area", "br", "col", "hr", "img", "input", "link", "meta", "source", "wbr"}

_TAG_RE = re.compile(r"^[A-Za-z][A-Za-z0-9-]*$")
_ATTR_NAME_RE = re.compile(r"^[^\s\"'>/=]+$")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_html(node: Any) -> str:
    """
    Serialize a node (Element, text, list of nodes, or None) to HTML.
    Text is escaped; attribute values are escaped by the template.
    """
    if node is None:
        return ""
    if isinstance(node, Element):
        return _render_element(node)
    if isinstance(node, (list, tuple)):
        return "".join(render_html(child) for child in node)
    return escape(node)


def escape(text: Any) -> str:
    """HTML-escape user content."""
    return _html_escape(str(text), quote=True)


class HtmlHost:
    """
    Default host engine. Owns one IdentityRegistry for everything it mounts.

        host = HtmlHost()
        card = host.mount("article_card", debug_mode=True)
        html = host.render_to_string(card, record)
        host.unmount(card)
    """

    def __init__(
        self,
        registry: IdentityRegistry | None = None,
        *,
        labels: LabelLookup | None = None,
        date_formatter: DateFormatter | None = None,
        date_check: DateCheck | None = None,
        collection: str | None = None,
        locale: str | None = None,
    ) -> None:
        self.registry = registry if registry is not None else IdentityRegistry()
        self.labels = labels or (make_lookup(locale) if locale else get_label)
        self.date_formatter = date_formatter or format_date_safely
        self.date_check = date_check
        self.collection = collection

    def mount(
        self,
        archetype: str | type[Composite],
        *,
        explicit_id: str | None = None,
        debug_mode: bool | None = None,
        memoized: bool = False,
    ) -> Composite:
        """Construct a composite instance; its identity is created here, once."""
        if isinstance(archetype, str):
            try:
                composite_cls = ARCHETYPES[archetype]
            except KeyError:
                raise ValueError(f"Unknown archetype: {archetype!r}") from None
        else:
            composite_cls = archetype
        return composite_cls(
            self.registry,
            explicit_id=explicit_id,
            debug_mode=debug_mode,
            memoized=memoized,
            labels=self.labels,
            date_formatter=self.date_formatter,
            date_check=self.date_check,
            collection=self.collection,
        )

    def unmount(self, composite: Composite) -> None:
        composite.unmount()

    def render_to_string(self, composite: Composite, source_record: Any, **kwargs: Any) -> str:
        """Render a mounted composite and serialize it. Suppressed → ""."""
        return render_html(composite.render(source_record, **kwargs))


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _render_element(element: Element) -> str:
    if not _TAG_RE.match(element.tag):
        raise ValueError(f"Invalid element tag: {element.tag!r}")

    context = {
        "tag": element.tag,
        "attributes": _attribute_context(element.attributes),
        "content": "".join(render_html(child) for child in element.children),
    }
    if element.tag.lower() in VOID_TAGS:
        if element.children:
            logger.warning("render_html: dropping children of void element <%s>", element.tag)
        return chevron.render(VOID_TEMPLATE, context)
    return chevron.render(ELEMENT_TEMPLATE, context)


def _attribute_context(attributes: dict[str, Any]) -> list[dict[str, str]]:
    items = []
    for name, value in attributes.items():
        if value is None:
            continue
        if not _ATTR_NAME_RE.match(name):
            logger.warning("render_html: skipping invalid attribute name %r", name)
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        items.append({"name": name, "value": str(value)})
    return items
