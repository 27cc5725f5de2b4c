"""
CardKit Kernel — Composite archetypes

One entry point per preview widget. A render runs the pipeline in order:

  normalize → plan_slots → link_aria → resolve_element → create_element

and ends in exactly one of two outcomes: None (suppressed) or a root node
whose slots are wired from a single AriaLinkage.

Policy per archetype:
  ArticleCard      STRICT   (incomplete or undated articles are not shown)
  ArticleListItem  STRICT
  ArticleBase      PARTIAL  (whatever is present renders; cta needs it all)
"""

from __future__ import annotations

import logging
from collections.abc import Hashable, Mapping
from typing import Any

from cardkit.config import settings
from cardkit.kernel.aria import link_aria
from cardkit.kernel.dates import format_date_safely
from cardkit.kernel.elements import create_element, merge_attributes, resolve_element
from cardkit.kernel.identity import IdentityRegistry, debug_attributes, log_render
from cardkit.kernel.labels import LabelLookup, get_label
from cardkit.kernel.normalizer import DateFormatter, normalize
from cardkit.kernel.planner import DateCheck, is_suppressed, plan_slots
from cardkit.kernel.types import (
    CanonicalProjection,
    IdentityContext,
    Ref,
    RenderPlan,
    SlotPolicy,
    TagOrComponent,
)

logger = logging.getLogger(__name__)

# Default output tag per slot; callers override through `slot_tags`
SLOT_TAGS: dict[str, str] = {
    "title": "h2",
    "link": "a",
    "date": "time",
    "description": "p",
    "cta": "div",
}

# Root attributes owned by the linker; pass-through values are discarded
_LINKER_OWNED: dict[str, None] = {"aria-labelledby": None, "aria-describedby": None}


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def plan_composite(
    source_record: Any,
    identity: IdentityContext,
    *,
    policy: SlotPolicy,
    archetype: str = "Composite",
    default_tag: TagOrComponent = "div",
    explicit_tag: TagOrComponent | None = None,
    collection: str | None = None,
    date_formatter: DateFormatter | None = None,
    date_check: DateCheck | None = None,
    labels: LabelLookup | None = None,
) -> RenderPlan | None:
    """
    Run the decision half of the pipeline. Returns None when the composite
    is suppressed, otherwise a RenderPlan for any host engine.

    With a custom `date_formatter` and no `date_check`, a date counts as
    parseable when the formatter returns non-empty text for it.
    """
    if date_check is None and date_formatter is not None:
        date_check = formatter_date_check(date_formatter)

    projection = normalize(source_record, collection=collection, date_formatter=date_formatter)
    if not isinstance(projection, CanonicalProjection):
        if source_record is not None:
            _warn_invalid(archetype, source_record, labels)
        return None

    eligibility = plan_slots(projection, policy, date_check=date_check)
    if is_suppressed(eligibility, policy):
        if policy is SlotPolicy.STRICT:
            _warn_invalid(archetype, source_record, labels)
        return None

    return RenderPlan(
        archetype=archetype,
        tag=resolve_element(explicit_tag, default_tag),
        eligibility=eligibility,
        linkage=link_aria(identity.instance_id, eligibility),
        identity=identity,
        projection=projection,
    )


def formatter_date_check(date_formatter: DateFormatter) -> DateCheck:
    """Date check that agrees with `date_formatter`: parseable iff it formats to text."""

    def check(raw: Any) -> bool:
        return isinstance(raw, str) and bool(date_formatter(raw))

    return check


def emit(
    plan: RenderPlan,
    *,
    suffix: str,
    role: str | None = "article",
    labels: LabelLookup | None = None,
    slot_tags: Mapping[str, TagOrComponent] | None = None,
    ref: Ref | None = None,
    attributes: Mapping[str, Any] | None = None,
) -> Any:
    """
    Build the root node and its eligible slots from a plan.

    Root and slots both read ids from `plan.linkage`; pass-through attributes
    and `ref` go to the root whatever tag it resolved to.
    """
    lookup = labels or get_label
    tags = slot_tags or {}
    p = plan.projection
    eligible = plan.eligibility
    linkage = plan.linkage
    identity = plan.identity

    def slot(name: str, attrs: Mapping[str, Any], children: list[Any]) -> Any:
        return create_element(
            resolve_element(tags.get(name), SLOT_TAGS[name]),
            merge_attributes(linkage.slot_attributes(name), attrs, debug_attributes(identity, f"{suffix}-{name}")),
            children,
        )

    children: list[Any] = []

    if eligible.title:
        title: Any = p.title
        if eligible.link:
            title = slot("link", {"href": p.path_slug}, [p.title])
        children.append(slot("title", {}, [title]))

    if eligible.date:
        date_label = f"{lookup('articleDate')} {p.formatted_date}".strip()
        children.append(slot("date", {"datetime": p.date, "aria-label": date_label}, [p.formatted_date]))

    if eligible.description:
        children.append(slot("description", {}, [p.description]))

    if eligible.cta:
        cta_text = lookup("cta")
        cta_label = f"{cta_text}: {p.title or lookup('articleItem')}"
        link = create_element(
            resolve_element(tags.get("link"), SLOT_TAGS["link"]),
            {"href": p.path_slug, "aria-label": cta_label},
            [cta_text],
        )
        children.append(slot("cta", {}, [link]))

    root_attrs = merge_attributes(
        attributes,
        _LINKER_OWNED,
        {"role": role},
        linkage.root_attributes(),
        debug_attributes(identity, suffix),
    )
    return create_element(plan.tag, root_attrs, children, ref)


# ---------------------------------------------------------------------------
# Mounted composites
# ---------------------------------------------------------------------------


class Composite:
    """
    A mounted preview widget. The instance itself is the identity handle:
    its IdentityContext is registered in __init__ and reused on every render
    unless a render supplies a new explicit id or debug flag.
    """

    name = "Composite"
    suffix = "composite"
    policy = SlotPolicy.PARTIAL
    default_tag: TagOrComponent = "div"
    role: str | None = "article"

    def __init__(
        self,
        registry: IdentityRegistry,
        *,
        explicit_id: str | None = None,
        debug_mode: bool | None = None,
        memoized: bool = False,
        labels: LabelLookup | None = None,
        date_formatter: DateFormatter | None = None,
        date_check: DateCheck | None = None,
        collection: str | None = None,
    ) -> None:
        self.registry = registry
        self.memoized = memoized
        self.labels = labels or get_label
        self.date_formatter = date_formatter or format_date_safely
        self.date_check = date_check
        self.collection = collection
        self._memo: tuple[tuple[Any, ...], Ref | None, Any] | None = None
        registry.register(
            self.handle,
            explicit_id=explicit_id,
            debug_mode=settings.DEBUG_MODE if debug_mode is None else debug_mode,
        )

    @property
    def handle(self) -> Hashable:
        return self

    @property
    def identity(self) -> IdentityContext:
        return self.registry.resolve(self.handle)

    def plan(self, source_record: Any, *, as_: TagOrComponent | None = None) -> RenderPlan | None:
        return plan_composite(
            source_record,
            self.identity,
            policy=self.policy,
            archetype=self.name,
            default_tag=self.default_tag,
            explicit_tag=as_,
            collection=self.collection,
            date_formatter=self.date_formatter,
            date_check=self.date_check,
            labels=self.labels,
        )

    def render(
        self,
        source_record: Any,
        *,
        as_: TagOrComponent | None = None,
        slot_tags: Mapping[str, TagOrComponent] | None = None,
        ref: Ref | None = None,
        explicit_id: str | None = None,
        debug_mode: bool | None = None,
        attrs: Mapping[str, Any] | None = None,
        **attributes: Any,
    ) -> Any:
        """
        Render the widget for `source_record`. Returns None when suppressed.

        `explicit_id` and `debug_mode` update this instance's identity when
        given; a generated id stays stable otherwise. Pass-through attributes
        come from `attrs` (for names like "data-section" that are not valid
        keywords) and keyword arguments.
        """
        if explicit_id or debug_mode is not None:
            self.registry.update(self.handle, explicit_id=explicit_id, debug_mode=debug_mode)

        plan = self.plan(source_record, as_=as_)
        if plan is None:
            self._memo = None
            return None

        log_render(plan.identity, self.name)

        attributes = merge_attributes(attrs, attributes)
        key: tuple[Any, ...] | None = None
        if self.memoized:
            key = (plan, dict(slot_tags or {}), attributes)
            if self._memo is not None and self._memo[0] == key and self._memo[1] is ref:
                logger.debug("%s: reusing memoized render for %s", self.name, plan.identity.instance_id)
                return self._memo[2]

        node = emit(
            plan,
            suffix=self.suffix,
            role=self.role,
            labels=self.labels,
            slot_tags=slot_tags,
            ref=ref,
            attributes=attributes,
        )
        if key is not None:
            self._memo = (key, ref, node)
        return node

    def unmount(self) -> None:
        self._memo = None
        self.registry.release(self.handle)


class ArticleCard(Composite):
    """Article preview card. All-or-nothing: needs title, slug, a valid date and description."""

    name = "ArticleCard"
    suffix = "article-card"
    policy = SlotPolicy.STRICT
    default_tag = "div"


class ArticleBase(Composite):
    """Article card that renders whichever parts are present."""

    name = "ArticleBase"
    suffix = "article-base"
    policy = SlotPolicy.PARTIAL
    default_tag = "div"


class ArticleListItem(Composite):
    """Article entry for list pages. Same all-or-nothing rule as ArticleCard, rooted in <article>."""

    name = "ArticleListItem"
    suffix = "article-list-item"
    policy = SlotPolicy.STRICT
    default_tag = "article"


ARCHETYPES: dict[str, type[Composite]] = {
    "article_card": ArticleCard,
    "article_base": ArticleBase,
    "article_list_item": ArticleListItem,
}


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _warn_invalid(archetype: str, source_record: Any, labels: LabelLookup | None) -> None:
    lookup = labels or get_label
    logger.warning("%s: %s %r", archetype, lookup("invalidArticleData"), source_record)
