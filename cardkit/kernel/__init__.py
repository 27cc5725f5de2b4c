"""
CardKit Kernel — the pure pipeline.

  content     — is_renderable: does a value count as present content
  normalizer  — source record → CanonicalProjection | SUPPRESSED
  planner     — projection + policy → SlotEligibility
  aria        — instance id + eligibility → AriaLinkage
  identity    — IdentityRegistry: per-instance ids, debug attributes
  elements    — "as" resolution and element creation
  composites  — ArticleCard, ArticleBase, ArticleListItem
  renderer    — HtmlHost and render_html
"""

from cardkit.kernel.aria import link_aria
from cardkit.kernel.composites import (
    ARCHETYPES,
    ArticleBase,
    ArticleCard,
    ArticleListItem,
    Composite,
    emit,
    plan_composite,
)
from cardkit.kernel.content import is_renderable
from cardkit.kernel.elements import create_element, resolve_element
from cardkit.kernel.identity import IdentityRegistry, debug_attributes
from cardkit.kernel.normalizer import decode_path_slug, normalize
from cardkit.kernel.planner import is_suppressed, plan_slots
from cardkit.kernel.renderer import HtmlHost, render_html
from cardkit.kernel.types import (
    SUPPRESSED,
    AriaLinkage,
    CanonicalProjection,
    Element,
    IdentityContext,
    Ref,
    RenderPlan,
    SlotEligibility,
    SlotPolicy,
)

__all__ = [
    "is_renderable",
    "normalize",
    "decode_path_slug",
    "plan_slots",
    "is_suppressed",
    "link_aria",
    "IdentityRegistry",
    "debug_attributes",
    "resolve_element",
    "create_element",
    "plan_composite",
    "emit",
    "Composite",
    "ArticleCard",
    "ArticleBase",
    "ArticleListItem",
    "ARCHETYPES",
    "HtmlHost",
    "render_html",
    "SUPPRESSED",
    "CanonicalProjection",
    "SlotEligibility",
    "SlotPolicy",
    "AriaLinkage",
    "IdentityContext",
    "RenderPlan",
    "Element",
    "Ref",
]
