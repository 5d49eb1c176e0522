"""Rule library — the fifteen pre-press risk predicates.

Every rule is a pure predicate over a single node. Rules are filtered by
node kind before the predicate runs, so a predicate only ever sees the
kinds it declares. The same library serves the main traversal and the
symbol-definition scan; callers inject what happens on a hit through a
sink callable.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING

from artpreflight.engine.geometry import aspect_ratio, safe_bounds
from artpreflight.scene.models import ColorSpace, FillKind, Node, NodeKind

if TYPE_CHECKING:
    from artpreflight.config import RuleThresholds

logger = logging.getLogger(__name__)

# (rule_id, node, description) -> None
RuleSink = Callable[[int, Node, str], None]


@dataclass(frozen=True)
class Rule:
    """A single catalogue entry."""

    id: int
    label: str
    fix: str
    check: Callable[[Node, RuleThresholds], bool]
    kinds: frozenset[NodeKind] | None = None

    def applies_to(self, node: Node) -> bool:
        return self.kinds is None or node.kind in self.kinds


def is_link_missing(node: Node) -> bool:
    """Whether a placed image's source file is gone. Unknown means missing."""
    try:
        return not node.link_exists()
    except (OSError, AttributeError, ValueError) as e:
        logger.debug("Link lookup failed for %r: %s", node.name, e)
        return True


def has_stroke_appearance(group: Node, thresholds: RuleThresholds) -> bool:
    """A group stroke drawn by an appearance rather than by a stroked child.

    Only direct children are inspected for their own stroke.
    """
    if not group.stroked or group.stroke_width <= 0:
        return False
    if any(c.stroked and c.stroke_width > 0 for c in group.children):
        return False
    visible = safe_bounds(group, thresholds.degenerate_epsilon)
    structural = group.bounds
    sw = structural.width if structural else 0.0
    sh = structural.height if structural else 0.0
    diff = abs(sw - visible.width) + abs(sh - visible.height)
    return diff > thresholds.bounds_diff_pt


def _is_long_thin(node: Node, thresholds: RuleThresholds) -> bool:
    if not node.closed:
        return False
    ratio = aspect_ratio(safe_bounds(node, thresholds.degenerate_epsilon))
    return ratio is not None and ratio > thresholds.max_aspect_ratio


def _is_empty(node: Node, thresholds: RuleThresholds) -> bool:
    return node.point_count <= 1 or (not node.filled and not node.stroked)


def _always(node: Node, thresholds: RuleThresholds) -> bool:
    return True


def _open_filled(node: Node, thresholds: RuleThresholds) -> bool:
    return not node.stroked and node.filled and not node.closed


def _hairline(node: Node, thresholds: RuleThresholds) -> bool:
    return node.stroked and node.stroke_width < thresholds.min_line_pt


def _stroke_without_fill(node: Node, thresholds: RuleThresholds) -> bool:
    return not node.filled and node.stroked


def _open_stroked(node: Node, thresholds: RuleThresholds) -> bool:
    return node.stroked and not node.closed


def _has_text(node: Node, thresholds: RuleThresholds) -> bool:
    return bool(node.text)


def _link_missing(node: Node, thresholds: RuleThresholds) -> bool:
    return is_link_missing(node)


def _rgb_image(node: Node, thresholds: RuleThresholds) -> bool:
    return not is_link_missing(node) and node.color_space == ColorSpace.RGB


def _has_effects(node: Node, thresholds: RuleThresholds) -> bool:
    return node.effects_count > 0


def _translucent(node: Node, thresholds: RuleThresholds) -> bool:
    return node.opacity < 100


def _pattern_fill(node: Node, thresholds: RuleThresholds) -> bool:
    return node.filled and node.fill_kind == FillKind.PATTERN


_PATH = frozenset({NodeKind.PATH})
_IMAGE = frozenset({NodeKind.PLACED_IMAGE})

RULES: tuple[Rule, ...] = (
    Rule(
        id=1,
        label="Unexpanded blend",
        fix="Expand the blend",
        check=_always,
        kinds=frozenset({NodeKind.BLEND}),
    ),
    Rule(
        id=2,
        label="Symbol / graph / plugin object",
        fix="Expand the symbol",
        check=_always,
        kinds=frozenset({NodeKind.SYMBOL_INSTANCE, NodeKind.GRAPH, NodeKind.PLUGIN}),
    ),
    Rule(
        id=3,
        label="Open filled path",
        fix="Close the filled path",
        check=_open_filled,
        kinds=_PATH,
    ),
    Rule(
        id=4,
        label="Long thin closed path",
        fix="Check the aspect ratio",
        check=_is_long_thin,
        kinds=_PATH,
    ),
    Rule(
        id=5,
        label="Appearance stroke group",
        fix="Expand the appearance",
        check=has_stroke_appearance,
        kinds=frozenset({NodeKind.GROUP}),
    ),
    Rule(
        id=6,
        label="Hairline stroke",
        fix="Increase the stroke to 0.12 mm or more",
        check=_hairline,
        kinds=_PATH,
    ),
    Rule(
        id=7,
        label="Stroke without fill",
        fix="Add a fill",
        check=_stroke_without_fill,
        kinds=_PATH,
    ),
    Rule(
        id=8,
        label="Open stroked path",
        fix="Close the path",
        check=_open_stroked,
        kinds=_PATH,
    ),
    Rule(
        id=9,
        label="Live text",
        fix="Convert text to outlines",
        check=_has_text,
        kinds=frozenset({NodeKind.TEXT_FRAME}),
    ),
    Rule(
        id=10,
        label="Missing image link",
        fix="Relink the image",
        check=_link_missing,
        kinds=_IMAGE,
    ),
    Rule(
        id=11,
        label="RGB image",
        fix="Convert the image to CMYK",
        check=_rgb_image,
        kinds=_IMAGE,
    ),
    Rule(
        id=12,
        label="Live appearance effect",
        fix="Expand the effect",
        check=_has_effects,
    ),
    Rule(
        id=13,
        label="Transparency",
        fix="Set opacity to 100%",
        check=_translucent,
    ),
    Rule(
        id=14,
        label="Empty object",
        fix="Delete the stray object",
        check=_is_empty,
        kinds=_PATH,
    ),
    Rule(
        id=15,
        label="Unexpanded pattern fill",
        fix="Expand the pattern fill",
        check=_pattern_fill,
        kinds=_PATH,
    ),
)

RULES_BY_ID: dict[int, Rule] = {r.id: r for r in RULES}
RULE_IDS: frozenset[int] = frozenset(RULES_BY_ID)
DEFAULT_FIX_MESSAGES: dict[int, str] = {r.id: r.fix for r in RULES}


def evaluate(
    node: Node,
    thresholds: RuleThresholds,
    sink: RuleSink,
    rule_ids: Collection[int] | None = None,
    describe: Callable[[Rule, Node], str] | None = None,
) -> int:
    """Run every applicable rule against *node*, reporting hits to *sink*.

    Returns the number of rules that fired.
    """
    hits = 0
    for rule in RULES:
        if rule_ids is not None and rule.id not in rule_ids:
            continue
        if not rule.applies_to(node):
            continue
        if rule.check(node, thresholds):
            description = describe(rule, node) if describe else rule.label
            sink(rule.id, node, description)
            hits += 1
    return hits
