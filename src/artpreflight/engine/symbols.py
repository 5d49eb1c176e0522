"""Symbol definition scan — counts issues inside shared symbol geometry."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from artpreflight.engine import rules
from artpreflight.scene.models import Node, SymbolDefinition

if TYPE_CHECKING:
    from artpreflight.config import RuleThresholds

logger = logging.getLogger(__name__)

# Rules that apply inside a definition. Group appearance strokes, empty
# paths and pattern fills are only reported on placed artwork.
SYMBOL_SCAN_RULE_IDS = frozenset({1, 2, 3, 4, 6, 7, 8, 9, 10, 11, 12, 13})


class SymbolInternalScanner:
    """Counts rule hits inside a symbol definition without recording findings.

    Definitions are shared between instances, so every instance triggers a
    fresh scan; nothing is deduplicated against the main traversal. Nested
    symbol instances count once and are not expanded.
    """

    def __init__(self, thresholds: RuleThresholds) -> None:
        self._thresholds = thresholds

    def count_issues(self, instance: Node) -> int:
        definition = instance.symbol
        if definition is None:
            return 0
        count = self.scan(definition)
        logger.debug("Symbol '%s': %d internal issue(s)", definition.name, count)
        return count

    def scan(self, definition: SymbolDefinition) -> int:
        hits = 0

        def _count(rule_id: int, node: Node, description: str) -> None:
            nonlocal hits
            hits += 1

        stack = list(reversed(definition.items))
        while stack:
            node = stack.pop()
            rules.evaluate(
                node, self._thresholds, _count, rule_ids=SYMBOL_SCAN_RULE_IDS
            )
            if node.is_container:
                stack.extend(reversed(node.children))
        return hits
