"""Traversal engine — depth-first walk that classifies every eligible node."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import TYPE_CHECKING

from artpreflight.engine import rules
from artpreflight.engine.severity import SeverityBucketer, TraversalContext
from artpreflight.engine.symbols import SymbolInternalScanner
from artpreflight.progress import NullProgress, ProgressNotifier
from artpreflight.scene.adapter import can_inspect
from artpreflight.scene.models import Node, NodeKind

if TYPE_CHECKING:
    from artpreflight.config import RuleThresholds

logger = logging.getLogger(__name__)
run_log = logging.getLogger("artpreflight.runlog")

NO_LAYER = "(No layer)"


def count_items(nodes: Iterable[Node]) -> int:
    """Recursive item count used as the progress total."""
    total = 0
    for node in nodes:
        total += 1
        if node.is_container:
            total += count_items(node.children)
    return total


def is_skipped(node: Node) -> bool:
    """Hidden, guide, locked-layer and clipping nodes are never classified."""
    if node.hidden or node.guide:
        return True
    if not can_inspect(node):
        return True
    return node.kind == NodeKind.PATH and node.clipping


class TraversalEngine:
    """Walks the scene graph and records findings into a TraversalContext."""

    def __init__(
        self,
        thresholds: RuleThresholds,
        fix_messages: dict[int, str],
        progress: ProgressNotifier | None = None,
        progress_interval: int = 20,
        cancel: threading.Event | None = None,
    ) -> None:
        self._thresholds = thresholds
        self._fix_messages = fix_messages
        self._progress = progress or NullProgress()
        self._interval = max(1, progress_interval)
        self._cancel = cancel
        self._symbols = SymbolInternalScanner(thresholds)

    def traverse(self, roots: list[Node]) -> TraversalContext:
        """Classify every eligible node reachable from *roots*."""
        context = TraversalContext()
        bucketer = SeverityBucketer(
            context, self._fix_messages, self._thresholds.degenerate_epsilon
        )
        total = count_items(roots)
        self._progress.start(total)
        try:
            self._walk(roots, context, bucketer, total)
            if context.processed % self._interval:
                # Last classified node; skipped and repeated nodes never reach total.
                self._progress.update(context.processed, total, context.last_layer)
        finally:
            self._progress.finish()
        logger.info(
            "Traversal finished: %d node(s) classified, %d finding(s)%s",
            context.processed,
            context.total,
            " (cancelled)" if context.cancelled else "",
        )
        return context

    def _walk(
        self,
        nodes: list[Node],
        context: TraversalContext,
        bucketer: SeverityBucketer,
        total: int,
    ) -> None:
        for node in nodes:
            if self._cancel is not None and self._cancel.is_set():
                context.cancelled = True
                return

            if node in context.visited:
                continue
            context.visited.add(node)

            if is_skipped(node):
                continue

            layer_path = _layer_path(node)
            if node.name:
                object_name = node.name
            else:
                context.unnamed_count += 1
                object_name = f"Unnamed #{context.unnamed_count}"

            context.processed += 1
            context.last_layer = layer_path
            if context.processed % self._interval == 0:
                self._progress.update(context.processed, total, layer_path)
            run_log.info(
                "Processed %d / %d -> Layer: %s, Obj: %s",
                context.processed,
                total,
                layer_path,
                object_name,
            )

            def _record(rule_id: int, hit: Node, description: str) -> None:
                bucketer.record(rule_id, description, hit, layer_path, object_name)

            rules.evaluate(node, self._thresholds, _record, describe=self._describe)

            if node.is_container:
                self._walk(node.children, context, bucketer, total)
                if context.cancelled:
                    return

    def _describe(self, rule: rules.Rule, node: Node) -> str:
        if rule.id != 2:
            return rule.label
        if node.kind == NodeKind.SYMBOL_INSTANCE:
            count = self._symbols.count_issues(node)
            if count > 0:
                return f"Symbol ({count} internal issue(s))"
            return "Symbol"
        if node.kind == NodeKind.GRAPH:
            return "Graph"
        return "Plugin"


def _layer_path(node: Node) -> str:
    try:
        layer = node.layer
        return layer.path if layer is not None else NO_LAYER
    except AttributeError:
        return NO_LAYER
