"""Severity partition, findings, and the per-run accumulator."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from artpreflight.engine.geometry import safe_bounds
from artpreflight.errors import ConfigurationError
from artpreflight.scene.models import Bounds, Node

run_log = logging.getLogger("artpreflight.runlog")

# Rule ids run 1..15; slot 0 of the per-rule buffers is never used.
RULE_SLOTS = 16

COLUMN_WIDTH = 30


class Severity(enum.Enum):
    """Finding severity bucket."""

    MAJOR = "major"
    MEDIUM = "medium"
    MINOR = "minor"


SEVERITY_BY_RULE: dict[int, Severity] = {
    1: Severity.MEDIUM,
    2: Severity.MEDIUM,
    3: Severity.MEDIUM,
    4: Severity.MEDIUM,
    5: Severity.MEDIUM,
    6: Severity.MAJOR,
    7: Severity.MINOR,
    8: Severity.MINOR,
    9: Severity.MINOR,
    10: Severity.MAJOR,
    11: Severity.MEDIUM,
    12: Severity.MEDIUM,
    13: Severity.MEDIUM,
    14: Severity.MAJOR,
    15: Severity.MAJOR,
}


def severity_for(rule_id: int) -> Severity:
    return SEVERITY_BY_RULE[rule_id]


@dataclass(frozen=True)
class Finding:
    """One rule hit on one node."""

    rule_id: int
    description: str
    layer_path: str
    object_name: str

    @property
    def severity(self) -> Severity:
        return SEVERITY_BY_RULE[self.rule_id]


@dataclass
class TraversalContext:
    """Mutable state threaded through one preflight run."""

    visited: set[Node] = field(default_factory=set)
    lines_by_rule: list[list[str]] = field(
        default_factory=lambda: [[] for _ in range(RULE_SLOTS)]
    )
    count_by_rule: list[int] = field(default_factory=lambda: [0] * RULE_SLOTS)
    major: list[Finding] = field(default_factory=list)
    medium: list[Finding] = field(default_factory=list)
    minor: list[Finding] = field(default_factory=list)
    recorded_bounds: list[Bounds] = field(default_factory=list)
    total: int = 0
    processed: int = 0
    unnamed_count: int = 0
    last_layer: str = ""
    cancelled: bool = False

    def findings(self, severity: Severity) -> list[Finding]:
        if severity is Severity.MAJOR:
            return self.major
        if severity is Severity.MEDIUM:
            return self.medium
        return self.minor

    def all_findings(self) -> list[Finding]:
        """Findings in severity order: major, medium, minor."""
        return self.major + self.medium + self.minor

    def buffered_lines(self) -> list[str]:
        """Formatted finding lines grouped by rule id."""
        return [line for lines in self.lines_by_rule for line in lines]


class SeverityBucketer:
    """Records rule hits into a TraversalContext."""

    def __init__(
        self,
        context: TraversalContext,
        fix_messages: dict[int, str],
        degenerate_epsilon: float = 0.01,
    ) -> None:
        self.context = context
        self._fix_messages = fix_messages
        self._epsilon = degenerate_epsilon

    def record(
        self,
        rule_id: int,
        description: str,
        node: Node,
        layer_path: str,
        object_name: str,
    ) -> Finding:
        fix = self._fix_messages.get(rule_id)
        if not fix:
            raise ConfigurationError(f"No fix message configured for rule {rule_id}")

        ctx = self.context
        finding = Finding(
            rule_id=rule_id,
            description=description,
            layer_path=layer_path,
            object_name=object_name,
        )
        severity = finding.severity
        mark = "‼ " if severity is Severity.MAJOR else "  "
        row = "\t".join(
            [
                str(rule_id).ljust(4),
                description.ljust(COLUMN_WIDTH),
                fix.ljust(COLUMN_WIDTH),
                layer_path,
                object_name,
            ]
        )
        ctx.lines_by_rule[rule_id].append(mark + row)
        ctx.count_by_rule[rule_id] += 1
        ctx.total += 1
        ctx.recorded_bounds.append(safe_bounds(node, self._epsilon))
        ctx.findings(severity).append(finding)

        run_log.info(
            "FINDING No.%d %s -> Layer: %s, Obj: %s",
            rule_id,
            description,
            layer_path,
            object_name,
        )
        return finding
