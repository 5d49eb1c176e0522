"""Text report — severity-ranked summary written as UTF-8 next to the artwork."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from artpreflight.engine.severity import Finding, Severity, TraversalContext

RULE_WIDTH = 70
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True)
class SectionStyle:
    """Fixed wording for one severity section."""

    title: str
    icon: str
    risk: str
    remedy: str


SECTIONS: dict[Severity, SectionStyle] = {
    Severity.MAJOR: SectionStyle(
        title="Major",
        icon="❗",
        risk="Output will differ from the artwork: lines drop out, "
        "images are missing, or stray objects print",
        remedy="Fix before submitting the file",
    ),
    Severity.MEDIUM: SectionStyle(
        title="Medium",
        icon="⚠️",
        risk="Colors or shapes may shift when the file is converted for print",
        remedy="Expand, flatten, or convert to CMYK",
    ),
    Severity.MINOR: SectionStyle(
        title="Minor",
        icon="ℹ️",
        risk="Unneeded objects remain and the file grows larger",
        remedy="Delete them if they are not needed",
    ),
}


class ReportAssembler:
    """Builds the preflight report from a finished traversal."""

    def render(
        self,
        document_name: str,
        context: TraversalContext,
        timestamp: datetime | None = None,
    ) -> str:
        timestamp = timestamp or datetime.now()
        major, medium, minor = context.major, context.medium, context.minor
        total = len(major) + len(medium) + len(minor)

        lines = [
            "■ Preflight Report",
            f"・File: {document_name}",
            f"・Run at: {timestamp.strftime(TIMESTAMP_FORMAT)}",
            f"・Total findings: {total} "
            f"(major: {len(major)} / medium: {len(medium)} / minor: {len(minor)})",
            "━" * RULE_WIDTH,
            "",
        ]
        for severity in Severity:
            lines.extend(_section(SECTIONS[severity], context.findings(severity)))
        return "\n".join(lines) + "\n"

    def write(
        self,
        path: str | Path,
        document_name: str,
        context: TraversalContext,
        timestamp: datetime | None = None,
    ) -> Path:
        path = Path(path)
        path.write_text(
            self.render(document_name, context, timestamp), encoding="utf-8"
        )
        return path


def _section(style: SectionStyle, findings: list[Finding]) -> list[str]:
    lines = [f"■ {style.title} ({len(findings)})"]
    if not findings:
        return lines
    first = findings[0]
    lines.extend(
        [
            f"{style.icon} [{first.rule_id}] {first.description}",
            f"  Risk: {style.risk}",
            f"  Remedy: {style.remedy}",
            "",
        ]
    )
    for i, finding in enumerate(findings, start=1):
        lines.extend(
            [
                "-" * RULE_WIDTH,
                f"Finding ({i}/{len(findings)})",
                f"  Layer: {finding.layer_path}",
                f"  Object: {finding.object_name}",
            ]
        )
    lines.extend(["━" * RULE_WIDTH, ""])
    return lines
