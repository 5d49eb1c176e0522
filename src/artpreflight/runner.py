"""Preflight runner — orchestrates traversal, overlay, report, and run log."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from artpreflight.config import PreflightConfig
from artpreflight.engine.severity import TraversalContext
from artpreflight.engine.traversal import TraversalEngine
from artpreflight.errors import NoDocumentError
from artpreflight.output.overlay import OverlayRenderer
from artpreflight.output.report import ReportAssembler
from artpreflight.output.runlog import RunLog
from artpreflight.progress import ProgressNotifier
from artpreflight.scene.adapter import SceneAdapter, make_inspectable
from artpreflight.scene.models import Layer

logger = logging.getLogger(__name__)
run_log = logging.getLogger("artpreflight.runlog")


@dataclass
class RunOutcome:
    """What a finished run produced."""

    document_name: str
    context: TraversalContext
    overlay_layer: Layer | None = None
    report_path: Path | None = None
    log_path: Path | None = None
    overlay_path: Path | None = None

    @property
    def total(self) -> int:
        return self.context.total

    @property
    def has_findings(self) -> bool:
        return self.context.total > 0


class PreflightRunner:
    """Runs a whole preflight pass over one open document."""

    def __init__(
        self,
        config: PreflightConfig | None = None,
        progress: ProgressNotifier | None = None,
        cancel: threading.Event | None = None,
    ) -> None:
        self._config = config or PreflightConfig()
        self._engine = TraversalEngine(
            thresholds=self._config.thresholds,
            fix_messages=self._config.fix_messages,
            progress=progress,
            progress_interval=self._config.progress_interval,
            cancel=cancel,
        )
        self._overlay = OverlayRenderer(self._config.overlay_stroke_width)
        self._report = ReportAssembler()

    def run(self, document: SceneAdapter | None) -> RunOutcome:
        if document is None:
            raise NoDocumentError()

        roots = document.roots()
        overlay_layer = document.add_layer(self._config.overlay_layer_name)
        make_inspectable(overlay_layer)

        try:
            with RunLog() as log:
                run_log.info('Preflight started for "%s".', document.name)
                context = self._engine.traverse(roots)
        except Exception:
            document.remove_layer(overlay_layer)
            raise

        self._overlay.draw(overlay_layer, context.recorded_bounds)
        outcome = RunOutcome(
            document_name=document.name,
            context=context,
            overlay_layer=overlay_layer,
        )

        if not outcome.has_findings:
            document.remove_layer(overlay_layer)
            outcome.overlay_layer = None
            logger.info("No findings in '%s'", document.name)
            return outcome

        output_dir = _output_dir(document)
        if output_dir is None:
            logger.warning(
                "Document '%s' has no location; report not written", document.name
            )
            return outcome

        stem = Path(document.name).stem
        outcome.report_path = self._report.write(
            output_dir / f"{stem}_report.txt",
            document.name,
            context,
            datetime.now(),
        )
        outcome.log_path = log.write(output_dir / f"{stem}_log.txt")
        if self._config.write_overlay_svg:
            outcome.overlay_path = self._overlay.write_svg(
                overlay_layer, output_dir / f"{stem}_overlay.svg"
            )
        logger.info("Report written to %s", outcome.report_path)
        return outcome


def _output_dir(document: SceneAdapter) -> Path | None:
    if document.path is None:
        return None
    return Path(document.path).parent
