"""Tests for the report, overlay and run log writers."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import datetime
from pathlib import Path

import pytest

from artpreflight.engine.rules import DEFAULT_FIX_MESSAGES
from artpreflight.engine.severity import SeverityBucketer, TraversalContext
from artpreflight.output.overlay import OverlayRenderer
from artpreflight.output.report import RULE_WIDTH, ReportAssembler
from artpreflight.output.runlog import RunLog
from artpreflight.scene.models import Bounds, Layer, Node, NodeKind


@pytest.fixture
def context() -> TraversalContext:
    context = TraversalContext()
    bucketer = SeverityBucketer(context, dict(DEFAULT_FIX_MESSAGES))
    node = Node(kind=NodeKind.PATH, bounds=Bounds(0, 10, 10, 0))
    bucketer.record(6, "Hairline stroke", node, "Artwork", "Frame")
    bucketer.record(10, "Missing image link", node, "Artwork > Photos", "Hero")
    bucketer.record(13, "Transparency", node, "Artwork", "Shadow")
    return context


class TestReport:
    def test_header(self, context):
        text = ReportAssembler().render(
            "poster.ai", context, datetime(2024, 5, 1, 9, 30, 0)
        )
        lines = text.splitlines()
        assert lines[0] == "■ Preflight Report"
        assert "poster.ai" in lines[1]
        assert "2024-05-01 09:30:00" in lines[2]
        assert "Total findings: 3" in lines[3]
        assert "major: 2 / medium: 1 / minor: 0" in lines[3]
        assert lines[4] == "━" * RULE_WIDTH

    def test_sections(self, context):
        text = ReportAssembler().render("poster.ai", context)
        assert "■ Major (2)" in text
        assert "❗ [6] Hairline stroke" in text
        assert "Finding (2/2)" in text
        assert "  Layer: Artwork > Photos" in text
        assert "  Object: Hero" in text
        assert "■ Medium (1)" in text
        assert "⚠️ [13] Transparency" in text
        assert "■ Minor (0)" in text
        assert "ℹ️" not in text

    def test_section_order(self, context):
        text = ReportAssembler().render("poster.ai", context)
        assert text.index("■ Major") < text.index("■ Medium") < text.index("■ Minor")

    def test_write_utf8(self, context, tmp_path: Path):
        path = ReportAssembler().write(tmp_path / "report.txt", "poster.ai", context)
        assert "■ Major (2)" in path.read_text(encoding="utf-8")


class TestOverlay:
    def test_draw_one_box_per_bounds(self):
        layer = Layer(name="Overlay")
        boxes = [Bounds(0, 10, 10, 0), Bounds(20, 40, 30, 30)]

        drawn = OverlayRenderer(stroke_width=0.5).draw(layer, boxes)

        assert layer.items == drawn
        assert [item.bounds for item in drawn] == boxes
        for item in drawn:
            assert item.stroked and not item.filled and item.closed
            assert item.stroke_width == 0.5
            assert item.layer is layer

    def test_write_svg(self, tmp_path: Path):
        layer = Layer(name="Overlay")
        renderer = OverlayRenderer()
        renderer.draw(layer, [Bounds(0, 10, 10, 0), Bounds(20, 40, 30, 30)])

        path = renderer.write_svg(layer, tmp_path / "overlay.svg")
        svg = path.read_text(encoding="utf-8")

        assert svg.count("<rect ") == 2
        assert 'x="20" y="-40" width="10" height="10"' in svg
        assert 'stroke="#ff0000"' in svg
        assert 'fill="none"' in svg

    def test_svg_is_well_formed(self, tmp_path: Path):
        layer = Layer(name='Boxes & "marks"')
        renderer = OverlayRenderer()
        renderer.draw(layer, [Bounds(0, 10, 10, 0)])

        path = renderer.write_svg(layer, tmp_path / "overlay.svg")
        root = ET.parse(path).getroot()

        ns = {"svg": "http://www.w3.org/2000/svg"}
        group = root.find("svg:g", ns)
        assert group.get("id") == 'Boxes & "marks"'
        assert len(group.findall("svg:rect", ns)) == 1

    def test_write_empty_svg(self, tmp_path: Path):
        path = OverlayRenderer().write_svg(Layer(name="Overlay"), tmp_path / "o.svg")
        assert "<rect" not in path.read_text(encoding="utf-8")


class TestRunLog:
    def test_collects_only_while_attached(self):
        run_logger = logging.getLogger("artpreflight.runlog")
        with RunLog() as log:
            run_logger.info("inside %d", 1)
        run_logger.info("outside")

        assert len(log.lines) == 1
        assert log.lines[0].endswith("] inside 1")
        assert log.lines[0].startswith("[")

    def test_does_not_propagate(self, caplog):
        with caplog.at_level(logging.INFO), RunLog():
            logging.getLogger("artpreflight.runlog").info("private")
        assert "private" not in caplog.text

    def test_restores_logger_state(self):
        run_logger = logging.getLogger("artpreflight.runlog")
        level, propagate = run_logger.level, run_logger.propagate
        with RunLog():
            pass
        assert (run_logger.level, run_logger.propagate) == (level, propagate)

    def test_write(self, tmp_path: Path):
        with RunLog() as log:
            logging.getLogger("artpreflight.runlog").info("hello")
        path = log.write(tmp_path / "run_log.txt")
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0].startswith("=== Preflight Log (")
        assert lines[1].endswith("hello")
