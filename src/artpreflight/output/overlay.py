"""Overlay — red boxes over every finding on a dedicated layer."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections.abc import Sequence
from pathlib import Path

from artpreflight.scene.models import Bounds, Layer, Node, NodeKind

logger = logging.getLogger(__name__)

OVERLAY_COLOR = "#ff0000"
SVG_NAMESPACE = "http://www.w3.org/2000/svg"


class OverlayRenderer:
    """Draws one unfilled, thin red rectangle per recorded box."""

    def __init__(self, stroke_width: float = 0.5) -> None:
        self._stroke_width = stroke_width

    def draw(self, layer: Layer, boxes: Sequence[Bounds]) -> list[Node]:
        drawn = []
        for i, box in enumerate(boxes, start=1):
            rect = Node(
                kind=NodeKind.PATH,
                name=f"preflight-box-{i}",
                layer=layer,
                stroked=True,
                stroke_width=self._stroke_width,
                filled=False,
                closed=True,
                point_count=4,
                bounds=box,
                rendered_bounds=box,
            )
            layer.items.append(rect)
            drawn.append(rect)
        logger.debug("Drew %d overlay box(es) on '%s'", len(drawn), layer.name)
        return drawn

    def write_svg(self, layer: Layer, path: str | Path) -> Path:
        """Export the overlay layer as an SVG file, y axis pointing down."""
        path = Path(path)
        boxes = [item.rendered_bounds for item in layer.items]
        if boxes:
            min_x = min(min(b.left, b.right) for b in boxes)
            max_x = max(max(b.left, b.right) for b in boxes)
            min_y = min(-max(b.top, b.bottom) for b in boxes)
            max_y = max(-min(b.top, b.bottom) for b in boxes)
        else:
            min_x = max_x = min_y = max_y = 0.0
        pad = self._stroke_width

        svg_root = ET.Element(
            "svg",
            attrib={
                "xmlns": SVG_NAMESPACE,
                "viewBox": (
                    f"{min_x - pad:g} {min_y - pad:g} "
                    f"{max_x - min_x + 2 * pad:g} {max_y - min_y + 2 * pad:g}"
                ),
            },
        )
        group = ET.SubElement(
            svg_root,
            "g",
            attrib={
                "id": layer.name,
                "fill": "none",
                "stroke": OVERLAY_COLOR,
                "stroke-width": f"{self._stroke_width:g}",
            },
        )
        for box in boxes:
            ET.SubElement(
                group,
                "rect",
                attrib={
                    "x": f"{min(box.left, box.right):g}",
                    "y": f"{-max(box.top, box.bottom):g}",
                    "width": f"{box.width:g}",
                    "height": f"{box.height:g}",
                },
            )

        tree = ET.ElementTree(svg_root)
        ET.indent(tree)
        tree.write(path, encoding="utf-8", xml_declaration=True)
        return path
