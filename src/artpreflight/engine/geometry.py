"""Geometry helpers shared by the rules and the overlay."""

from __future__ import annotations

from artpreflight.scene.models import Bounds, Node

DEGENERATE_EPSILON = 0.01


def safe_bounds(node: Node, epsilon: float = DEGENERATE_EPSILON) -> Bounds:
    """Structural bounds, or rendered bounds when the structural box collapses.

    Effect-driven geometry can report a zero-width or zero-height structural
    box while still drawing visibly; the rendered box reflects what prints.
    """
    structural = node.bounds
    if structural is None:
        return node.rendered_bounds
    if structural.width < epsilon or structural.height < epsilon:
        return node.rendered_bounds
    return structural


def aspect_ratio(bounds: Bounds) -> float | None:
    """Long side over short side, or None when the box has no height."""
    w, h = bounds.width, bounds.height
    if h <= 0:
        return None
    if w <= 0:
        return float("inf")
    return max(w, h) / min(w, h)
