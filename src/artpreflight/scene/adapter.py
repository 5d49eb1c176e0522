"""Scene adapter protocol and lock-state access."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from artpreflight.scene.models import Layer, Node

logger = logging.getLogger(__name__)


@runtime_checkable
class SceneAdapter(Protocol):
    """What the preflight core needs from a host document."""

    name: str
    path: Path | None

    def roots(self) -> list[Node]:
        """Top-level drawable nodes in document order."""
        ...

    def add_layer(self, name: str) -> Layer:
        """Create a new, empty layer on top of the stack."""
        ...

    def remove_layer(self, layer: Layer) -> None:
        ...


def can_inspect(node: Node) -> bool:
    """True unless the node's layer or one of its ancestors is locked.

    Pure read. A lock state that cannot be read counts as unlocked.
    """
    try:
        layer = node.layer
        if layer is None:
            return True
        for ancestor in layer.ancestry():
            if ancestor.locked:
                return False
    except (AttributeError, LookupError) as e:
        logger.debug("Unreadable lock state on %r: %s", node.name, e)
    return True


def make_inspectable(layer: Layer) -> None:
    """Unlock a layer and every enclosing layer."""
    for ancestor in layer.ancestry():
        if ancestor.locked:
            logger.debug("Unlocking layer '%s'", ancestor.path)
            ancestor.locked = False
