"""Scene data models — layers, drawable nodes, and shared symbol definitions."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple


class NodeKind(enum.Enum):
    """Closed set of drawable node kinds."""

    PATH = "path"
    GROUP = "group"
    COMPOUND_PATH = "compound_path"
    BLEND = "blend"
    SYMBOL_INSTANCE = "symbol"
    GRAPH = "graph"
    PLUGIN = "plugin"
    TEXT_FRAME = "text"
    PLACED_IMAGE = "image"
    OTHER = "other"


# Kinds whose children are walked by the traversal.
CONTAINER_KINDS = frozenset({NodeKind.GROUP, NodeKind.COMPOUND_PATH})


class FillKind(enum.Enum):
    """What a filled path is painted with."""

    NONE = "none"
    COLOR = "color"
    GRADIENT = "gradient"
    PATTERN = "pattern"


class ColorSpace(enum.Enum):
    """Declared color space of a placed image."""

    RGB = "rgb"
    CMYK = "cmyk"
    GRAYSCALE = "grayscale"
    OTHER = "other"


class Bounds(NamedTuple):
    """Axis-aligned box in points: left, top, right, bottom."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return abs(self.right - self.left)

    @property
    def height(self) -> float:
        return abs(self.top - self.bottom)


@dataclass(eq=False)
class Layer:
    """A document layer. Layers nest; lock state is inherited by content."""

    name: str
    locked: bool = False
    parent: Layer | None = field(default=None, repr=False)
    layers: list[Layer] = field(default_factory=list, repr=False)
    items: list[Node] = field(default_factory=list, repr=False)

    @property
    def path(self) -> str:
        names: list[str] = []
        layer: Layer | None = self
        while layer is not None:
            names.append(layer.name)
            layer = layer.parent
        return " > ".join(reversed(names))

    def ancestry(self):
        """Yield this layer followed by each enclosing layer."""
        layer: Layer | None = self
        while layer is not None:
            yield layer
            layer = layer.parent


@dataclass(eq=False)
class SymbolDefinition:
    """Shared geometry referenced by any number of symbol instances."""

    name: str
    items: list[Node] = field(default_factory=list)


@dataclass(eq=False)
class Node:
    """One drawable entity. Identity, not value, distinguishes nodes."""

    kind: NodeKind
    name: str = ""
    layer: Layer | None = field(default=None, repr=False)
    hidden: bool = False
    guide: bool = False
    clipping: bool = False
    filled: bool = False
    stroked: bool = False
    stroke_width: float = 0.0
    fill_kind: FillKind = FillKind.NONE
    closed: bool = False
    point_count: int = 0
    opacity: float = 100.0
    effects_count: int = 0
    bounds: Bounds | None = None
    rendered_bounds: Bounds = Bounds(0.0, 0.0, 0.0, 0.0)
    children: list[Node] = field(default_factory=list)
    symbol: SymbolDefinition | None = None
    text: str | None = None
    link: Path | None = None
    color_space: ColorSpace | None = None

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    def link_exists(self) -> bool:
        """Whether the linked source file resolves on disk."""
        if self.link is None:
            return False
        return self.link.exists()


@dataclass(eq=False)
class Document:
    """An open artwork document — the in-process scene adapter."""

    name: str
    path: Path | None = None
    layers: list[Layer] = field(default_factory=list)
    symbols: dict[str, SymbolDefinition] = field(default_factory=dict)

    def roots(self) -> list[Node]:
        """Top-level items of every layer, sub-layers depth-first."""
        nodes: list[Node] = []
        for layer in self.layers:
            _collect_layer_items(layer, nodes)
        return nodes

    def add_layer(self, name: str) -> Layer:
        layer = Layer(name=name)
        self.layers.insert(0, layer)
        return layer

    def remove_layer(self, layer: Layer) -> None:
        self.layers.remove(layer)


def _collect_layer_items(layer: Layer, out: list[Node]) -> None:
    out.extend(layer.items)
    for sub in layer.layers:
        _collect_layer_items(sub, out)
