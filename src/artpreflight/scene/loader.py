"""Load Document objects from YAML scene descriptions."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from artpreflight.errors import SceneFormatError
from artpreflight.scene.models import (
    Bounds,
    ColorSpace,
    Document,
    FillKind,
    Layer,
    Node,
    NodeKind,
    SymbolDefinition,
)


def load_document(path: str | Path) -> Document:
    """Load a document from a YAML scene file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SceneFormatError(f"Cannot read scene file {path}: {e}") from e
    return load_document_from_string(
        text, base_dir=path.parent, default_name=path.name, path=path
    )


def load_document_from_string(
    text: str,
    base_dir: str | Path | None = None,
    default_name: str = "untitled",
    path: Path | None = None,
) -> Document:
    """Parse a YAML string into a Document."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SceneFormatError(f"Invalid scene YAML: {e}") from e
    if not isinstance(data, dict):
        raise SceneFormatError("Scene YAML must be a mapping")
    builder = _SceneBuilder(Path(base_dir) if base_dir is not None else Path.cwd())
    return builder.build(data, default_name=default_name, path=path)


class _SceneBuilder:
    """Builds nodes once per YAML mapping so aliases share one Node."""

    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        self._symbols: dict[str, SymbolDefinition] = {}
        # Keyed by id() of the source mapping; the parsed tree outlives the build.
        self._built: dict[int, Node] = {}

    def build(self, data: dict, default_name: str, path: Path | None) -> Document:
        symbols_data = data.get("symbols") or {}
        if not isinstance(symbols_data, dict):
            raise SceneFormatError("'symbols' must be a mapping of name to items")

        # Declare every definition first so instances may reference any of them.
        for name in symbols_data:
            self._symbols[str(name)] = SymbolDefinition(name=str(name))
        for name, items in symbols_data.items():
            definition = self._symbols[str(name)]
            definition.items = self._parse_items(items, layer=None)

        layers = [
            self._parse_layer(ld, parent=None) for ld in _as_list(data, "layers")
        ]

        return Document(
            name=_optional_str(data.get("name")) or default_name,
            path=path,
            layers=layers,
            symbols=dict(self._symbols),
        )

    def _parse_layer(self, data: Any, parent: Layer | None) -> Layer:
        if not isinstance(data, dict):
            raise SceneFormatError("Each layer must be a mapping")
        layer = Layer(
            name=_optional_str(data.get("name")) or "Layer",
            locked=bool(data.get("locked", False)),
            parent=parent,
        )
        layer.items = self._parse_items(data.get("items") or [], layer=layer)
        layer.layers = [
            self._parse_layer(sub, parent=layer) for sub in _as_list(data, "layers")
        ]
        return layer

    def _parse_items(self, items: Any, layer: Layer | None) -> list[Node]:
        if not isinstance(items, list):
            raise SceneFormatError("Items must be a list")
        return [self._parse_node(item, layer) for item in items]

    def _parse_node(self, data: Any, layer: Layer | None) -> Node:
        if not isinstance(data, dict):
            raise SceneFormatError("Each item must be a mapping")

        existing = self._built.get(id(data))
        if existing is not None:
            return existing

        try:
            kind = NodeKind(data["kind"])
        except KeyError as e:
            raise SceneFormatError(f"Item without 'kind': {data!r}") from e
        except ValueError as e:
            raise SceneFormatError(f"Unknown item kind: {data['kind']!r}") from e

        filled = bool(data.get("filled", False))
        bounds = _parse_bounds(data.get("bounds"))
        rendered = _parse_bounds(data.get("rendered_bounds"))

        node = Node(
            kind=kind,
            name=_optional_str(data.get("name")) or "",
            layer=layer,
            hidden=bool(data.get("hidden", False)),
            guide=bool(data.get("guide", False)),
            clipping=bool(data.get("clipping", False)),
            filled=filled,
            stroked=bool(data.get("stroked", False)),
            stroke_width=float(data.get("stroke_width", 0.0)),
            fill_kind=_parse_fill(data.get("fill"), filled),
            closed=bool(data.get("closed", False)),
            point_count=int(data.get("points", 0)),
            opacity=float(data.get("opacity", 100.0)),
            effects_count=int(data.get("effects", 0)),
            bounds=bounds,
            rendered_bounds=rendered or bounds or Bounds(0.0, 0.0, 0.0, 0.0),
            text=_optional_str(data.get("text")),
            link=self._resolve_link(data.get("link")),
            color_space=_parse_color_space(data.get("color_space")),
        )
        self._built[id(data)] = node

        if "symbol" in data:
            symbol_name = str(data["symbol"])
            if symbol_name not in self._symbols:
                raise SceneFormatError(f"Unknown symbol: {symbol_name!r}")
            node.symbol = self._symbols[symbol_name]

        node.children = self._parse_items(data.get("children") or [], layer)
        return node

    def _resolve_link(self, raw: Any) -> Path | None:
        if not raw:
            return None
        link = Path(str(raw))
        if not link.is_absolute():
            link = self._base_dir / link
        return link


def _as_list(data: dict, key: str) -> list:
    value = data.get(key) or []
    if not isinstance(value, list):
        raise SceneFormatError(f"'{key}' must be a list")
    return value


def _optional_str(raw: Any) -> str | None:
    # YAML turns bare scalars such as 2024 or 0 into numbers.
    return None if raw is None else str(raw)


def _parse_bounds(raw: Any) -> Bounds | None:
    if raw is None:
        return None
    if not isinstance(raw, (list, tuple)) or len(raw) != 4:
        raise SceneFormatError(f"Bounds must be [left, top, right, bottom]: {raw!r}")
    return Bounds(*(float(v) for v in raw))


def _parse_fill(raw: Any, filled: bool) -> FillKind:
    if raw is None:
        return FillKind.COLOR if filled else FillKind.NONE
    try:
        return FillKind(raw)
    except ValueError as e:
        raise SceneFormatError(f"Unknown fill kind: {raw!r}") from e


def _parse_color_space(raw: Any) -> ColorSpace | None:
    if raw is None:
        return None
    try:
        return ColorSpace(str(raw).lower())
    except ValueError:
        return ColorSpace.OTHER
