"""Shared test fixtures."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from artpreflight.config import RuleThresholds
from artpreflight.scene.models import Bounds, Layer, Node, NodeKind


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_scene_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "sample_scene.yaml"


@pytest.fixture
def clean_scene_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "clean_scene.yaml"


@pytest.fixture
def sample_scene_copy(sample_scene_path: Path, tmp_path: Path) -> Path:
    """The sample scene copied somewhere outputs may be written."""
    target = tmp_path / "poster.yaml"
    shutil.copy(sample_scene_path, target)
    return target


@pytest.fixture
def clean_scene_copy(clean_scene_path: Path, tmp_path: Path) -> Path:
    target = tmp_path / "clean.yaml"
    shutil.copy(clean_scene_path, target)
    return target


@pytest.fixture
def thresholds() -> RuleThresholds:
    return RuleThresholds()


@pytest.fixture
def layer() -> Layer:
    return Layer(name="Artwork")


@pytest.fixture
def make_node(layer: Layer):
    """Factory for nodes on the default layer with a 10x10 box."""

    def _make(kind: NodeKind = NodeKind.PATH, **kwargs) -> Node:
        kwargs.setdefault("layer", layer)
        kwargs.setdefault("bounds", Bounds(0.0, 10.0, 10.0, 0.0))
        return Node(kind=kind, **kwargs)

    return _make
