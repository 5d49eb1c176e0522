"""Global configuration — rule thresholds, messages, XDG paths, env vars."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

from artpreflight.engine.rules import DEFAULT_FIX_MESSAGES

# 1 mm in points.
PT_PER_MM = 2.834645669


def _default_config_dir() -> Path:
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "artpreflight"
    return Path.home() / ".config" / "artpreflight"


@dataclass(frozen=True)
class RuleThresholds:
    """Numeric limits the rule library measures against."""

    min_line_mm: float = 0.12
    pt_per_mm: float = PT_PER_MM
    bounds_diff_pt: float = 0.1
    max_aspect_ratio: float = 15.0
    degenerate_epsilon: float = 0.01

    @property
    def min_line_pt(self) -> float:
        return self.min_line_mm * self.pt_per_mm


@dataclass
class PreflightConfig:
    """Application-wide configuration."""

    thresholds: RuleThresholds = field(default_factory=RuleThresholds)
    progress_interval: int = 20
    fix_messages: dict[int, str] = field(
        default_factory=lambda: dict(DEFAULT_FIX_MESSAGES)
    )
    overlay_layer_name: str = "Preflight Overlay"
    overlay_stroke_width: float = 0.5
    write_overlay_svg: bool = True
    document: Path | None = None
    config_dir: Path = field(default_factory=_default_config_dir)

    @classmethod
    def load(cls) -> PreflightConfig:
        """Load config from the XDG config file and environment variables."""
        config_file = _default_config_dir() / "config.yaml"
        if config_file.is_file():
            config = load_config(config_file)
        else:
            config = cls()

        env_interval = os.environ.get("ARTPREFLIGHT_PROGRESS_INTERVAL")
        if env_interval:
            config.progress_interval = int(env_interval)

        env_document = os.environ.get("ARTPREFLIGHT_DOCUMENT")
        if env_document:
            config.document = Path(env_document)

        return config


def load_config(path: str | Path) -> PreflightConfig:
    """Load configuration from a YAML file path."""
    text = Path(path).read_text(encoding="utf-8")
    return load_config_from_string(text)


def load_config_from_string(text: str) -> PreflightConfig:
    """Parse a YAML string into a PreflightConfig."""
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("Config YAML must be a mapping")

    config = PreflightConfig()

    thresholds_data = data.get("thresholds") or {}
    if thresholds_data:
        unknown = set(thresholds_data) - {f.name for f in fields(RuleThresholds)}
        if unknown:
            raise ValueError(f"Unknown thresholds: {', '.join(sorted(unknown))}")
        config.thresholds = replace(
            config.thresholds,
            **{k: float(v) for k, v in thresholds_data.items()},
        )

    if "progress_interval" in data:
        config.progress_interval = int(data["progress_interval"])

    # Overrides merge into the defaults; an empty value drops the message.
    for rule_id, message in (data.get("fix_messages") or {}).items():
        if message:
            config.fix_messages[int(rule_id)] = str(message)
        else:
            config.fix_messages.pop(int(rule_id), None)

    overlay = data.get("overlay") or {}
    if "layer_name" in overlay:
        config.overlay_layer_name = str(overlay["layer_name"])
    if "stroke_width" in overlay:
        config.overlay_stroke_width = float(overlay["stroke_width"])
    if "write_svg" in overlay:
        config.write_overlay_svg = bool(overlay["write_svg"])

    if data.get("document"):
        config.document = Path(data["document"])

    return config
