"""Tests for CLI commands using Click's CliRunner."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from artpreflight.cli import main


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("ARTPREFLIGHT_DOCUMENT", raising=False)
    monkeypatch.delenv("ARTPREFLIGHT_PROGRESS_INTERVAL", raising=False)


def test_main_help():
    runner = CliRunner()
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "artpreflight" in result.output
    assert "check" in result.output
    assert "rules" in result.output


def test_main_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_rules_lists_catalogue():
    runner = CliRunner()
    result = runner.invoke(main, ["rules"])
    assert result.exit_code == 0
    assert "Hairline stroke" in result.output


def test_check_without_document():
    runner = CliRunner()
    result = runner.invoke(main, ["check", "--no-progress"])
    assert result.exit_code == 1
    assert "No document is open." in result.output


def test_check_with_major_findings(sample_scene_copy: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["check", "--no-progress", str(sample_scene_copy)])
    assert result.exit_code == 1
    assert (sample_scene_copy.parent / "poster_report.txt").is_file()
    assert (sample_scene_copy.parent / "poster_log.txt").is_file()


def test_check_clean_document(clean_scene_copy: Path):
    runner = CliRunner()
    result = runner.invoke(main, ["check", "--no-progress", str(clean_scene_copy)])
    assert result.exit_code == 0
    assert "No issues found." in result.output
    assert not (clean_scene_copy.parent / "clean_report.txt").exists()


def test_check_uses_active_document(monkeypatch, clean_scene_copy: Path):
    monkeypatch.setenv("ARTPREFLIGHT_DOCUMENT", str(clean_scene_copy))
    runner = CliRunner()
    result = runner.invoke(main, ["check", "--no-progress"])
    assert result.exit_code == 0
    assert "No issues found." in result.output


def test_check_configuration_error(sample_scene_copy: Path, tmp_path: Path):
    config = tmp_path / "config.yaml"
    config.write_text("fix_messages:\n  6: ''\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["--config", str(config), "check", "--no-progress", str(sample_scene_copy)],
    )
    assert result.exit_code == 2
    assert "Configuration error" in result.output


def test_check_malformed_scene(tmp_path: Path):
    scene = tmp_path / "bad.yaml"
    scene.write_text("- not a scene\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(main, ["check", "--no-progress", str(scene)])
    assert result.exit_code == 1
    assert "mapping" in result.output


def test_check_prints_rule_lines(sample_scene_copy: Path):
    runner = CliRunner()
    result = runner.invoke(
        main, ["check", "--no-progress", "--lines", str(sample_scene_copy)]
    )
    assert result.exit_code == 1
    assert "‼ 6" in result.output
    assert "Artwork\tFrame" in result.output
