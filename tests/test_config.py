"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from advocacy_quest.cli import parse_args
from advocacy_quest.config import Config


def test_defaults_are_valid():
    Config.validate()


def test_comfort_out_of_range(monkeypatch):
    monkeypatch.setattr(Config, "START_COMFORT", 11)

    with pytest.raises(ValueError, match="START_COMFORT"):
        Config.validate()


def test_start_on_wall(monkeypatch):
    monkeypatch.setattr(Config, "START_X", 0)

    with pytest.raises(ValueError, match="not a walkable tile"):
        Config.validate()


def test_missing_content_file(monkeypatch, tmp_path):
    monkeypatch.setattr(Config, "CONTENT_PATH", tmp_path / "nope.json")

    with pytest.raises(ValueError, match="missing file"):
        Config.validate()


def test_display_lists_settings(monkeypatch):
    monkeypatch.setattr(Config, "CONTENT_PATH", None)
    monkeypatch.setattr(Config, "SNAPSHOT_PATH", Path("progress.json"))
    monkeypatch.setattr(Config, "START_X", 1)
    monkeypatch.setattr(Config, "START_Y", 1)
    monkeypatch.setattr(Config, "START_COMFORT", 7)

    text = Config.display()

    assert "Content: built-in defaults" in text
    assert "Snapshot: progress.json" in text
    assert "Start: (1, 1) comfort 7" in text


def test_no_color_setting_drives_cli_default(monkeypatch):
    monkeypatch.setattr(Config, "NO_COLOR", True)

    assert parse_args([]).no_color is True
    assert "Color: off" in Config.display()
