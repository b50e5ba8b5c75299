"""Shared fixtures for TUI tests."""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest

from tipsplit.tui import settings as settings_module


@pytest.fixture
def tmp_settings_yaml(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a settings file with custom presets and symbol."""
    yaml_file = tmp_path / ".tip-splitter.yaml"
    yaml_file.write_text(
        """
tui:
  presets: [10, 12.5, 18, 20]
  currency_symbol: "€"
""",
        encoding="utf-8",
    )
    yield yaml_file


@pytest.fixture
def tmp_partial_yaml(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a settings file that only overrides the currency symbol."""
    yaml_file = tmp_path / "partial.yaml"
    yaml_file.write_text(
        """
tui:
  currency_symbol: "£"
""",
        encoding="utf-8",
    )
    yield yaml_file


@pytest.fixture
def tmp_malformed_yaml(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a settings file PyYAML cannot parse."""
    yaml_file = tmp_path / ".tip-splitter.yaml"
    yaml_file.write_text(
        """
tui: {presets: [5, 10}
""",
        encoding="utf-8",
    )
    yield yaml_file


@pytest.fixture
def write_settings(tmp_path: Path):
    """Write arbitrary settings text and return its path."""
    def _write(text: str) -> Path:
        yaml_file = tmp_path / "settings.yaml"
        yaml_file.write_text(text, encoding="utf-8")
        return yaml_file
    return _write


@pytest.fixture(autouse=True)
def reset_global_settings() -> Generator[None, None, None]:
    """Keep the cached global settings from leaking between tests."""
    settings_module._settings = None
    yield
    settings_module._settings = None
