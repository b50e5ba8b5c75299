"""TUI project settings loader.

Reads presentation settings from .tip-splitter.yaml in the project root (or
an explicit path). Domain bounds and the debounce delay are fixed and cannot
be changed here.

Example .tip-splitter.yaml:
    tui:
      presets: [5, 10, 15, 25, 50]   # Preset tip percentages, in order
      currency_symbol: "$"           # Prefix for displayed amounts
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import yaml

from tipsplit.config import DEFAULT_CURRENCY_SYMBOL, DEFAULT_PRESETS
from tipsplit.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = ".tip-splitter.yaml"


def _preset_text(value: Any, config_path: str) -> str:
    """Normalize one preset to the text the preset control carries."""
    if isinstance(value, bool):
        raise ConfigValidationError(
            f"Preset {value!r} is not a number", config_path=config_path, key="tui.presets"
        )
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        raise ConfigValidationError(
            f"Preset {value!r} is not a number", config_path=config_path, key="tui.presets"
        ) from None
    if not number.is_finite() or number <= 0:
        raise ConfigValidationError(
            f"Preset {value!r} must be a positive percentage",
            config_path=config_path,
            key="tui.presets",
        )
    if number == number.to_integral_value():
        return str(int(number))
    return format(number.normalize(), "f")


@dataclass
class TUISettings:
    """TUI configuration settings."""

    # Preset tip percentages shown as selectable buttons
    presets: list[str] = field(default_factory=lambda: [str(p) for p in DEFAULT_PRESETS])

    # Prefix for the per-person amounts
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL

    @classmethod
    def load(cls, project_root: Path | None = None, path: Path | None = None) -> "TUISettings":
        """Load settings from .tip-splitter.yaml.

        Args:
            project_root: Project root directory. Defaults to cwd.
            path: Explicit settings file; overrides ``project_root``.

        Returns:
            TUISettings with values from the file, or defaults when the file
            is missing or cannot be parsed.

        Raises:
            ConfigValidationError: If the file parses but holds unusable values
        """
        config_path = path or (project_root or Path.cwd()) / SETTINGS_FILENAME

        if not config_path.exists():
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", config_path, exc)
            return cls()

        if not isinstance(config, dict):
            logger.warning("Ignoring settings file %s: top level is not a mapping", config_path)
            return cls()

        tui_config = config.get("tui") or {}
        if not isinstance(tui_config, dict):
            raise ConfigValidationError(
                "tui must be a mapping", config_path=str(config_path), key="tui"
            )
        defaults = cls()
        return cls(
            presets=cls._read_presets(tui_config.get("presets", defaults.presets), str(config_path)),
            currency_symbol=cls._read_symbol(
                tui_config.get("currency_symbol", defaults.currency_symbol), str(config_path)
            ),
        )

    @staticmethod
    def _read_presets(raw: Any, config_path: str) -> list[str]:
        if not isinstance(raw, list) or not raw:
            raise ConfigValidationError(
                "presets must be a non-empty list", config_path=config_path, key="tui.presets"
            )
        presets = [_preset_text(value, config_path) for value in raw]
        if len(set(presets)) != len(presets):
            raise ConfigValidationError(
                "presets must not repeat", config_path=config_path, key="tui.presets"
            )
        return presets

    @staticmethod
    def _read_symbol(raw: Any, config_path: str) -> str:
        if not isinstance(raw, str):
            raise ConfigValidationError(
                "currency_symbol must be a string",
                config_path=config_path,
                key="tui.currency_symbol",
            )
        return raw


# Global settings instance (loaded on first access)
_settings: TUISettings | None = None


def get_settings(reload: bool = False, path: Path | None = None) -> TUISettings:
    """Get the global TUI settings.

    Args:
        reload: Force reload from the settings file.
        path: Explicit settings file to load.

    Returns:
        TUISettings instance.
    """
    global _settings
    if _settings is None or reload:
        _settings = TUISettings.load(path=path)
    return _settings
