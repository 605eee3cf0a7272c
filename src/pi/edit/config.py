"""Configuration for pi-edit. Reads optional settings from ~/.pi/edit.json."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pi.edit.keybindings import EditorKeybindingsConfig

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class Config:
    """Editor configuration."""

    debug: bool = False
    log_file: str | None = None
    log_level: str = "warning"
    keybindings: EditorKeybindingsConfig = field(default_factory=dict)


def _get_config_dir() -> Path:
    return Path(os.environ.get("PI_CONFIG_DIR", Path.home() / ".pi"))


def get_config_path() -> Path:
    return _get_config_dir() / "edit.json"


def config_from_dict(data: dict[str, Any]) -> Config:
    config = Config()
    if "debug" in data:
        config.debug = bool(data["debug"])
    if data.get("logFile"):
        config.log_file = str(data["logFile"])
    level = data.get("logLevel")
    if isinstance(level, str) and level.lower() in LOG_LEVELS:
        config.log_level = level.lower()
    keybindings = data.get("keybindings")
    if isinstance(keybindings, dict):
        config.keybindings = dict(keybindings)
    return config


def load_config(path: Path | None = None) -> Config:
    """Load the config file (if any), then apply environment overrides.

    ``PI_EDIT_DEBUG=1`` turns on debug mode and ``PI_EDIT_LOG`` names a log
    file.  A malformed config file is reported and ignored.
    """
    config_path = path if path is not None else get_config_path()
    config = Config()
    if config_path.exists():
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            config = config_from_dict(data)
        except (OSError, ValueError) as e:
            print(f"Error reading config {config_path}: {e}", file=sys.stderr)
            config = Config()

    if os.environ.get("PI_EDIT_DEBUG") == "1":
        config.debug = True
    log_path = os.environ.get("PI_EDIT_LOG", "")
    if log_path:
        config.log_file = log_path
    return config
