from __future__ import annotations

import os
from pathlib import Path

# Single source of truth for the settings location.
CFG_DIR = ".ntc"
SETTINGS_FILE = "settings.yaml"
SETTINGS_ENV = "NTC_SETTINGS"


def cfg_root(root: Path) -> Path:
    """Absolute path to the .ntc/ directory."""
    return (root / CFG_DIR).resolve()


def settings_path(root: Path) -> Path:
    """
    Path to the settings file: $NTC_SETTINGS if set, else .ntc/settings.yaml.
    """
    env = os.environ.get(SETTINGS_ENV, "").strip()
    if env:
        return Path(env).expanduser().resolve()
    return cfg_root(root) / SETTINGS_FILE


__all__ = ["CFG_DIR", "SETTINGS_FILE", "SETTINGS_ENV", "cfg_root", "settings_path"]
