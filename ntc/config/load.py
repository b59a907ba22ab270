from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError

from .model import Settings
from .paths import settings_path
from ..errors import SettingsError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

_YAML_RT = YAML(typ="rt")
_YAML_RT.preserve_quotes = True
_YAML_RT.indent(mapping=2, sequence=4, offset=2)
_YAML_RT.width = 1000000


def _read_yaml_map(path: Path) -> dict:
    """Reads a YAML file expected to hold a mapping ({} if the file is absent or empty)."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SettingsError(f"Settings file is not valid UTF-8: {path}") from e
    if not isinstance(raw, dict):
        raise SettingsError(f"YAML must be a mapping: {path}")
    return raw


def _load_yaml_rt(path: Path) -> CommentedMap:
    if not path.is_file():
        return CommentedMap()
    try:
        data = _YAML_RT.load(path.read_text(encoding="utf-8")) or CommentedMap()
    except YAMLError as e:
        raise SettingsError(f"Invalid YAML in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise SettingsError(f"Settings file is not valid UTF-8: {path}") from e
    if not isinstance(data, CommentedMap):
        data = CommentedMap()
    return data


def _dump_yaml_rt(path: Path, data: CommentedMap) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp-rt")
    with tmp.open("w", encoding="utf-8") as f:
        _YAML_RT.dump(data, f)
    tmp.replace(path)


def load_settings(path: Path) -> Settings:
    """
    Loads settings from a YAML file and merges them with defaults.

    Raises:
        SettingsError: malformed YAML, unknown keys or non-boolean values
    """
    raw = _read_yaml_map(path)
    try:
        return Settings.from_dict(raw)
    except SettingsError as e:
        raise SettingsError(f"{path}: {e}") from e


def save_settings(path: Path, settings: Settings) -> None:
    """
    Persists settings; comments and key order of an existing file are kept.
    The file is replaced atomically.
    """
    data = _load_yaml_rt(path)
    for key, value in settings.to_dict().items():
        data[key] = value
    _dump_yaml_rt(path, data)
    logger.debug("Settings saved to %s: %s", path, settings.to_dict())


class YamlSettingsStore:
    """
    SettingsStore backed by .ntc/settings.yaml under the given root
    (or the file named by $NTC_SETTINGS).
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    @property
    def path(self) -> Path:
        return settings_path(self.root)

    def load(self) -> Settings:
        return load_settings(self.path)

    def save(self, settings: Settings) -> None:
        save_settings(self.path, settings)


__all__ = ["YamlSettingsStore", "load_settings", "save_settings"]
