from .load import YamlSettingsStore, load_settings, save_settings
from .model import SETTINGS_KEYS, Settings
from .paths import settings_path

__all__ = [
    "Settings",
    "SETTINGS_KEYS",
    "YamlSettingsStore",
    "load_settings",
    "save_settings",
    "settings_path",
]
