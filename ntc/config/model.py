from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, Optional

from ..errors import SettingsError


# --- helpers ---------------------------------------------------------------
def _assert_only_keys(d: Dict[str, Any] | None, allowed: Iterable[str], *, ctx: str) -> None:
    if d is None:
        return
    allowed_set = set(allowed)
    extra = set(d.keys()) - allowed_set
    if extra:
        raise SettingsError(f"{ctx}: unknown key(s): {', '.join(sorted(map(str, extra)))}")


def _as_bool(value: Any, *, key: str) -> bool:
    if isinstance(value, bool):
        return value
    raise SettingsError(f"Settings.{key} must be a boolean, got: {value!r}")


@dataclass(frozen=True)
class Settings:
    """
    Engine settings.

    render_all_transclusions: process every embed, not only explicit !![[...]] ones.
    shift_headings: re-level headings of embedded documents under the insertion point.
    """
    render_all_transclusions: bool = False
    shift_headings: bool = False

    @staticmethod
    def from_dict(d: Optional[Dict[str, Any]]) -> Settings:
        if not d:
            # nothing stored yet → defaults
            return Settings()
        if not isinstance(d, dict):
            raise SettingsError("Settings must be a mapping")
        _assert_only_keys(d, SETTINGS_KEYS, ctx="Settings")
        return Settings(
            render_all_transclusions=_as_bool(
                d.get("render_all_transclusions", False), key="render_all_transclusions"
            ),
            shift_headings=_as_bool(d.get("shift_headings", False), key="shift_headings"),
        )

    def to_dict(self) -> Dict[str, bool]:
        return {
            "render_all_transclusions": self.render_all_transclusions,
            "shift_headings": self.shift_headings,
        }

    def with_toggle(self, key: str, value: bool) -> Settings:
        """Copy of the settings with one flag changed."""
        if key not in SETTINGS_KEYS:
            raise SettingsError(f"Unknown setting: {key!r}")
        return replace(self, **{key: _as_bool(value, key=key)})


SETTINGS_KEYS = ("render_all_transclusions", "shift_headings")

__all__ = ["Settings", "SETTINGS_KEYS"]
