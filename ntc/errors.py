"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from NtcUserError.

Failures of the document store or of the renderer are NOT wrapped:
they propagate to the caller of the resolution pass unchanged.
"""

from __future__ import annotations


class NtcUserError(Exception):
    """
    Base class for all user-facing errors of the transclusion engine.

    These errors indicate problems that the user can fix:
    a malformed settings file, an unknown toggle name, etc.
    """
    pass


class SettingsError(NtcUserError):
    """Settings file cannot be loaded or contains invalid values."""
    pass


__all__ = ["NtcUserError", "SettingsError"]
