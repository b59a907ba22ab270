from __future__ import annotations

from importlib import metadata

# distribution name first, bare import name for editable/dev installs
_DISTRIBUTIONS = ("native-transclusion", "ntc")


def tool_version() -> str:
    """
    Version of ntc as recorded in the installed native-transclusion metadata
    (shown by `ntc --version`). "0.0.0" when running from a source checkout
    that was never installed.
    """
    for dist in _DISTRIBUTIONS:
        try:
            return metadata.version(dist)
        except metadata.PackageNotFoundError:
            continue
    return "0.0.0"


__all__ = ["tool_version"]
