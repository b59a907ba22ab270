from __future__ import annotations

import re

# Deepest ATX heading level.
MAX_HEADING_LEVEL = 6

_HEAD_PAT = re.compile(r"^(?P<marks>#{1,6})(?P<ws>[ \t]+)", re.MULTILINE)


def shift_headings(text: str, base_level: int | None) -> str:
    """
    Re-levels ATX headings of an embedded document so that they nest under
    the heading that encloses the insertion point.

      • base_level=None → text is returned unchanged.
      • every line "#{h}<ws>..." becomes "#{min(h + base_level, 6)}<ws>...";
        whitespace after the markers and the heading text are kept as is.
      • all other lines are untouched.

    Must be applied exactly once per embed, before rendering: the result of a
    second application is not meaningful.
    """
    if base_level is None:
        return text

    shift = int(base_level)
    if shift < 0:
        raise ValueError(f"Heading shift must be non-negative, got: {base_level!r}")
    if shift == 0:
        return text

    def _relevel(m: re.Match[str]) -> str:
        new_level = len(m.group("marks")) + shift
        # clamp to H6
        if new_level > MAX_HEADING_LEVEL:
            new_level = MAX_HEADING_LEVEL
        return "#" * new_level + m.group("ws")

    return _HEAD_PAT.sub(_relevel, text)


def heading_level_of_tag(tag: str | None) -> int | None:
    """'h3' → 3; anything that is not h1..h6 → None."""
    if not tag:
        return None
    m = re.fullmatch(r"[hH]([1-6])", tag)
    return int(m.group(1)) if m else None


__all__ = ["MAX_HEADING_LEVEL", "shift_headings", "heading_level_of_tag"]
