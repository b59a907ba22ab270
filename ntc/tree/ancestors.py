from __future__ import annotations

from ..host.protocols import TreeNode
from ..markdown.headings import heading_level_of_tag


def nearest_heading_level(node: TreeNode) -> int | None:
    """
    Level (1..6) of the nearest ancestor that is itself a heading element.

    Walks strictly upward starting at the parent; intermediate non-heading
    elements are skipped. Returns None if the root is reached without
    meeting a heading.
    """
    parent = node.parent
    while parent is not None:
        level = heading_level_of_tag(getattr(parent, "tag", None))
        if level is not None:
            return level
        parent = parent.parent
    return None


__all__ = ["nearest_heading_level"]
