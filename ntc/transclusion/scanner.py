from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from ..host.protocols import TreeNode

logger = logging.getLogger(__name__)

# Embed placeholders produced by the renderer.
EMBED_SELECTOR = "span.internal-embed"
# Prefix of the explicit embed syntax: !![[target]]
EXPLICIT_EMBED_PREFIX = "!![["


@dataclass(frozen=True)
class EmbedMarker:
    """Embed placeholder found in a rendered fragment."""
    node: TreeNode
    target_path: Optional[str]   # None when the marker carries no target
    is_explicit: bool            # !![[...]] in the source, as opposed to ![[...]]


def is_explicit_embed(node: TreeNode) -> bool:
    """
    True if the marker's serialized source contains the explicit embed prefix.
    A marker that cannot be serialized is treated as implicit.
    """
    outer_html = getattr(node, "outer_html", None)
    if not callable(outer_html):
        return False
    try:
        serialized = outer_html()
    except Exception as e:
        logger.debug("Cannot serialize embed marker %r: %s", node, e)
        return False
    return isinstance(serialized, str) and EXPLICIT_EMBED_PREFIX in serialized


def scan_markers(fragment: TreeNode) -> Iterator[EmbedMarker]:
    """
    Lazily yields the embed markers among the fragment's descendants.

    Only the fragment itself is scanned: content spliced in while iterating
    is not visited (nested documents are handled by their own pass).
    """
    # Snapshot first: markers get replaced during iteration.
    nodes = list(fragment.select(EMBED_SELECTOR))
    for node in nodes:
        target = node.get_attribute("src")
        yield EmbedMarker(
            node=node,
            target_path=target if target else None,
            is_explicit=is_explicit_embed(node),
        )


__all__ = ["EmbedMarker", "EMBED_SELECTOR", "EXPLICIT_EMBED_PREFIX", "is_explicit_embed", "scan_markers"]
