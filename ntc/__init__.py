"""
Native transclusion: recursive resolution of embed markers in a rendered
document tree with cycle protection and optional heading re-leveling.
"""

from .config.model import Settings
from .plugin import TransclusionPlugin
from .transclusion import (
    CycleGuard,
    EmbedMarker,
    MarkerState,
    PassReport,
    ResolutionContext,
    TransclusionResolver,
)

__all__ = [
    "Settings",
    "TransclusionPlugin",
    "TransclusionResolver",
    "ResolutionContext",
    "CycleGuard",
    "EmbedMarker",
    "MarkerState",
    "PassReport",
]
