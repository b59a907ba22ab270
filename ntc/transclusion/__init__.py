"""
Transclusion resolution engine: marker scanning, cycle guard and the
recursive resolution pass.
"""

from .guard import CycleGuard, ResolutionContext
from .resolver import (
    CONTAINER_CLASS,
    WARNING_CLASS,
    MarkerOutcome,
    MarkerState,
    PassReport,
    TransclusionResolver,
    loop_warning_text,
)
from .scanner import EmbedMarker, is_explicit_embed, scan_markers

__all__ = [
    "CycleGuard",
    "ResolutionContext",
    "EmbedMarker",
    "is_explicit_embed",
    "scan_markers",
    "TransclusionResolver",
    "PassReport",
    "MarkerOutcome",
    "MarkerState",
    "CONTAINER_CLASS",
    "WARNING_CLASS",
    "loop_warning_text",
]
