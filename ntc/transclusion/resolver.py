"""
Resolution of embed markers in a rendered fragment.

For every qualifying marker the resolver reads the target document, guards
against re-entrant resolution, optionally re-levels headings, lets the
renderer build a new fragment from the text and splices that fragment in
place of the marker. The renderer may run this same pass on what it
produced, which resolves nested embeds transitively.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .guard import ResolutionContext
from .scanner import EmbedMarker, scan_markers
from ..config.model import Settings
from ..host.protocols import DocumentStore, Renderer, TreeNode
from ..markdown.headings import shift_headings
from ..tree.ancestors import nearest_heading_level
from ..tree.element import create_div

logger = logging.getLogger(__name__)

CONTAINER_CLASS = "native-transclusion"
WARNING_CLASS = "embed-warning"


class MarkerState(str, Enum):
    UNVISITED = "unvisited"
    SKIPPED = "skipped"
    REJECTED_CYCLE = "rejected_cycle"
    RESOLVING = "resolving"
    RESOLVED = "resolved"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self not in (MarkerState.UNVISITED, MarkerState.RESOLVING)


_TRANSITIONS = {
    MarkerState.UNVISITED: {MarkerState.SKIPPED, MarkerState.REJECTED_CYCLE, MarkerState.RESOLVING},
    MarkerState.RESOLVING: {MarkerState.RESOLVED, MarkerState.FAILED},
}


@dataclass
class MarkerOutcome:
    """Life cycle of a single marker within a pass."""
    target_path: Optional[str]
    state: MarkerState = MarkerState.UNVISITED

    def advance(self, new_state: MarkerState) -> None:
        if new_state not in _TRANSITIONS.get(self.state, set()):
            raise RuntimeError(
                f"Illegal marker transition {self.state.value} -> {new_state.value} "
                f"for {self.target_path!r}"
            )
        self.state = new_state


@dataclass
class PassReport:
    """Outcomes of one resolution pass, in document order."""
    source_path: Optional[str] = None
    outcomes: List[MarkerOutcome] = field(default_factory=list)

    def _count(self, state: MarkerState) -> int:
        return sum(1 for o in self.outcomes if o.state is state)

    @property
    def resolved(self) -> int:
        return self._count(MarkerState.RESOLVED)

    @property
    def skipped(self) -> int:
        return self._count(MarkerState.SKIPPED)

    @property
    def cycles(self) -> int:
        return self._count(MarkerState.REJECTED_CYCLE)

    def as_meta(self) -> Dict[str, Any]:
        return {
            "ntc.markers": len(self.outcomes),
            "ntc.resolved": self.resolved,
            "ntc.skipped": self.skipped,
            "ntc.cycles": self.cycles,
            "ntc.failed": self._count(MarkerState.FAILED),
        }


def loop_warning_text(target_path: str) -> str:
    return f"⚠️ Infinite loop detected: {target_path}"


class TransclusionResolver:
    """
    Replaces embed markers of a fragment with the rendered content of the
    documents they reference.
    """

    def __init__(
            self,
            store: DocumentStore,
            renderer: Renderer,
            settings: Settings,
            *,
            create_node: Callable[..., Any] = create_div,
    ):
        """
        Args:
            store: Source of document contents
            renderer: Markdown renderer that writes into a container node
            settings: Policy flags, read-only during a pass
            create_node: Factory of detached nodes, called as create_node(text=..., cls=...)
        """
        self.store = store
        self.renderer = renderer
        self.settings = settings
        self.create_node = create_node

    async def resolve_document(self, fragment: TreeNode, source_path: Optional[str] = None) -> PassReport:
        """
        Top-level pass over a freshly rendered document.

        Starts a new ResolutionContext; source_path, when known, is kept in
        flight for the whole pass so that embeds leading back to the document
        itself are rejected as cycles.
        """
        context = ResolutionContext(source_path=source_path)
        if not source_path:
            return await self.resolve_pass(fragment, context)
        with context.guard.entered(source_path):
            return await self.resolve_pass(fragment, context)

    async def resolve_pass(self, fragment: TreeNode, context: ResolutionContext) -> PassReport:
        """
        Processes all markers of the fragment, one after another.

        A render or read failure is re-raised after the failing document has
        been released from the guard; that marker stays in the tree as is.
        """
        report = PassReport(source_path=context.source_path)
        for marker in scan_markers(fragment):
            outcome = MarkerOutcome(target_path=marker.target_path)
            report.outcomes.append(outcome)
            await self._resolve_marker(marker, outcome, context)
        if report.outcomes:
            logger.debug(
                "Pass over %s (depth %d): %s",
                context.source_path or "<root>", context.depth, report.as_meta(),
            )
        return report

    def _should_process(self, marker: EmbedMarker) -> bool:
        return self.settings.render_all_transclusions or marker.is_explicit

    async def _resolve_marker(
            self,
            marker: EmbedMarker,
            outcome: MarkerOutcome,
            context: ResolutionContext,
    ) -> None:
        target = marker.target_path
        if not self._should_process(marker) or not target:
            # left for the host's default embed handling
            outcome.advance(MarkerState.SKIPPED)
            return

        handle = self.store.resolve(target)
        if handle is None:
            logger.debug("Embed target is not a content document, skipped: %s", target)
            outcome.advance(MarkerState.SKIPPED)
            return

        guard = context.guard
        if not guard.try_enter(target):
            logger.warning("Infinite embed loop detected, skipping: %s", target)
            marker.node.replace_with(self.create_node(text=loop_warning_text(target), cls=WARNING_CLASS))
            outcome.advance(MarkerState.REJECTED_CYCLE)
            return

        outcome.advance(MarkerState.RESOLVING)
        try:
            text = await self.store.read_text(handle)

            if self.settings.shift_headings:
                text = shift_headings(text, nearest_heading_level(marker.node))

            container = self.create_node(cls=CONTAINER_CLASS)
            await self.renderer.render(text, container, target, context.child(target))

            marker.node.replace_with(container)
        except BaseException:
            outcome.advance(MarkerState.FAILED)
            raise
        finally:
            guard.leave(target)

        outcome.advance(MarkerState.RESOLVED)


__all__ = [
    "TransclusionResolver",
    "PassReport",
    "MarkerOutcome",
    "MarkerState",
    "CONTAINER_CLASS",
    "WARNING_CLASS",
    "loop_warning_text",
]
