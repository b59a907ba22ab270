"""
Cycle protection for recursive transclusion.

The in-flight set is owned by a ResolutionContext which is created per
top-level post-processing pass and handed explicitly through the renderer
to nested passes. Independent passes never share it.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import FrozenSet, Iterator, Optional, Set


class CycleGuard:
    """
    Set of document identifiers currently under resolution.

    A successful try_enter() must be paired with leave() on every exit path.
    """

    def __init__(self) -> None:
        self._in_flight: Set[str] = set()

    def try_enter(self, doc_id: str) -> bool:
        """False if doc_id is already being resolved; otherwise marks it and returns True."""
        if doc_id in self._in_flight:
            return False
        self._in_flight.add(doc_id)
        return True

    def leave(self, doc_id: str) -> None:
        self._in_flight.discard(doc_id)

    @contextmanager
    def entered(self, doc_id: str) -> Iterator[bool]:
        """
        Context manager form of try_enter/leave.

        Yields the try_enter() result; the identifier is released on exit
        only if it was entered here.
        """
        ok = self.try_enter(doc_id)
        try:
            yield ok
        finally:
            if ok:
                self.leave(doc_id)

    @property
    def in_flight(self) -> FrozenSet[str]:
        return frozenset(self._in_flight)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._in_flight

    def __len__(self) -> int:
        return len(self._in_flight)

    def __repr__(self) -> str:
        return f"CycleGuard(in_flight={sorted(self._in_flight)!r})"


@dataclass(frozen=True)
class ResolutionContext:
    """
    State of one post-processing pass, shared by its recursive sub-passes.

    source_path: document whose rendered fragment is being processed
                 (None for the host's top-level document when unknown)
    depth:       nesting level of the fragment (0 for the top-level pass)
    """
    guard: CycleGuard = field(default_factory=CycleGuard)
    source_path: Optional[str] = None
    depth: int = 0

    def child(self, source_path: str) -> ResolutionContext:
        """Context for the fragment rendered from source_path; shares the guard."""
        return ResolutionContext(guard=self.guard, source_path=source_path, depth=self.depth + 1)


__all__ = ["CycleGuard", "ResolutionContext"]
