"""
Protocols for the collaborators provided by the host environment.

The transclusion engine only talks to the host through these interfaces:
the document tree, the document store, the markdown renderer and the
settings storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..config.model import Settings


@runtime_checkable
class TreeNode(Protocol):
    """
    Node of the rendered document tree.
    """

    tag: str
    parent: Optional[TreeNode]

    @property
    def children(self) -> Iterable[TreeNode]: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def select(self, selector: str) -> list:
        """Descendants matching a simple selector, in document order."""
        ...

    def replace_with(self, node: Any) -> None:
        """Puts node at this node's position; this node leaves the tree."""
        ...

    def outer_html(self) -> str:
        """Serialized representation of the node, including its attributes."""
        ...


@runtime_checkable
class DocumentHandle(Protocol):
    """Content-bearing document returned by DocumentStore.resolve()."""

    path: str


@runtime_checkable
class DocumentStore(Protocol):
    """
    Access to document contents by path.
    """

    def resolve(self, path: str) -> Optional[DocumentHandle]:
        """
        Returns a handle for a content document, or None when the path
        does not exist or does not point at a content document.
        """
        ...

    async def read_text(self, handle: DocumentHandle) -> str:
        """
        Reads the raw text of the document.

        Raises:
            OSError: When the content cannot be read
        """
        ...


@runtime_checkable
class Renderer(Protocol):
    """
    Markdown-to-tree renderer.

    Writes the rendered tree into container. A host renderer is expected to
    run the registered post-processors on what it produced, handing them
    render_context, which makes resolution of nested embeds recursive.
    """

    async def render(self, text: str, container: Any, source_path: str, render_context: Any) -> None:
        ...


@runtime_checkable
class SettingsStore(Protocol):
    """Persistent storage of the engine settings."""

    def load(self) -> Settings:
        """Returns stored settings merged with defaults."""
        ...

    def save(self, settings: Settings) -> None:
        ...


__all__ = ["TreeNode", "DocumentHandle", "DocumentStore", "Renderer", "SettingsStore"]
