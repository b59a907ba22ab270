"""
In-memory element tree used as the host document model.

Provides the tree primitives the transclusion engine relies on:
selector queries, attribute reads, replace-in-place, ancestor traversal
and element creation with text/class.
"""

from __future__ import annotations

import html
import re
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

_SELECTOR = re.compile(r"^(?P<tag>[A-Za-z][A-Za-z0-9-]*)?(?P<classes>(?:\.[A-Za-z0-9_-]+)*)$")


class Element:
    """
    Element node: tag, attributes, class list, own text and children.

    An element belongs to at most one parent. Inserting an element elsewhere
    detaches it from its previous parent first.
    """

    def __init__(
        self,
        tag: str,
        *,
        text: Optional[str] = None,
        cls: str | Iterable[str] | None = None,
        attrs: Optional[Dict[str, str]] = None,
    ):
        self.tag = tag.lower()
        self.text = text
        self.attrs: Dict[str, str] = dict(attrs or {})
        if isinstance(cls, str):
            self.classes: List[str] = cls.split()
        else:
            self.classes = list(cls or [])
        self.children: List[Element] = []
        self.parent: Optional[Element] = None

    # ---------------------------- structure ---------------------------- #

    def append(self, child: Element) -> Element:
        child.detach()
        child.parent = self
        self.children.append(child)
        return child

    def extend(self, children: Iterable[Element]) -> None:
        for child in list(children):
            self.append(child)

    def detach(self) -> None:
        """Removes the element from its parent (no-op for a root)."""
        if self.parent is None:
            return
        self.parent.children.remove(self)
        self.parent = None

    def replace_with(self, node: Element) -> None:
        """
        Puts node at this element's position and detaches this element.
        """
        parent = self.parent
        if parent is None:
            raise ValueError(f"Cannot replace a detached <{self.tag}> element")
        if node is self:
            return
        node.detach()
        idx = parent.children.index(self)
        parent.children[idx] = node
        node.parent = parent
        self.parent = None

    def ancestors(self) -> Iterator[Element]:
        """Parents upward, nearest first; the element itself is not included."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def iter_descendants(self) -> Iterator[Element]:
        """Pre-order traversal of descendants (document order)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    # ---------------------------- attributes --------------------------- #

    def get_attribute(self, name: str) -> Optional[str]:
        if name == "class":
            return " ".join(self.classes) if self.classes else None
        return self.attrs.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        if name == "class":
            self.classes = value.split()
        else:
            self.attrs[name] = value

    def has_class(self, cls: str) -> bool:
        return cls in self.classes

    def add_class(self, cls: str) -> None:
        if cls not in self.classes:
            self.classes.append(cls)

    # ------------------------------ queries ---------------------------- #

    def matches(self, selector: str) -> bool:
        return self._matches(*_parse_selector(selector))

    def _matches(self, tag: Optional[str], classes: List[str]) -> bool:
        if tag is not None and self.tag != tag:
            return False
        return all(c in self.classes for c in classes)

    def select(self, selector: str) -> List[Element]:
        """
        Descendants matching a simple selector: 'tag', '.cls' or 'tag.cls[.cls2]'.
        """
        tag, classes = _parse_selector(selector)
        return [node for node in self.iter_descendants() if node._matches(tag, classes)]

    def text_content(self) -> str:
        parts: List[str] = [self.text or ""]
        for child in self.children:
            parts.append(child.text_content())
        return "".join(parts)

    # --------------------------- serialization ------------------------- #

    def outer_html(self) -> str:
        attrs = []
        if self.classes:
            attrs.append(f' class="{html.escape(" ".join(self.classes))}"')
        for name in sorted(self.attrs):
            attrs.append(f' {name}="{html.escape(self.attrs[name])}"')
        inner = html.escape(self.text or "", quote=False)
        inner += "".join(child.outer_html() for child in self.children)
        return f"<{self.tag}{''.join(attrs)}>{inner}</{self.tag}>"

    def structure(self) -> Tuple:
        """Hashable snapshot of the subtree for structural comparisons."""
        return (
            self.tag,
            tuple(self.classes),
            tuple(sorted(self.attrs.items())),
            self.text,
            tuple(child.structure() for child in self.children),
        )

    def format_tree(self, indent: int = 0) -> str:
        """Formats the subtree as an indented outline (debugging aid)."""
        prefix = "  " * indent
        label = self.tag + "".join(f".{c}" for c in self.classes)
        if self.attrs:
            label += " " + " ".join(f"{k}={v!r}" for k, v in sorted(self.attrs.items()))
        if self.text:
            preview = self.text[:50] + "..." if len(self.text) > 50 else self.text
            label += f" {preview!r}"
        lines = [prefix + label]
        for child in self.children:
            lines.append(child.format_tree(indent + 1))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"<Element {self.tag}{''.join('.' + c for c in self.classes)} children={len(self.children)}>"


def create_div(text: Optional[str] = None, cls: Optional[str] = None) -> Element:
    """Creates a detached <div> with optional text and class."""
    return Element("div", text=text, cls=cls)


def _parse_selector(selector: str) -> Tuple[Optional[str], List[str]]:
    m = _SELECTOR.match(selector.strip())
    if not m or not selector.strip():
        raise ValueError(f"Unsupported selector: {selector!r}")
    tag = m.group("tag")
    classes = [c for c in m.group("classes").split(".") if c]
    return (tag.lower() if tag else None), classes


__all__ = ["Element", "create_div"]
