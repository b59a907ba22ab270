import inspect

from ntc.transclusion.scanner import is_explicit_embed, scan_markers
from ntc.tree.element import Element
from tests.infrastructure import build_blocks


def _fragment(text: str) -> Element:
    root = Element("div")
    root.extend(build_blocks(text))
    return root


def test_classifies_explicit_and_implicit():
    frag = _fragment("see !![[a.md]] and ![[b.md]]\n## ![[c.md]]")
    markers = list(scan_markers(frag))
    assert [(m.target_path, m.is_explicit) for m in markers] == [
        ("a.md", True),
        ("b.md", False),
        ("c.md", False),
    ]


def test_scan_is_lazy_generator():
    frag = _fragment("!![[a.md]]")
    gen = scan_markers(frag)
    assert inspect.isgenerator(gen)
    assert len(list(gen)) == 1
    # not restartable
    assert list(gen) == []


def test_missing_target_is_none():
    frag = _fragment("!![[]]")
    (marker,) = scan_markers(frag)
    assert marker.target_path is None
    assert marker.is_explicit


def test_no_markers():
    assert list(scan_markers(_fragment("# Title\nplain text"))) == []


class _Opaque:
    """Marker without a serialized form."""
    tag = "span"
    parent = None


class _Broken(_Opaque):
    def outer_html(self) -> str:
        raise RuntimeError("unavailable")


def test_unserializable_marker_is_implicit():
    assert is_explicit_embed(_Opaque()) is False
    assert is_explicit_embed(_Broken()) is False


def test_splice_during_iteration_does_not_disturb_scan():
    frag = _fragment("!![[a.md]]\n!![[b.md]]")
    seen = []
    for marker in scan_markers(frag):
        seen.append(marker.target_path)
        repl = Element("div")
        repl.append(Element("span", cls="internal-embed", attrs={"src": "nested.md"}))
        marker.node.replace_with(repl)
    # spliced-in markers belong to the next pass
    assert seen == ["a.md", "b.md"]
