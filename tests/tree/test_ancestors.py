from ntc.tree.ancestors import nearest_heading_level
from ntc.tree.element import Element


def test_marker_three_levels_under_h2():
    root = Element("div")
    h2 = root.append(Element("h2"))
    a = h2.append(Element("div"))
    b = a.append(Element("section"))
    marker = b.append(Element("span", cls="internal-embed"))
    assert nearest_heading_level(marker) == 2


def test_top_level_marker_has_no_heading():
    root = Element("div")
    p = root.append(Element("p"))
    marker = p.append(Element("span", cls="internal-embed"))
    assert nearest_heading_level(marker) is None


def test_nearest_heading_wins():
    root = Element("div")
    h1 = root.append(Element("h1"))
    h4 = h1.append(Element("h4"))
    marker = h4.append(Element("span"))
    assert nearest_heading_level(marker) == 4


def test_walk_is_strictly_upward():
    # a heading node itself is not its own ancestor
    root = Element("div")
    h3 = root.append(Element("h3"))
    assert nearest_heading_level(h3) is None


def test_detached_node():
    assert nearest_heading_level(Element("span")) is None
