# tests/test_geometry.py
"""
Tests for the snapshot arena and absolute coordinates.
"""

from uiauto_breadcrumb.element import ElementKind, strip_html
from uiauto_breadcrumb.geometry import Scene, absolute


class TestStripHtml:
    """Tests for markup removal."""

    def test_removes_tags_and_trims(self):
        """Should drop markup tags and surrounding whitespace."""
        assert strip_html("<html><b> Java </b></html>") == "Java"

    def test_none_is_empty(self):
        """Should map missing text to an empty string."""
        assert strip_html(None) == ""


class TestSnapshot:
    """Tests for the immutable element arena."""

    def test_pre_order_indices_and_links(self, node, build):
        """Should index elements in pre-order with parent/child links."""
        snap = build(node("container", id="root", children=[
            node("container", id="a", children=[node("label", "A1", id="a1")]),
            node("label", "B", id="b"),
        ]))

        assert [el.id for el in snap] == ["root", "a", "a1", "b"]
        assert snap.parent(snap.by_id("a1")).id == "a"
        assert [c.id for c in snap.children(snap.root)] == ["a", "b"]

    def test_ancestors_closest_first(self, node, build):
        """Should yield ancestors from the closest outward."""
        snap = build(node("container", id="root", children=[
            node("container", id="mid", children=[node("label", "x", id="leaf")]),
        ]))

        assert [a.id for a in snap.ancestors(snap.by_id("leaf"))] == ["mid", "root"]
        assert snap.is_ancestor(snap.root, snap.by_id("leaf"))
        assert not snap.is_ancestor(snap.by_id("leaf"), snap.root)

    def test_descendants_filtered_by_kind(self, node, build):
        """Should walk descendants in pre-order, filtered by kind."""
        snap = build(node("container", children=[
            node("checkbox", "One", id="one"),
            node("container", children=[node("radio", "Two", id="two"), node("label", "L")]),
        ]))

        found = list(snap.descendants(snap.root, (ElementKind.CHECKBOX, ElementKind.RADIO)))
        assert [el.id for el in found] == ["one", "two"]

    def test_hidden_ancestor_hides_subtree(self, node, build):
        """Should treat elements under a hidden container as not showing."""
        snap = build(node("container", children=[
            node("container", visible=False, children=[node("label", "Inside", id="inside")]),
        ]))

        assert snap.by_id("inside").visible
        assert not snap.is_showing(snap.by_id("inside"))

    def test_labeled_by(self, node, build):
        """Should find the label whose label_for names the element."""
        snap = build(node("container", children=[
            node("label", "Font size:", label_for="size"),
            node("container", id="size"),
        ]))

        assert snap.labeled_by(snap.by_id("size")).clean_text == "Font size:"
        assert snap.labeled_by(snap.root) is None


class TestAbsolute:
    """Tests for absolute coordinate resolution."""

    def test_sums_offsets_up_to_root(self, node, build):
        """Should sum local offsets of every ancestor."""
        snap = build(node("container", x=5, y=7, children=[
            node("container", x=10, y=20, children=[node("label", "x", x=3, y=4, id="leaf")]),
        ]))

        assert absolute(snap, snap.by_id("leaf")) == (18, 31)

    def test_prefers_screen_location_when_showing(self, node, build):
        """Should use the reported screen location of a showing element."""
        snap = build(node("container", x=5, y=5, children=[
            node("label", "x", x=1, y=1, id="leaf", screen_location=[400, 300]),
        ]))

        assert absolute(snap, snap.by_id("leaf")) == (400, 300)

    def test_falls_back_for_hidden_tab_page(self, node, build):
        """Should sum offsets when the element is not showing."""
        snap = build(node("container", children=[
            node("container", x=10, y=10, visible=False, children=[
                node("label", "x", x=2, y=2, id="leaf", screen_location=[400, 300]),
            ]),
        ]))

        assert absolute(snap, snap.by_id("leaf")) == (12, 12)

    def test_missing_bounds_degrade_to_origin(self, build):
        """Should resolve to the origin when no bounds are known."""
        snap = build({"kind": "container", "children": [{"kind": "label", "id": "leaf"}]})

        assert absolute(snap, snap.by_id("leaf")) == (0, 0)


class TestScene:
    """Tests for per-pass memoization."""

    def test_positions_are_stable_within_a_pass(self, node, build):
        """Should memoize positions for one pass."""
        snap = build(node("container", children=[node("label", "x", x=3, y=9, id="leaf")]))
        scene = Scene(snap)
        leaf = snap.by_id("leaf")

        assert scene.absolute(leaf) == (3, 9)
        assert scene.absolute(leaf) is scene.absolute(leaf)
        assert (scene.x(leaf), scene.y(leaf)) == (3, 9)

    def test_search_root_defaults_to_parent(self, node, build):
        """Should search from the boundary, else the target's parent."""
        snap = build(node("container", id="root", children=[node("label", "x", id="leaf")]))
        scene = Scene(snap)

        assert scene.search_root(snap.by_id("leaf"), None).id == "root"
        assert scene.search_root(snap.root, None) is None
        assert scene.search_root(snap.by_id("leaf"), snap.root) is snap.root
