# tests/test_tabs.py
"""
Tests for the tab resolver.
"""

from uiauto_breadcrumb.tabs import middle_trail, selected_tab_title, tab_trail


class TestSelectedTabTitle:
    """Tests for reading the selected tab of one container."""

    def test_selected_title_preferred(self, node, build):
        """Should use the reported selected title first."""
        snap = build(node("tab_container", tabs=["A", "B"], selected_index=0, selected_title="Chosen"))

        assert selected_tab_title(snap.root) == "Chosen"

    def test_legacy_index_lookup(self, node, build):
        """Should read the title at the selected index."""
        snap = build(node("tab_container", tabs=["General", "Auto Import"], selected_index=1))

        assert selected_tab_title(snap.root) == "Auto Import"

    def test_invalid_index_skipped(self, node, build):
        """Should skip an out-of-range index."""
        snap = build(node("tab_container", tabs=["Only"], selected_index=3))

        assert selected_tab_title(snap.root) is None

    def test_blank_title_skipped(self, node, build):
        """Should skip a blank title."""
        snap = build(node("tab_container", selected_title="  "))

        assert selected_tab_title(snap.root) is None

    def test_not_a_tab_container(self, node, build):
        """Should ignore containers that are not tab containers."""
        snap = build(node("container", selected_title="Nope"))

        assert selected_tab_title(snap.root) is None


class TestTabTrail:
    """Tests for ancestor walks."""

    def _nested(self, node, build):
        return build(node("container", id="boundary", children=[
            node("titled_border_panel", border_title="Outer", children=[
                node("tab_container", selected_title="Editor", children=[
                    node("titled_border_panel", border_title="Inner", children=[
                        node("tab_container", tabs=["General", "Advanced"], selected_index=1, children=[
                            node("label", "Target", id="target"),
                        ]),
                    ]),
                ]),
            ]),
        ]))

    def test_outer_tab_first(self, node, build):
        """Should list the outer tab before the inner one."""
        snap = self._nested(node, build)

        assert tab_trail(snap, snap.by_id("target"), snap.by_id("boundary")) == ["Editor", "Advanced"]

    def test_borders_interleave_in_nesting_order(self, node, build):
        """Should interleave borders and tabs in nesting order."""
        snap = self._nested(node, build)

        assert middle_trail(snap, snap.by_id("target"), snap.by_id("boundary")) == [
            "Outer", "Editor", "Inner", "Advanced",
        ]

    def test_boundary_container_excluded(self, node, build):
        """Should not include the boundary container itself."""
        snap = build(node("tab_container", selected_title="Top", id="boundary", children=[
            node("label", "Target", id="target"),
        ]))

        assert tab_trail(snap, snap.by_id("target"), snap.by_id("boundary")) == []
        assert tab_trail(snap, snap.by_id("target"), None) == ["Top"]
