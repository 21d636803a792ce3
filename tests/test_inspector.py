# tests/test_inspector.py
"""
Tests for snapshot inspection reports.
"""

import json

from uiauto_breadcrumb.config import LayoutConfig
from uiauto_breadcrumb.inspector import inspect_snapshot, write_inspect_outputs


def _snapshot(node, build):
    return build(node("container", x=5, y=5, id="root", children=[
        node("checkbox", "Shown", x=10, y=20, id="shown", selected=True),
        node("container", visible=False, children=[node("label", "Hidden", x=1, y=2, id="hidden")]),
    ]))


class TestInspectSnapshot:
    """Tests for the element listing."""

    def test_lists_every_element(self, node, build):
        """Should list every element with geometry and depth."""
        result = inspect_snapshot(_snapshot(node, build))
        controls = {c["id"]: c for c in result["controls"] if c["id"]}

        assert len(result["controls"]) == 4
        assert controls["shown"]["absolute"] == [15, 25]
        assert controls["shown"]["selected"] is True
        assert controls["shown"]["depth"] == 1
        assert controls["hidden"]["depth"] == 2
        assert controls["hidden"]["showing"] is False
        assert controls["hidden"]["selected"] is None

    def test_showing_only(self, node, build):
        """Should skip elements that are not showing."""
        result = inspect_snapshot(_snapshot(node, build), include_hidden=False)

        assert [c["id"] for c in result["controls"]] == ["root", "shown"]

    def test_records_layout(self, node, build):
        """Should record the layout thresholds used."""
        layout = LayoutConfig.build_from(preset="compact")

        result = inspect_snapshot(_snapshot(node, build), layout=layout)

        assert result["layout"]["same_row_threshold"] == 6


class TestWriteInspectOutputs:
    """Tests for report files."""

    def test_writes_json_and_text(self, node, build, tmp_path):
        """Should write JSON and text reports named after the source."""
        result = inspect_snapshot(_snapshot(node, build), source="/tmp/My Dialog.yaml")

        paths = write_inspect_outputs(result, out_dir=str(tmp_path))

        assert "My_Dialog" in paths["json"]
        with open(paths["json"], encoding="utf-8") as f:
            assert json.load(f)["controls"][1]["text"] == "Shown"
        with open(paths["text"], encoding="utf-8") as f:
            text = f.read()
        assert "[shown] checkbox" in text
        assert "selected: True" in text
