# tests/test_snapshot.py
"""
Tests for loading and validating snapshot documents.
"""

import pytest

from uiauto_breadcrumb.element import Bounds, ElementKind
from uiauto_breadcrumb.exceptions import ElementNotFoundError, SnapshotError
from uiauto_breadcrumb.snapshot import FileSnapshotSource, build_snapshot, load_snapshot_file, parse_document


class TestLoadSnapshotFile:
    """Tests for reading documents from disk."""

    def test_loads_tree_and_request(self, scheme_yaml):
        """Should load elements, bounds and the request block."""
        document = load_snapshot_file(str(scheme_yaml))

        assert len(document.snapshot) == 6
        assert document.request.target == "default"
        assert document.request.context == "settings"
        assert document.request.base_path == ("Editor", "Code Style")
        assert document.snapshot.by_id("scheme").bounds == Bounds(30, 10, 80, 20)
        assert document.snapshot.by_id("per_project").bounds == Bounds(30, 40, 0, 0)
        assert document.snapshot.by_id("default").kind is ElementKind.RADIO

    def test_json_is_accepted(self, tmp_path):
        """Should accept JSON documents."""
        path = tmp_path / "tree.json"
        path.write_text('{"tree": {"kind": "container", "children": [{"kind": "label", "text": "Hi"}]}}')

        document = load_snapshot_file(str(path))

        assert document.request is None
        assert document.snapshot[1].text == "Hi"

    def test_missing_file(self, tmp_path):
        """Should raise SnapshotError for a missing file."""
        with pytest.raises(SnapshotError, match="not found"):
            load_snapshot_file(str(tmp_path / "absent.yaml"))

    def test_invalid_yaml(self, tmp_path):
        """Should raise SnapshotError for malformed YAML."""
        path = tmp_path / "broken.yaml"
        path.write_text("tree: [unclosed\n")

        with pytest.raises(SnapshotError, match="Invalid YAML"):
            load_snapshot_file(str(path))

    def test_empty_document(self, tmp_path):
        """Should reject a document that is not a mapping."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        with pytest.raises(SnapshotError, match="mapping"):
            load_snapshot_file(str(path))


class TestValidation:
    """Tests for schema checks."""

    def test_reports_every_problem(self):
        """Should report all schema problems together."""
        data = {
            "tree": {
                "kind": "slider",
                "children": [{"kind": "label", "colour": "red"}],
            },
        }

        with pytest.raises(SnapshotError) as exc_info:
            parse_document(data, path="inline.yaml")

        problems = exc_info.value.problems
        assert len(problems) == 2
        assert any(p.startswith("tree/children/0") for p in problems)
        assert "inline.yaml" in str(exc_info.value)

    def test_request_requires_target(self):
        """Should require a target in the request block."""
        with pytest.raises(SnapshotError):
            parse_document({"request": {"boundary": "x"}, "tree": {"kind": "container"}})

    def test_duplicate_ids(self, node):
        """Should reject duplicate element ids."""
        with pytest.raises(SnapshotError) as exc_info:
            build_snapshot(node("container", id="a", children=[node("label", "x", id="a")]))

        assert exc_info.value.problems == ["a"]


class TestFileSnapshotSource:
    """Tests for the file-backed collaborator."""

    def test_request_from_document(self, scheme_yaml):
        """Should serve target, boundary and base path from the request."""
        source = FileSnapshotSource(str(scheme_yaml))

        assert source.target().id == "default"
        assert source.boundary().id == "panel"
        assert list(source.base_segments()) == ["Settings", "Editor", "Code Style"]
        assert source.tree_segments() == ()

    def test_cli_ids_override_request(self, scheme_yaml):
        """Should let explicit ids override the request block."""
        source = FileSnapshotSource(str(scheme_yaml), target_id="project", boundary_id="spacer")

        assert source.target().id == "project"
        assert source.boundary().id == "spacer"
        assert source.request.context == "settings"

    def test_unknown_target(self, scheme_yaml):
        """Should raise ElementNotFoundError listing known ids."""
        source = FileSnapshotSource(str(scheme_yaml), target_id="nope")

        with pytest.raises(ElementNotFoundError) as exc_info:
            source.target()

        assert exc_info.value.role == "target"
        assert "default" in exc_info.value.known

    def test_target_required(self, tmp_path):
        """Should require a target from somewhere."""
        path = tmp_path / "bare.yaml"
        path.write_text("tree: {kind: container}\n")

        with pytest.raises(SnapshotError, match="No target"):
            FileSnapshotSource(str(path))
