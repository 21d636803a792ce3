# tests/conftest.py
"""
Shared fixtures: compact builders for component trees.
"""

import textwrap

import pytest

from uiauto_breadcrumb.config import LayoutConfig
from uiauto_breadcrumb.snapshot import build_snapshot


def _node(kind, text=None, x=0, y=0, children=(), **attrs):
    data = {"kind": kind, "bounds": [x, y, 100, 20]}
    if text is not None:
        data["text"] = text
    if children:
        data["children"] = list(children)
    data.update(attrs)
    return data


@pytest.fixture(autouse=True)
def fresh_layout():
    """Every test starts from default thresholds."""
    LayoutConfig.reset_to_defaults()
    yield
    LayoutConfig.reset_to_defaults()


@pytest.fixture
def node():
    """Factory for one element mapping: node(kind, text, x, y, children, **attrs)."""
    return _node


@pytest.fixture
def build():
    """Flatten a nested mapping into a Snapshot."""
    return build_snapshot


@pytest.fixture
def scheme_snapshot():
    """Radio 'Default' nested under a master checkbox and a 'Scheme:' label."""
    tree = _node("container", id="panel", children=[
        _node("label", "Scheme:", x=30, y=10, id="scheme"),
        _node("checkbox", "Use per-project settings", x=30, y=40, id="per_project", selected=True),
        _node("radio", "Default", x=60, y=70, id="default", selected=True),
        _node("radio", "Project", x=60, y=100, id="project"),
    ])
    return build_snapshot(tree)


SCHEME_YAML = textwrap.dedent("""\
    version: 1
    request:
      target: default
      boundary: panel
      context: settings
      base_path: [Editor, Code Style]
    tree:
      kind: container
      id: panel
      children:
        - {kind: label, id: scheme, text: "Scheme:", bounds: [30, 10, 80, 20]}
        - {kind: checkbox, id: per_project, text: Use per-project settings, bounds: {x: 30, y: 40}, selected: true}
        - {kind: radio, id: default, text: Default, bounds: [60, 70], selected: true}
        - {kind: radio, id: project, text: Project, bounds: [60, 100]}
        - {kind: container, id: spacer}
""")


@pytest.fixture
def scheme_yaml(tmp_path):
    """Snapshot document on disk for the scheme layout."""
    path = tmp_path / "scheme.yaml"
    path.write_text(SCHEME_YAML, encoding="utf-8")
    return path
