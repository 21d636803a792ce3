# uiauto_breadcrumb/__init__.py
"""
UIAuto Breadcrumb - infers where an element sits inside a nested dialog.

This package provides:
- Element/Snapshot: immutable arena of the captured component tree
- Resolvers: geometry, titles, separators/borders, tabs, option hierarchies
- PathBuilder: combines every resolver into one breadcrumb string
- Snapshot loading: YAML/JSON documents validated against a JSON schema
- LayoutConfig: geometry thresholds with presets and per-run overrides
- Interfaces: collaborator contracts for hosts supplying snapshots
"""

from uiauto_breadcrumb.element import Bounds, Element, ElementKind, Snapshot, TextFragment, strip_html
from uiauto_breadcrumb.config import LayoutConfig
from uiauto_breadcrumb.exceptions import (
    BreadcrumbError,
    ConfigError,
    SnapshotError,
    ElementNotFoundError,
)
from uiauto_breadcrumb.geometry import Scene, absolute
from uiauto_breadcrumb.interfaces import ISnapshotSource, IPathConsumer
from uiauto_breadcrumb.path import PathBuilder, PathRequest, build_path
from uiauto_breadcrumb.snapshot import FileSnapshotSource, SnapshotDocument, build_snapshot, load_snapshot_file

__all__ = [
    "Bounds",
    "Element",
    "ElementKind",
    "Snapshot",
    "TextFragment",
    "strip_html",
    "LayoutConfig",
    "BreadcrumbError",
    "ConfigError",
    "SnapshotError",
    "ElementNotFoundError",
    "Scene",
    "absolute",
    "ISnapshotSource",
    "IPathConsumer",
    "PathBuilder",
    "PathRequest",
    "build_path",
    "FileSnapshotSource",
    "SnapshotDocument",
    "build_snapshot",
    "load_snapshot_file",
]

__version__ = "1.0.0"
