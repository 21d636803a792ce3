# uiauto_breadcrumb/snapshot.py
"""
@file snapshot.py
@brief Loads serialized component trees (YAML/JSON) into immutable snapshots.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

import yaml
from jsonschema import Draft202012Validator

from .config import LayoutConfig
from .element import Bounds, Element, ElementKind, Snapshot, TextFragment
from .exceptions import ElementNotFoundError, SnapshotError
from .interfaces import ISnapshotSource
from .path import PathRequest, base_segments_for
from .utils.logging import get_logger

log = get_logger(__name__)

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schemas", "snapshot.schema.json")

_validator: Optional[Draft202012Validator] = None


def _schema_validator() -> Draft202012Validator:
    global _validator
    if _validator is None:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            _validator = Draft202012Validator(json.load(f))
    return _validator


def validate_document(data: Any, path: Optional[str] = None) -> None:
    """Validate a parsed document against the snapshot schema; report every problem."""
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot document must be a mapping at root", path=path)
    errors = sorted(_schema_validator().iter_errors(data), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        problems = [f"{'/'.join(str(p) for p in e.absolute_path) or '<root>'}: {e.message}" for e in errors]
        raise SnapshotError("Snapshot schema validation failed", path=path, problems=problems)


def _parse_bounds(raw: Any) -> Bounds:
    if raw is None:
        return Bounds()
    if isinstance(raw, dict):
        return Bounds(
            x=int(raw.get("x", 0)),
            y=int(raw.get("y", 0)),
            width=int(raw.get("width", 0)),
            height=int(raw.get("height", 0)),
        )
    values = [int(v) for v in raw] + [0, 0, 0, 0]
    return Bounds(*values[:4])


def _parse_location(raw: Any) -> Optional[Tuple[int, int]]:
    if raw is None:
        return None
    return int(raw[0]), int(raw[1])


def build_snapshot(tree: Dict[str, Any]) -> Snapshot:
    """
    Flatten a nested element mapping into a Snapshot arena (pre-order).

    The mapping is expected to be schema-valid; duplicate ids are rejected here.
    """
    # First pass: assign pre-order indices and link parents/children.
    nodes: List[Dict[str, Any]] = []
    parents: List[Optional[int]] = []
    children: List[List[int]] = []
    stack: List[Tuple[Dict[str, Any], Optional[int]]] = [(tree, None)]
    while stack:
        data, parent = stack.pop()
        index = len(nodes)
        nodes.append(data)
        parents.append(parent)
        children.append([])
        if parent is not None:
            children[parent].append(index)
        for child in reversed(data.get("children") or []):
            stack.append((child, index))

    seen: Dict[str, int] = {}
    duplicates: List[str] = []
    elements: List[Element] = []
    for index, data in enumerate(nodes):
        element_id = data.get("id")
        if element_id is not None:
            if element_id in seen:
                duplicates.append(element_id)
            seen[element_id] = index
        elements.append(Element(
            index=index,
            kind=ElementKind(data["kind"]),
            id=element_id,
            text=data.get("text"),
            bounds=_parse_bounds(data.get("bounds")),
            visible=bool(data.get("visible", True)),
            selected=bool(data.get("selected", False)),
            bold=bool(data.get("bold", False)),
            fragments=tuple(
                TextFragment(str(f.get("text", "")), bool(f.get("bold", False)))
                for f in data.get("fragments") or []
            ),
            tab_titles=tuple(str(t) for t in data.get("tabs") or []),
            selected_index=int(data.get("selected_index", -1)),
            selected_title=data.get("selected_title"),
            border_title=data.get("border_title"),
            label_for=data.get("label_for"),
            screen_location=_parse_location(data.get("screen_location")),
            parent=parents[index],
            children=tuple(children[index]),
        ))

    if duplicates:
        raise SnapshotError("Duplicate element ids", problems=sorted(set(duplicates)))
    return Snapshot(elements)


def _parse_request(raw: Optional[Dict[str, Any]]) -> Optional[PathRequest]:
    if not raw:
        return None
    kwargs: Dict[str, Any] = {"target": str(raw["target"])}
    for key in ("boundary", "separator", "context", "dialog_title", "dialog_root", "tool_window", "content_tab"):
        if raw.get(key) is not None:
            kwargs[key] = raw[key]
    for key in ("base_path", "tree_path"):
        if raw.get(key):
            kwargs[key] = tuple(str(v) for v in raw[key])
    return PathRequest(**kwargs)


@dataclass(frozen=True)
class SnapshotDocument:
    snapshot: Snapshot
    request: Optional[PathRequest] = None
    path: Optional[str] = None

    def require(self, element_id: Optional[str], role: str = "element") -> Element:
        el = self.snapshot.by_id(element_id)
        if el is None:
            raise ElementNotFoundError(str(element_id), role=role, known=self.snapshot.ids())
        return el


def parse_document(data: Any, path: Optional[str] = None) -> SnapshotDocument:
    validate_document(data, path=path)
    try:
        snapshot = build_snapshot(data["tree"])
    except SnapshotError as e:
        raise SnapshotError(e.message, path=path, problems=e.problems) from e
    request = _parse_request(data.get("request"))
    log.debug("Loaded snapshot with %d elements from %s", len(snapshot), path or "<memory>")
    return SnapshotDocument(snapshot=snapshot, request=request, path=path)


def load_snapshot_file(path: str) -> SnapshotDocument:
    """Load a YAML (or JSON, which YAML accepts) snapshot document."""
    path = os.path.abspath(path)
    if not os.path.exists(path):
        raise SnapshotError("Snapshot file not found", path=path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SnapshotError(f"Invalid YAML: {e}", path=path) from e
    return parse_document(data, path=path)


class FileSnapshotSource(ISnapshotSource):
    """Collaborator backed by a snapshot document on disk."""

    def __init__(
        self,
        path: str,
        target_id: Optional[str] = None,
        boundary_id: Optional[str] = None,
        layout: Optional[LayoutConfig] = None,
    ):
        self.document = load_snapshot_file(path)
        request = self.document.request
        if target_id is None and request is None:
            raise SnapshotError("No target given and snapshot has no request block", path=self.document.path)
        if request is None:
            request = PathRequest(target=str(target_id))
        overrides: Dict[str, Any] = {}
        if target_id is not None:
            overrides["target"] = target_id
        if boundary_id is not None:
            overrides["boundary"] = boundary_id
        if overrides:
            request = replace(request, **overrides)
        self.request = request
        self.layout = layout

    def snapshot(self) -> Snapshot:
        return self.document.snapshot

    def target(self) -> Optional[Element]:
        return self.document.require(self.request.target, role="target")

    def boundary(self) -> Optional[Element]:
        if self.request.boundary is None:
            return None
        return self.document.require(self.request.boundary, role="boundary")

    def base_segments(self) -> Sequence[str]:
        return base_segments_for(self.document.snapshot, self.request, self.layout)

    def tree_segments(self) -> Sequence[str]:
        return self.request.tree_path
