# uiauto_breadcrumb/path.py
"""
@file path.py
@brief Assembles the breadcrumb path for a target element.

Order of segments:
  base path (settings page, dialog title or tool window)
  -> selected tabs and titled borders, outermost first
  -> nearest preceding titled separator
  -> option hierarchy around a checkbox/radio target
  -> tree/table segments supplied by the host
  -> the target's own label
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .config import LayoutConfig
from .element import Element, Snapshot, strip_html
from .geometry import Scene
from .interfaces import ISnapshotSource
from .layout import DEFAULT_SEPARATOR, SETTINGS_ROOT_TITLE
from .separators import preceding_separator
from .tabs import middle_trail
from .titles import find_title
from .toggles import toggle_hierarchy
from .utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")

PATH_CONTEXTS = ("plain", "settings", "dialog", "tool_window")


@dataclass(frozen=True)
class PathRequest:
    """What the host knows about the action, besides the tree itself."""
    target: str
    boundary: Optional[str] = None
    separator: str = DEFAULT_SEPARATOR
    context: str = "plain"
    base_path: Tuple[str, ...] = ()
    dialog_title: Optional[str] = None
    dialog_root: Optional[str] = None
    tool_window: Optional[str] = None
    content_tab: Optional[str] = None
    tree_path: Tuple[str, ...] = ()


class PathSegments:
    """Ordered segments; an item equal to the previous one is dropped."""

    def __init__(self) -> None:
        self._items: List[str] = []

    def append(self, item: Optional[str]) -> None:
        text = strip_html(item)
        if not text:
            return
        if self._items and self._items[-1] == text:
            return
        self._items.append(text)

    def extend(self, items: Iterable[Optional[str]]) -> None:
        for item in items:
            self.append(item)

    def items(self) -> List[str]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def join(self, separator: str) -> Optional[str]:
        # Items are trimmed and non-empty, so the joined text never ends with a separator.
        text = separator.join(self._items)
        return text or None


def component_label(snapshot: Snapshot, target: Element) -> Optional[str]:
    """Text of the label bound to the target, else the target's own text."""
    label = snapshot.labeled_by(target)
    if label is not None and label.clean_text:
        return label.clean_text
    return target.clean_text or None


def base_segments_for(snapshot: Snapshot, request: PathRequest, layout: Optional[LayoutConfig] = None) -> List[str]:
    """Leading segments for the request's host context."""
    layout = layout or LayoutConfig.current()
    context = request.context or "plain"
    segments: List[str] = []

    if context == "settings":
        segments.append(SETTINGS_ROOT_TITLE)
    elif context == "dialog":
        title = strip_html(request.dialog_title)
        if not title and request.dialog_root is not None:
            root = snapshot.by_id(request.dialog_root)
            if root is not None:
                title = find_title(snapshot, root, layout.title_search_depth) or ""
        if title:
            segments.append(title)
    elif context == "tool_window":
        window = strip_html(request.tool_window)
        if window:
            segments.append(window)
        tab = strip_html(request.content_tab)
        if tab and tab != window:
            segments.append(tab)
    elif context != "plain":
        log.warning("Unknown path context %r, using plain base path", context)

    segments.extend(request.base_path)
    return segments


def _guard(call: Callable[[], T], what: str, default: Any) -> Any:
    """Run a collaborator lookup; failures mean the segment is unavailable."""
    try:
        return call()
    except Exception as e:
        log.warning("Collaborator lookup failed (%s): %s: %s", what, type(e).__name__, e)
        return default


class PathBuilder:
    """Combines every resolver into one breadcrumb string."""

    def __init__(self, layout: Optional[LayoutConfig] = None, separator: str = DEFAULT_SEPARATOR):
        self.layout = layout
        self.separator = separator

    def segments(
        self,
        snapshot: Snapshot,
        target: Element,
        boundary: Optional[Element] = None,
        base_path: Sequence[str] = (),
        tree_path: Sequence[str] = (),
    ) -> List[str]:
        scene = Scene(snapshot, self.layout)
        path = PathSegments()

        path.extend(base_path)
        path.extend(middle_trail(snapshot, target, boundary))
        path.append(preceding_separator(scene, target, boundary))
        if target.is_toggle:
            path.extend(toggle_hierarchy(scene, target, boundary))
        path.extend(tree_path)
        path.append(component_label(snapshot, target))

        log.debug("Segments for %s: %s", target.describe(), path.items())
        return path.items()

    def build(
        self,
        snapshot: Snapshot,
        target: Element,
        boundary: Optional[Element] = None,
        base_path: Sequence[str] = (),
        tree_path: Sequence[str] = (),
        separator: Optional[str] = None,
    ) -> Optional[str]:
        """Separator-joined path, or None when nothing could be determined."""
        path = PathSegments()
        path.extend(self.segments(snapshot, target, boundary, base_path, tree_path))
        return path.join(separator if separator is not None else self.separator)

    def build_request(self, snapshot: Snapshot, request: PathRequest) -> Optional[str]:
        target = snapshot.by_id(request.target)
        if target is None:
            log.debug("Target %r is not part of the snapshot", request.target)
            return None
        boundary = snapshot.by_id(request.boundary)
        return self.build(
            snapshot,
            target,
            boundary=boundary,
            base_path=base_segments_for(snapshot, request, self.layout),
            tree_path=request.tree_path,
            separator=request.separator,
        )

    def build_from_source(self, source: ISnapshotSource) -> Optional[str]:
        snapshot = _guard(source.snapshot, "snapshot", None)
        if snapshot is None:
            return None
        target = _guard(source.target, "target", None)
        if target is None:
            return None
        return self.build(
            snapshot,
            target,
            boundary=_guard(source.boundary, "boundary", None),
            base_path=_guard(source.base_segments, "base path", ()),
            tree_path=_guard(source.tree_segments, "tree path", ()),
        )


def build_path(
    snapshot: Snapshot,
    target: Element,
    boundary: Optional[Element] = None,
    separator: str = DEFAULT_SEPARATOR,
    base_path: Sequence[str] = (),
    layout: Optional[LayoutConfig] = None,
) -> Optional[str]:
    """Resolve the breadcrumb path of ``target`` within ``boundary``."""
    return PathBuilder(layout, separator).build(snapshot, target, boundary, base_path)
