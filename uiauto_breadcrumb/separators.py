# uiauto_breadcrumb/separators.py
"""
@file separators.py
@brief Titled separators and titled borders that enclose a target element.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Sequence

from .config import LayoutConfig
from .element import Element, ElementKind, Snapshot, strip_html
from .geometry import Scene
from .utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class SeparatorSpot:
    element: Element
    y: int
    x: int


def collect_separators(scene: Scene, root: Element, below_y: int, inclusive: bool = True) -> List[SeparatorSpot]:
    """Showing separators under ``root`` whose Y is above (or at) ``below_y``."""
    spots = []
    for sep in scene.find_showing(root, (ElementKind.TITLED_SEPARATOR,)):
        x, y = scene.absolute(sep)
        if y < below_y or (inclusive and y == below_y):
            spots.append(SeparatorSpot(sep, y, x))
    return spots


def is_multi_column(spots: Sequence[SeparatorSpot], layout: LayoutConfig) -> bool:
    """Two separators on one row but far apart horizontally mean side-by-side columns."""
    for a in spots:
        for b in spots:
            if a is b:
                continue
            if (abs(a.y - b.y) < layout.same_row_threshold
                    and abs(a.x - b.x) > layout.max_horizontal_distance):
                return True
    return False


def nearest_above(
    spots: Sequence[SeparatorSpot],
    target_x: int,
    layout: LayoutConfig,
    multi_column: bool,
) -> Optional[SeparatorSpot]:
    """
    Closest separator above the target (greatest Y, first wins on ties).

    In multi-column layouts a separator is skipped when the target sits
    clearly to its left, or when it is far to the target's left while another
    separator is horizontally closer.
    """
    best: Optional[SeparatorSpot] = None
    for spot in spots:
        if best is not None and spot.y <= best.y:
            continue

        if multi_column:
            horizontal_diff = target_x - spot.x
            if horizontal_diff < -layout.min_indent_diff:
                continue
            closer_exists = any(
                other is not spot and abs(target_x - other.x) < abs(target_x - spot.x)
                for other in spots
            )
            if closer_exists and horizontal_diff > layout.max_horizontal_distance:
                continue

        best = spot
    return best


def find_preceding_separator(scene: Scene, target: Element, boundary: Optional[Element]) -> Optional[Element]:
    root = scene.search_root(target, boundary)
    if root is None:
        return None

    target_x, target_y = scene.absolute(target)
    spots = collect_separators(scene, root, target_y, inclusive=True)
    multi_column = is_multi_column(spots, scene.layout)
    best = nearest_above(spots, target_x, scene.layout, multi_column)
    if best is None:
        return None
    if multi_column:
        log.debug("Multi-column layout: picked separator %s", best.element.describe())
    return best.element


def preceding_separator(scene: Scene, target: Element, boundary: Optional[Element]) -> Optional[str]:
    """Text of the nearest titled separator visually above the target."""
    sep = find_preceding_separator(scene, target, boundary)
    if sep is None:
        return None
    return sep.clean_text or None


def has_intervening_separator(scene: Scene, root: Element, top_y: int, bottom_y: int) -> bool:
    """True when a showing separator lies strictly between two Y coordinates."""
    for sep in scene.find_showing(root, (ElementKind.TITLED_SEPARATOR,)):
        if top_y < scene.y(sep) < bottom_y:
            return True
    return False


def collect_border_title(el: Element, items: Deque[str]) -> None:
    if el.kind != ElementKind.TITLED_BORDER_PANEL:
        return
    title = strip_html(el.border_title)
    if title:
        items.appendleft(title)


def titled_borders(snapshot: Snapshot, target: Element, boundary: Optional[Element]) -> List[str]:
    """Titled border texts from target up to the boundary (exclusive), outermost first."""
    items: Deque[str] = deque()
    current: Optional[Element] = target
    while current is not None and (boundary is None or current.index != boundary.index):
        collect_border_title(current, items)
        current = snapshot.parent(current)
    return list(items)
