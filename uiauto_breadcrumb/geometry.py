# uiauto_breadcrumb/geometry.py
"""
@file geometry.py
@brief Absolute screen coordinates for snapshot elements.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from .config import LayoutConfig
from .element import Element, ElementKind, Snapshot


def absolute(snapshot: Snapshot, el: Element) -> Tuple[int, int]:
    """
    Screen-space (x, y) of an element.

    Uses the reported on-screen location when the element is showing, otherwise
    sums local offsets up to the root. Elements inside hidden tabs therefore
    still get coordinates comparable with their visible neighbours.
    """
    if el.screen_location is not None and snapshot.is_showing(el):
        x, y = el.screen_location
        return int(x), int(y)

    x = y = 0
    current: Optional[Element] = el
    while current is not None:
        x += current.bounds.x
        y += current.bounds.y
        current = snapshot.parent(current)
    return x, y


class Scene:
    """
    One resolver pass over a snapshot.

    Positions are memoized for the lifetime of the pass only; a new Scene is
    built for every request because the host layout may change in between.
    """

    def __init__(self, snapshot: Snapshot, layout: Optional[LayoutConfig] = None):
        self.snapshot = snapshot
        self.layout = layout or LayoutConfig.current()
        self._positions: Dict[int, Tuple[int, int]] = {}
        self._showing: Dict[int, bool] = {}

    def absolute(self, el: Element) -> Tuple[int, int]:
        pos = self._positions.get(el.index)
        if pos is None:
            pos = absolute(self.snapshot, el)
            self._positions[el.index] = pos
        return pos

    def x(self, el: Element) -> int:
        return self.absolute(el)[0]

    def y(self, el: Element) -> int:
        return self.absolute(el)[1]

    def showing(self, el: Element) -> bool:
        state = self._showing.get(el.index)
        if state is None:
            state = self.snapshot.is_showing(el)
            self._showing[el.index] = state
        return state

    def search_root(self, target: Element, boundary: Optional[Element]) -> Optional[Element]:
        """Container whose subtree bounds every scan: the boundary, else the target's parent."""
        if boundary is not None:
            return boundary
        return self.snapshot.parent(target)

    def find_showing(self, root: Element, kinds: Iterable[ElementKind]) -> List[Element]:
        return [el for el in self.snapshot.descendants(root, kinds) if self.showing(el)]
