# uiauto_breadcrumb/tabs.py
"""
@file tabs.py
@brief Selected tab titles of the tab containers enclosing a target.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, List, Optional

from .element import Element, ElementKind, Snapshot, strip_html
from .separators import collect_border_title


def selected_tab_title(el: Element) -> Optional[str]:
    """
    Title of the selected tab, or None.

    Containers reporting ``selected_title`` use it directly; legacy tabbed
    panes only expose titles by index, so an out-of-range index yields nothing.
    """
    if el.kind != ElementKind.TAB_CONTAINER:
        return None
    if el.selected_title is not None:
        return strip_html(el.selected_title) or None
    if 0 <= el.selected_index < len(el.tab_titles):
        return strip_html(el.tab_titles[el.selected_index]) or None
    return None


def collect_tab_title(el: Element, items: Deque[str]) -> None:
    title = selected_tab_title(el)
    if title:
        items.appendleft(title)


def _walk_up(snapshot: Snapshot, target: Element, boundary: Optional[Element], tabs: bool, borders: bool) -> List[str]:
    items: Deque[str] = deque()
    current: Optional[Element] = target
    while current is not None and (boundary is None or current.index != boundary.index):
        if tabs:
            collect_tab_title(current, items)
        if borders:
            collect_border_title(current, items)
        current = snapshot.parent(current)
    return list(items)


def tab_trail(snapshot: Snapshot, target: Element, boundary: Optional[Element]) -> List[str]:
    """Selected tab titles from target up to the boundary (exclusive), outer tab first."""
    return _walk_up(snapshot, target, boundary, tabs=True, borders=False)


def middle_trail(snapshot: Snapshot, target: Element, boundary: Optional[Element]) -> List[str]:
    """Tab titles and titled borders interleaved in true nesting order, outermost first."""
    return _walk_up(snapshot, target, boundary, tabs=True, borders=True)
