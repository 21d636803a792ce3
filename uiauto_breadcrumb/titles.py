# uiauto_breadcrumb/titles.py
"""
@file titles.py
@brief Depth-bounded search for header text inside a subtree.

Dialog and panel headers are usually a bold label, a rich text element whose
bold fragments form the title, or failing both a short label that reads like
a title. Each search walks the subtree in pre-order and stops at the first
match; children are only entered while depth budget remains.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from .element import Element, ElementKind, Snapshot, strip_html
from .layout import SHORTCUT_HINTS, TITLE_MAX_LENGTH, TITLE_MIN_LENGTH
from .utils.logging import get_logger

log = get_logger(__name__)

Matcher = Callable[[Element], Optional[str]]


def _scan(snapshot: Snapshot, root: Element, max_depth: int, matcher: Matcher) -> Optional[str]:
    if max_depth <= 0:
        return None

    # (element index, depth budget of the container holding it)
    stack: List[Tuple[int, int]] = [(i, max_depth) for i in reversed(root.children)]
    while stack:
        index, budget = stack.pop()
        el = snapshot[index]
        if not el.visible:
            continue
        found = matcher(el)
        if found:
            return found
        if el.children and budget - 1 > 0:
            stack.extend((i, budget - 1) for i in reversed(el.children))
    return None


def _bold_label(el: Element) -> Optional[str]:
    if el.kind != ElementKind.LABEL or not el.bold:
        return None
    return el.clean_text or None


def bold_fragment_text(el: Element) -> Optional[str]:
    """Concatenate the bold fragments of a rich text element, space separated."""
    parts = []
    for fragment in el.fragments:
        text = strip_html(fragment.text)
        if text and fragment.bold:
            parts.append(text)
    joined = " ".join(parts)
    return joined if joined.strip() else None


def _bold_rich_text(el: Element) -> Optional[str]:
    if el.kind != ElementKind.RICH_TEXT:
        return None
    return bold_fragment_text(el)


def is_title_like(text: str) -> bool:
    if not text or text.endswith(":"):
        return False
    if not TITLE_MIN_LENGTH <= len(text) <= TITLE_MAX_LENGTH:
        return False
    return not any(hint in text for hint in SHORTCUT_HINTS)


def _title_like_label(el: Element) -> Optional[str]:
    if el.kind != ElementKind.LABEL:
        return None
    text = el.clean_text
    return text if is_title_like(text) else None


def find_bold_label_text(snapshot: Snapshot, root: Element, max_depth: int) -> Optional[str]:
    return _scan(snapshot, root, max_depth, _bold_label)


def find_bold_rich_text(snapshot: Snapshot, root: Element, max_depth: int) -> Optional[str]:
    return _scan(snapshot, root, max_depth, _bold_rich_text)


def find_title_like_label(snapshot: Snapshot, root: Element, max_depth: int) -> Optional[str]:
    return _scan(snapshot, root, max_depth, _title_like_label)


def find_title(snapshot: Snapshot, root: Element, max_depth: int) -> Optional[str]:
    """Try bold label, then bold rich text, then a title-shaped label."""
    for strategy in (find_bold_label_text, find_bold_rich_text, find_title_like_label):
        found = strategy(snapshot, root, max_depth)
        if found:
            log.debug("Title found via %s: %r", strategy.__name__, found)
            return found
    return None
