# uiauto_breadcrumb/element.py
"""
@file element.py
@brief Immutable snapshot of a dialog's component tree.

The host captures its live component tree once per user action and hands it
over as a flat arena of elements addressed by index. Parent and child links
are indices into that arena, so nothing the resolver reads can change while a
path is being computed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

_TAG_PATTERN = re.compile(r"<[^>]*>")


def strip_html(text: Optional[str]) -> str:
    """Remove markup tags and surrounding whitespace."""
    if not text:
        return ""
    return _TAG_PATTERN.sub("", text).strip()


class ElementKind(str, Enum):
    LABEL = "label"
    RICH_TEXT = "rich_text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    TOGGLE = "toggle"
    CONTAINER = "container"
    TAB_CONTAINER = "tab_container"
    TITLED_SEPARATOR = "titled_separator"
    TITLED_BORDER_PANEL = "titled_border_panel"


TOGGLE_KINDS = frozenset({ElementKind.CHECKBOX, ElementKind.RADIO, ElementKind.TOGGLE})

# Only checkboxes and radio buttons take part in option hierarchies.
OPTION_KINDS = frozenset({ElementKind.CHECKBOX, ElementKind.RADIO})


@dataclass(frozen=True)
class Bounds:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


@dataclass(frozen=True)
class TextFragment:
    text: str
    bold: bool = False


@dataclass(frozen=True)
class Element:
    """One node of the captured tree."""
    index: int
    kind: ElementKind
    id: Optional[str] = None
    text: Optional[str] = None
    bounds: Bounds = Bounds()
    visible: bool = True
    selected: bool = False
    bold: bool = False
    fragments: Tuple[TextFragment, ...] = ()
    tab_titles: Tuple[str, ...] = ()
    selected_index: int = -1
    selected_title: Optional[str] = None
    border_title: Optional[str] = None
    label_for: Optional[str] = None
    screen_location: Optional[Tuple[int, int]] = None
    parent: Optional[int] = None
    children: Tuple[int, ...] = ()

    @property
    def clean_text(self) -> str:
        return strip_html(self.text)

    @property
    def is_toggle(self) -> bool:
        return self.kind in TOGGLE_KINDS

    @property
    def is_option(self) -> bool:
        return self.kind in OPTION_KINDS

    def describe(self) -> str:
        ident = f"#{self.id}" if self.id else f"@{self.index}"
        text = self.clean_text
        return f"{self.kind.value}{ident}" + (f" {text!r}" if text else "")


class Snapshot:
    """
    Read-only arena of elements.

    Index 0 is the root of the captured tree. Elements are stored in pre-order,
    so iterating the arena visits them in the same order as a depth-first walk.
    """

    def __init__(self, elements: Sequence[Element]):
        self._elements: Tuple[Element, ...] = tuple(elements)
        self._ids: Dict[str, int] = {}
        for el in self._elements:
            if el.id is not None and el.id not in self._ids:
                self._ids[el.id] = el.index

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[Element]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> Element:
        return self._elements[index]

    @property
    def root(self) -> Optional[Element]:
        return self._elements[0] if self._elements else None

    def ids(self) -> List[str]:
        return sorted(self._ids)

    def by_id(self, element_id: Optional[str]) -> Optional[Element]:
        if element_id is None:
            return None
        index = self._ids.get(element_id)
        return None if index is None else self._elements[index]

    def parent(self, el: Element) -> Optional[Element]:
        return None if el.parent is None else self._elements[el.parent]

    def children(self, el: Element) -> List[Element]:
        return [self._elements[i] for i in el.children]

    def ancestors(self, el: Element) -> Iterator[Element]:
        """Yield the element's ancestors, closest first."""
        current = self.parent(el)
        while current is not None:
            yield current
            current = self.parent(current)

    def is_ancestor(self, candidate: Element, el: Element) -> bool:
        return any(a.index == candidate.index for a in self.ancestors(el))

    def descendants(self, root: Element, kinds: Optional[Iterable[ElementKind]] = None) -> Iterator[Element]:
        """Pre-order walk below ``root`` (root excluded), optionally filtered by kind."""
        wanted = frozenset(kinds) if kinds is not None else None
        stack: List[int] = list(reversed(root.children))
        while stack:
            el = self._elements[stack.pop()]
            if wanted is None or el.kind in wanted:
                yield el
            stack.extend(reversed(el.children))

    def is_showing(self, el: Element) -> bool:
        """True when the element and every ancestor are visible."""
        if not el.visible:
            return False
        return all(a.visible for a in self.ancestors(el))

    def labeled_by(self, el: Element) -> Optional[Element]:
        """First label whose ``label_for`` names this element."""
        if el.id is None:
            return None
        for candidate in self._elements:
            if candidate.kind == ElementKind.LABEL and candidate.label_for == el.id:
                return candidate
        return None
