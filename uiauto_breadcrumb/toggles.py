# uiauto_breadcrumb/toggles.py
"""
@file toggles.py
@brief Group labels and parent options of a checkbox or radio button.

Option panels express nesting only through geometry: a child option is
indented under its parent, a group label ending with ':' sits above (or to the
left of) the options it names, and titled separators start new sections.
Given a toggle target, this module reconstructs that nesting:

    Scheme:                       <- group label
      [x] Use per-project         <- parent option
          (o) Default             <- target
          ( ) Project             <- unselected radio peer, never a parent

Every rule is a tie-broken geometric comparison against the thresholds in
LayoutConfig; when a rule cannot decide, the segment is simply left out.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Set

from .element import Element, ElementKind, OPTION_KINDS, Snapshot
from .geometry import Scene
from .separators import (SeparatorSpot, collect_separators, has_intervening_separator,
                         is_multi_column, nearest_above)
from .utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class ToggleSpot:
    element: Element
    y: int
    x: int

    @property
    def index(self) -> int:
        return self.element.index


@dataclass(frozen=True)
class LabelSpot:
    element: Element
    y: int
    x: int


@dataclass(frozen=True)
class GroupLabel:
    text: str
    y: int
    element: Element


@dataclass
class ToggleLayout:
    """Positions gathered once per pass around one toggle target."""
    root: Element
    target: Element
    x: int
    y: int
    separators: List[SeparatorSpot]
    multi_column: bool
    section_top: Optional[int]
    toggles: List[ToggleSpot]
    grid_siblings: Set[int]
    master: Optional[ToggleSpot]
    group_labels: List[LabelSpot]


def find_grid_siblings(
    target: Element,
    target_y: int,
    target_x: int,
    toggles: Sequence[ToggleSpot],
    same_row_threshold: int,
    min_indent_diff: int,
) -> Set[int]:
    """
    Indices of toggles laid out in the same grid as the target.

    A grid shows up as several toggles on the target's row at clearly
    different X. Every row having an item in one of those columns and itself
    spanning more than one column belongs to the grid.
    """
    same_row = [
        t for t in toggles
        if t.index != target.index and abs(t.y - target_y) <= same_row_threshold
    ]
    if not any(abs(t.x - target_x) > min_indent_diff for t in same_row):
        return set()

    columns = {target_x}
    columns.update(t.x for t in same_row)

    rows: Dict[int, List[ToggleSpot]] = defaultdict(list)
    for t in toggles:
        rows[int(t.y / same_row_threshold)].append(t)

    siblings: Set[int] = set()
    for items in rows.values():
        if len(items) < 2:
            continue
        positions = {t.x for t in items}
        in_grid_columns = any(
            abs(col - pos) <= min_indent_diff for col in columns for pos in positions
        )
        if not in_grid_columns:
            continue
        spans_columns = any(
            a is not b and abs(a.x - b.x) > min_indent_diff for a in items for b in items
        )
        if spans_columns:
            siblings.update(t.index for t in items if t.index != target.index)
    return siblings


def find_master_checkbox(
    scene: Scene,
    root: Element,
    target: Element,
    toggles: Sequence[ToggleSpot],
    separators: Sequence[SeparatorSpot],
) -> Optional[ToggleSpot]:
    """
    The topmost checkbox, when it governs the options below it.

    Being listed first is not enough: some option must be indented under it
    before the next separator. Otherwise the first checkbox is an ordinary
    item and the indented options belong to a later section.
    """
    topmost: Optional[ToggleSpot] = None
    for cb in scene.find_showing(root, (ElementKind.CHECKBOX,)):
        if cb.index == target.index:
            continue
        x, y = scene.absolute(cb)
        if topmost is None or y < topmost.y:
            topmost = ToggleSpot(cb, y, x)
    if topmost is None:
        return None

    next_separator_y: Optional[int] = None
    for sep in separators:
        if sep.y > topmost.y and (next_separator_y is None or sep.y < next_separator_y):
            next_separator_y = sep.y

    indent = scene.layout.min_indent_diff
    for t in toggles:
        if t.index == topmost.index:
            continue
        if (t.x > topmost.x + indent and t.y > topmost.y
                and (next_separator_y is None or t.y < next_separator_y)):
            return topmost
    return None


def analyze(scene: Scene, target: Element, boundary: Optional[Element]) -> Optional[ToggleLayout]:
    root = scene.search_root(target, boundary)
    if root is None:
        return None

    layout = scene.layout
    tx, ty = scene.absolute(target)

    separators = collect_separators(scene, root, ty, inclusive=False)
    multi_column = is_multi_column(separators, layout)
    nearest = nearest_above(separators, tx, layout, multi_column)

    group_labels = []
    for label in scene.find_showing(root, (ElementKind.LABEL,)):
        text = label.clean_text
        if text and text.endswith(":"):
            lx, ly = scene.absolute(label)
            if ly < ty:
                group_labels.append(LabelSpot(label, ly, lx))

    toggles = [
        ToggleSpot(tb, scene.y(tb), scene.x(tb))
        for tb in scene.find_showing(root, OPTION_KINDS)
    ]
    grid = find_grid_siblings(target, ty, tx, toggles, layout.same_row_threshold, layout.min_indent_diff)
    master = find_master_checkbox(scene, root, target, toggles, separators)

    if grid:
        log.debug("Grid layout around %s: %d siblings", target.describe(), len(grid))
    if master is not None:
        log.debug("Master checkbox: %s", master.element.describe())

    return ToggleLayout(
        root=root,
        target=target,
        x=tx,
        y=ty,
        separators=separators,
        multi_column=multi_column,
        section_top=nearest.y if nearest is not None else None,
        toggles=toggles,
        grid_siblings=grid,
        master=master,
        group_labels=group_labels,
    )


def _collect_candidates(scene: Scene, info: ToggleLayout) -> List[ToggleSpot]:
    layout = scene.layout
    candidates = []
    for t in info.toggles:
        if t.index == info.target.index:
            continue
        if t.y >= info.y:
            continue
        if info.section_top is not None and t.y < info.section_top:
            continue
        if t.index in info.grid_siblings:
            continue
        if info.multi_column and abs(t.x - info.x) > layout.max_horizontal_distance:
            continue

        less_indented = t.x < info.x - layout.min_indent_diff
        master_at_same_level = (
            info.master is not None
            and t.index == info.master.index
            and abs(t.x - info.x) <= layout.min_indent_diff
        )
        if less_indented or master_at_same_level:
            candidates.append(t)
    return candidates


def _is_blocked_by_label(scene: Scene, info: ToggleLayout, candidate: ToggleSpot, candidates: Sequence[ToggleSpot]) -> bool:
    """A group label between candidate and target claims the target, unless another candidate sits at its level."""
    indent = scene.layout.min_indent_diff
    for label in info.group_labels:
        if not candidate.y < label.y < info.y:
            continue
        if info.x <= label.x + indent:
            continue
        intermediate = any(
            other is not candidate
            and label.y < other.y < info.y
            and abs(other.x - label.x) <= indent
            for other in candidates
        )
        if not intermediate:
            return True
    return False


def _filter_candidates(scene: Scene, info: ToggleLayout, candidates: List[ToggleSpot]) -> List[ToggleSpot]:
    by_level: Dict[int, List[ToggleSpot]] = defaultdict(list)
    for c in candidates:
        by_level[c.x].append(c)

    kept = []
    for c in candidates:
        if info.master is not None and c.index == info.master.index:
            kept.append(c)
            continue

        if c.element.kind == ElementKind.RADIO and not c.element.selected:
            peers = by_level[c.x]
            if any(o is not c and o.element.kind == ElementKind.RADIO for o in peers):
                continue

        if _is_blocked_by_label(scene, info, c, candidates):
            log.debug("Candidate %s blocked by group label", c.element.describe())
            continue
        kept.append(c)
    return kept


def build_hierarchy(candidates: Sequence[ToggleSpot], start_x: int, min_indent_diff: int) -> List[ToggleSpot]:
    """
    Chain of strictly decreasing indentation, farthest ancestor first.

    Walks candidates from the closest (largest Y) upwards, accepting one only
    when it is less indented than the last accepted level.
    """
    ordered = sorted(candidates, key=lambda c: c.y)
    chain: List[ToggleSpot] = []
    current_x = start_x
    for c in reversed(ordered):
        if c.x < current_x - min_indent_diff and c.element.clean_text:
            chain.insert(0, c)
            current_x = c.x
    return chain


def _parent_spots(scene: Scene, info: ToggleLayout) -> List[ToggleSpot]:
    candidates = _collect_candidates(scene, info)
    kept = _filter_candidates(scene, info, candidates)
    return build_hierarchy(kept, info.x, scene.layout.min_indent_diff)


def find_parent_toggles(scene: Scene, target: Element, boundary: Optional[Element]) -> List[Element]:
    """Parent checkboxes/radio buttons of a toggle target, outermost first."""
    if not target.is_toggle:
        return []
    info = analyze(scene, target, boundary)
    if info is None:
        return []
    return [s.element for s in _parent_spots(scene, info)]


def _label_matches_toggle(snapshot: Snapshot, label: Element, target: Element) -> bool:
    """Labels bound to a different kind of toggle via ``label_for`` do not name the target's group."""
    if label.label_for is None:
        return True
    bound = snapshot.by_id(label.label_for)
    if bound is None:
        return True
    if target.kind == ElementKind.RADIO:
        return bound.kind == ElementKind.RADIO
    if target.kind == ElementKind.CHECKBOX:
        return bound.kind == ElementKind.CHECKBOX
    return bound.is_toggle


def _same_row_label(scene: Scene, info: ToggleLayout) -> Optional[GroupLabel]:
    layout = scene.layout
    best: Optional[LabelSpot] = None
    for label in scene.find_showing(info.root, (ElementKind.LABEL,)):
        if not _label_matches_toggle(scene.snapshot, label, info.target):
            continue
        text = label.clean_text
        if not text or not text.endswith(":"):
            continue
        lx, ly = scene.absolute(label)
        if abs(ly - info.y) > layout.same_row_threshold:
            continue
        if lx >= info.x:
            continue
        if info.x - lx > layout.max_horizontal_distance:
            continue
        if best is None or lx > best.x:
            best = LabelSpot(label, ly, lx)
    if best is None:
        return None
    return GroupLabel(best.element.clean_text, best.y, best.element)


def _has_intervening_parent_checkbox(scene: Scene, info: ToggleLayout, label_y: int) -> bool:
    """A less indented checkbox between label and target owns the target instead of the label."""
    for cb in scene.find_showing(info.root, (ElementKind.CHECKBOX,)):
        if info.master is not None and cb.index == info.master.index:
            continue
        cx, cy = scene.absolute(cb)
        if not label_y < cy < info.y:
            continue
        if cx < info.x - scene.layout.min_indent_diff:
            return True
    return False


def _above_label(scene: Scene, info: ToggleLayout) -> Optional[GroupLabel]:
    layout = scene.layout
    best: Optional[LabelSpot] = None
    colon_labels: List[LabelSpot] = []
    for label in scene.find_showing(info.root, (ElementKind.LABEL,)):
        if not _label_matches_toggle(scene.snapshot, label, info.target):
            continue
        text = label.clean_text
        if not text:
            continue
        lx, ly = scene.absolute(label)
        if ly >= info.y - layout.same_row_threshold:
            continue
        if abs(lx - info.x) > layout.max_horizontal_distance:
            continue
        spot = LabelSpot(label, ly, lx)
        if text.endswith(":"):
            colon_labels.append(spot)
        if best is None or ly > best.y:
            best = spot

    if best is None:
        return None
    text = best.element.clean_text
    if not text.endswith(":"):
        return None
    if info.x <= best.x + layout.min_indent_diff:
        return None
    if has_intervening_separator(scene, info.root, best.y, info.y):
        return None
    for other in colon_labels:
        if other.element.index != best.element.index and best.y < other.y < info.y:
            return None
    if _has_intervening_parent_checkbox(scene, info, best.y):
        return None
    return GroupLabel(text, best.y, best.element)


def _group_label(scene: Scene, info: ToggleLayout) -> Optional[GroupLabel]:
    return _same_row_label(scene, info) or _above_label(scene, info)


def find_group_label(scene: Scene, target: Element, boundary: Optional[Element]) -> Optional[GroupLabel]:
    """
    Label naming the target's option group.

    A same-row label to the left wins (horizontal groups such as
    "Placement: (Top) (Bottom)"); otherwise the nearest label above it.
    """
    if not target.is_toggle:
        return None
    info = analyze(scene, target, boundary)
    if info is None:
        return None
    return _group_label(scene, info)


def toggle_hierarchy(scene: Scene, target: Element, boundary: Optional[Element]) -> List[str]:
    """
    Segments to insert before a toggle target: parents above the group label,
    the label itself, then parents at or below the label.
    """
    if not target.is_toggle:
        return []
    info = analyze(scene, target, boundary)
    if info is None:
        return []

    parents = _parent_spots(scene, info)
    label = _group_label(scene, info)

    if label is None:
        return [p.element.clean_text for p in parents]

    above = [p.element.clean_text for p in parents if p.y < label.y]
    below = [p.element.clean_text for p in parents if p.y >= label.y]
    log.debug("Toggle hierarchy for %s: %s / %r / %s", target.describe(), above, label.text, below)
    return above + [label.text] + below
