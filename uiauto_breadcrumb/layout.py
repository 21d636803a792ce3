# uiauto_breadcrumb/layout.py
"""
@file layout.py
@brief Geometry thresholds and presets describing the host's visual conventions.
"""

from __future__ import annotations
from copy import deepcopy
from typing import Any, Dict


# Two elements whose absolute Y differs by at most this many pixels share a row.
SAME_ROW_THRESHOLD = 10

# Elements further apart than this horizontally are in different visual areas.
MAX_HORIZONTAL_DISTANCE = 300

# Smallest X step recognized as one nesting level.
MIN_INDENT_DIFF = 5

# Depth budget for the title finder when scanning a dialog root.
TITLE_SEARCH_DEPTH = 5

DEFAULT_SEPARATOR = " | "

SETTINGS_ROOT_TITLE = "Settings"

SHORTCUT_HINTS = ("Ctrl+", "Cmd+", "Alt+")

TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 50


LAYOUT_FIELDS: Dict[str, int] = {
    "same_row_threshold": SAME_ROW_THRESHOLD,
    "max_horizontal_distance": MAX_HORIZONTAL_DISTANCE,
    "min_indent_diff": MIN_INDENT_DIFF,
    "title_search_depth": TITLE_SEARCH_DEPTH,
}

PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    # Dense forms with small insets between nesting levels.
    "compact": {
        "same_row_threshold": 6,
        "max_horizontal_distance": 240,
        "min_indent_diff": 3,
    },
    # Screens rendered at 200% scale report doubled coordinates.
    "hidpi": {
        "same_row_threshold": 20,
        "max_horizontal_distance": 600,
        "min_indent_diff": 10,
    },
}


def list_presets() -> Dict[str, Dict[str, Any]]:
    return {"default": {}, **PRESET_OVERRIDES}


def build_preset_values(preset: str) -> Dict[str, Any]:
    preset_key = (preset or "default").lower()
    values: Dict[str, Any] = deepcopy(LAYOUT_FIELDS)

    if preset_key == "default":
        return values

    overrides = PRESET_OVERRIDES.get(preset_key)
    if overrides is None:
        raise ValueError(f"Unknown layout preset: {preset}")

    values.update(deepcopy(overrides))
    return values
