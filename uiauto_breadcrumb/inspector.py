# uiauto_breadcrumb/inspector.py
"""Snapshot inspector: dumps every element with its resolved geometry."""

from __future__ import annotations
import json
import os
import time
from typing import Any, Dict, Optional

from .config import LayoutConfig
from .element import Snapshot
from .geometry import Scene


def _ts() -> str:
    """Generate timestamp string."""
    return time.strftime("%Y%m%d_%H%M%S")


def inspect_snapshot(
    snapshot: Snapshot,
    include_hidden: bool = True,
    layout: Optional[LayoutConfig] = None,
    source: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Enumerate snapshot elements with absolute positions.

    Args:
        snapshot: Snapshot to inspect
        include_hidden: Include elements that are not showing
        layout: Layout thresholds recorded alongside the dump
        source: Optional file the snapshot came from

    Returns:
        Dict with layout settings and one entry per element
    """
    scene = Scene(snapshot, layout)
    result: Dict[str, Any] = {
        "source": source,
        "timestamp": _ts(),
        "layout": scene.layout.to_dict(),
        "controls": [],
    }

    for el in snapshot:
        showing = scene.showing(el)
        if not include_hidden and not showing:
            continue
        x, y = scene.absolute(el)
        depth = sum(1 for _ in snapshot.ancestors(el))
        result["controls"].append({
            "index": el.index,
            "id": el.id,
            "kind": el.kind.value,
            "text": el.clean_text or None,
            "depth": depth,
            "bounds": [el.bounds.x, el.bounds.y, el.bounds.width, el.bounds.height],
            "absolute": [x, y],
            "visible": el.visible,
            "showing": showing,
            "selected": el.selected if el.is_toggle else None,
            "children": len(el.children),
        })

    return result


def write_inspect_outputs(result: Dict[str, Any], out_dir: str = "reports") -> Dict[str, str]:
    """
    Write inspection results to files.

    Args:
        result: Inspection result dict
        out_dir: Output directory

    Returns:
        Dict mapping output type to file path
    """
    os.makedirs(out_dir, exist_ok=True)

    timestamp = result.get("timestamp", _ts())
    source = result.get("source") or "snapshot"
    stem = os.path.splitext(os.path.basename(source))[0].replace(" ", "_")

    paths = {}

    json_path = os.path.join(out_dir, f"inspect_{stem}_{timestamp}.json")
    with open(json_path, "w", encoding="utf-8") as f:
        json.dump(result, f, indent=2, ensure_ascii=False)
    paths["json"] = json_path

    txt_path = os.path.join(out_dir, f"inspect_{stem}_{timestamp}.txt")
    with open(txt_path, "w", encoding="utf-8") as f:
        f.write("Snapshot Inspection\n")
        f.write("=" * 80 + "\n")
        f.write(f"Source: {result.get('source')}\n")
        f.write(f"Timestamp: {timestamp}\n")
        f.write(f"Layout: {result.get('layout')}\n")
        f.write(f"Controls: {len(result.get('controls', []))}\n")
        f.write("=" * 80 + "\n\n")

        for ctrl in result.get("controls", []):
            indent = "  " * int(ctrl.get("depth", 0))
            ident = ctrl.get("id") or f"@{ctrl.get('index')}"
            f.write(f"{indent}[{ident}] {ctrl.get('kind')}\n")
            f.write(f"{indent}    text: {ctrl.get('text')!r}\n")
            f.write(f"{indent}    absolute: {ctrl.get('absolute')}  bounds: {ctrl.get('bounds')}\n")
            f.write(f"{indent}    showing: {ctrl.get('showing')}")
            if ctrl.get("selected") is not None:
                f.write(f"  selected: {ctrl.get('selected')}")
            f.write("\n")

    paths["text"] = txt_path

    return paths
