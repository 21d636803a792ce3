# uiauto_breadcrumb/cli.py
"""
@file cli.py
@brief Command-line interface for uiauto-breadcrumb.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .config import LayoutConfig, available_presets
from .exceptions import BreadcrumbError
from .inspector import inspect_snapshot, write_inspect_outputs
from .interfaces import IPathConsumer
from .layout import DEFAULT_SEPARATOR
from .path import PathBuilder
from .snapshot import FileSnapshotSource, load_snapshot_file
from .utils.logging import setup_logging


class ConsolePathConsumer(IPathConsumer):
    """Prints the resolved path, either plain or as a JSON record."""

    def __init__(self, as_json: bool = False, stream: Any = None):
        self.as_json = as_json
        self.stream = stream or sys.stdout
        self.last: Optional[str] = None

    def consume(self, path: Optional[str]) -> None:
        self.last = path
        if self.as_json:
            record = {"status": "ok" if path else "unavailable", "path": path}
            print(json.dumps(record, ensure_ascii=False), file=self.stream)
        elif path:
            print(path, file=self.stream)
        else:
            print("Path not available", file=sys.stderr)


def _resolve_layout_options(args: argparse.Namespace) -> tuple[str, Dict[str, Any]]:
    """Resolve layout preset and CLI threshold overrides without mutating global state."""
    preset = getattr(args, "preset", None) or "default"
    overrides: Dict[str, Any] = {
        "same_row_threshold": getattr(args, "same_row", None),
        "max_horizontal_distance": getattr(args, "max_distance", None),
        "min_indent_diff": getattr(args, "min_indent", None),
    }
    return preset, {k: v for k, v in overrides.items() if v is not None}


def _configure_logging_from_env(verbose: bool = False) -> None:
    """Enable console logging from UIAUTO_BREADCRUMB_LOG_LEVEL or --verbose."""
    level_name = os.getenv("UIAUTO_BREADCRUMB_LOG_LEVEL", "")
    if verbose and not level_name:
        level_name = "DEBUG"
    if not level_name:
        return
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        print(f"Warning: unknown log level '{level_name}'", file=sys.stderr)
        return
    setup_logging(console_level=level)


def _add_layout_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--preset", default="default", choices=sorted(available_presets()), help="Layout threshold preset")
    parser.add_argument("--same-row", type=int, default=None, help="Override same-row threshold (px)")
    parser.add_argument("--max-distance", type=int, default=None, help="Override max horizontal distance (px)")
    parser.add_argument("--min-indent", type=int, default=None, help="Override minimum indentation step (px)")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    argv = argv if argv is not None else sys.argv[1:]

    p = argparse.ArgumentParser(
        prog="uiauto-breadcrumb",
        description="uiauto-breadcrumb - infer the breadcrumb path of an element in a dialog snapshot",
    )
    p.add_argument("--verbose", "-V", action="store_true", help="Log resolver decisions to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # -------------------------
    # resolve
    # -------------------------
    resp = sub.add_parser("resolve", help="Resolve the path of the target element in a snapshot")
    resp.add_argument("snapshot", help="Path to snapshot YAML/JSON")
    resp.add_argument("--target", "-t", default=None, help="Target element id (overrides the request block)")
    resp.add_argument("--boundary", "-b", default=None, help="Boundary element id (overrides the request block)")
    resp.add_argument("--separator", "-s", default=None, help=f"Segment separator (default: {DEFAULT_SEPARATOR!r})")
    resp.add_argument("--json", action="store_true", help="Print a JSON record instead of the bare path")
    _add_layout_arguments(resp)

    # -------------------------
    # inspect
    # -------------------------
    insp = sub.add_parser("inspect", help="Dump snapshot elements with absolute positions (JSON/TXT)")
    insp.add_argument("snapshot", help="Path to snapshot YAML/JSON")
    insp.add_argument("--out", "-o", default="reports", help="Output directory for inspect reports")
    insp.add_argument("--showing-only", action="store_true", help="Skip elements that are not showing")
    _add_layout_arguments(insp)

    # -------------------------
    # validate
    # -------------------------
    valp = sub.add_parser("validate", help="Validate snapshot documents")
    valp.add_argument("snapshots", nargs="+", help="Snapshot files to validate")

    args = p.parse_args(argv)
    _configure_logging_from_env(args.verbose)

    if args.cmd == "resolve":
        try:
            preset, overrides = _resolve_layout_options(args)
            layout = LayoutConfig.build_from(preset=preset, overrides=overrides)
            source = FileSnapshotSource(args.snapshot, target_id=args.target, boundary_id=args.boundary, layout=layout)
            # Surface unknown ids here; the builder would only log them.
            source.target()
            source.boundary()
        except BreadcrumbError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

        separator = args.separator or source.request.separator
        builder = PathBuilder(layout=layout, separator=separator)
        consumer = ConsolePathConsumer(as_json=args.json)
        consumer.consume(builder.build_from_source(source))
        return 0 if consumer.last else 1

    if args.cmd == "inspect":
        try:
            preset, overrides = _resolve_layout_options(args)
            layout = LayoutConfig.build_from(preset=preset, overrides=overrides)
            document = load_snapshot_file(args.snapshot)
            result = inspect_snapshot(
                document.snapshot,
                include_hidden=not args.showing_only,
                layout=layout,
                source=document.path,
            )
            paths = write_inspect_outputs(result, out_dir=args.out)
            print(json.dumps({
                "status": "ok",
                "outputs": paths,
                "controls": len(result.get("controls", [])),
            }, indent=2, ensure_ascii=False))
            return 0
        except (BreadcrumbError, OSError) as e:
            print(json.dumps({
                "status": "error",
                "error": f"{type(e).__name__}: {e}",
            }, indent=2), file=sys.stderr)
            return 2

    if args.cmd == "validate":
        invalid = 0
        for snapshot_path in args.snapshots:
            try:
                document = load_snapshot_file(snapshot_path)
                if document.request is not None:
                    document.require(document.request.target, role="target")
                    if document.request.boundary is not None:
                        document.require(document.request.boundary, role="boundary")
                print(f"+ Snapshot is valid: {snapshot_path}")
                print(f"  - Elements: {len(document.snapshot)}")
                if document.request is not None:
                    print(f"  - Target: {document.request.target}")
            except BreadcrumbError as e:
                invalid += 1
                print(f"X Snapshot is invalid: {snapshot_path}: {e}", file=sys.stderr)

        total = len(args.snapshots)
        if total > 1:
            print("-" * 80)
            print(f"Total: {total}  Valid: {total - invalid}  Invalid: {invalid}")
        return 2 if invalid else 0

    return 1


if __name__ == "__main__":
    sys.exit(main())
