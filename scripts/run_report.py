#!/usr/bin/env python3
"""
Run a payroll report over a shifts export and print the API JSON.

Shifts are read from a JSON array or JSON Lines export of the reports
API's shift shape (camelCase, each shift joined with employee and role).
When a role catalog is given, every shift whose role name appears in the
catalog takes the catalog's config history instead of the exported one.

Usage:
    python3 scripts/run_report.py --shifts <path> --start YYYY-MM-DD --end YYYY-MM-DD [options]

Examples:
    # Report for March using the configs embedded in the export
    python3 scripts/run_report.py --shifts shifts.json --start 2025-03-01 --end 2025-03-31

    # Same range, role configs from the bundled default catalog
    python3 scripts/run_report.py --shifts shifts.jsonl \\
        --start 2025-03-01 --end 2025-03-31 --catalog default

    # Nested array in the export
    python3 scripts/run_report.py --shifts export.json --json-path data.shifts \\
        --start 2025-03-01 --end 2025-03-07
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from datetime import date
from pathlib import Path

# Project root on sys.path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Compute tipout/payroll summaries for a date range.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--shifts",
        required=True,
        type=Path,
        help="Path to the shifts export (JSON array or JSON Lines).",
    )
    parser.add_argument(
        "--start",
        required=True,
        type=date.fromisoformat,
        help="First day of the report range (inclusive).",
    )
    parser.add_argument(
        "--end",
        required=True,
        type=date.fromisoformat,
        help="Last day of the report range (inclusive).",
    )
    parser.add_argument(
        "--format",
        choices=("array", "jsonl"),
        default=None,
        help="Export format (default: jsonl for .jsonl/.ndjson files, else array).",
    )
    parser.add_argument(
        "--json-path",
        default=None,
        help="Dotted path to the shift array inside the export (e.g. data.shifts).",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Role catalog YAML path, or 'default' for the bundled catalog.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: catalog setting, else INFO).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indent (default: 2).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    source_path = args.shifts.resolve()
    if not source_path.is_file():
        print(f"ERROR: File not found: {source_path}", file=sys.stderr)
        return 1

    # Lazy imports so we fail fast on args first
    from tipout_config import EngineSettings, get_active_catalog
    from tipout_ingestion import load_shifts
    from tipout_kernel.exceptions import TipoutKernelError
    from tipout_kernel.logging_config import configure_logging
    from tipout_services import generate_report, report_to_dict

    catalog = None
    settings = EngineSettings()
    if args.catalog:
        catalog_path = None if args.catalog == "default" else Path(args.catalog)
        try:
            catalog = get_active_catalog(catalog_path)
        except (OSError, ValueError, KeyError, TipoutKernelError) as e:
            print(f"ERROR: Failed to load catalog: {e}", file=sys.stderr)
            return 1
        settings = catalog.settings

    configure_logging(level=(args.log_level or settings.log_level).upper())

    options = {}
    if args.format:
        options["format"] = args.format
    if args.json_path:
        options["json_path"] = args.json_path
    try:
        shifts = load_shifts(source_path, options)
    except (ValueError, TipoutKernelError) as e:
        print(f"ERROR: Failed to read shifts: {e}", file=sys.stderr)
        return 1

    if catalog is not None:
        shifts = [
            replace(s, role=catalog.role(s.role.name))
            if s.role is not None and catalog.role(s.role.name) is not None
            else s
            for s in shifts
        ]

    try:
        report = generate_report(
            shifts, args.start, args.end, money_places=settings.money_places,
        )
    except TipoutKernelError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(json.dumps(report_to_dict(report), indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
