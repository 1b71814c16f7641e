"""
CLI (Command Line Interface).

    coursecal export <entries.json> [--config cfg.json] [--term-start D] [--term-end D] [--out file.ics]
    coursecal preview <entries.json>
    coursecal import-html <page.html> <entries.json>

Note:
- Without an output path (flag or config), export writes the calendar to stdout
- Errors in input files or configuration exit with code 1
"""

from __future__ import annotations

import argparse
import sys
from typing import List

from rich import box
from rich.console import Console
from rich.table import Table

from coursecal.config import load_config
from coursecal.errors import CourseCalError
from coursecal.events import build_calendar
from coursecal.export_ics import serialize_calendar, write_calendar
from coursecal.import_html import import_html
from coursecal.log import setup_logging
from coursecal.parse import parse_schedule
from coursecal.storage import load_entries


def _print_warnings(warnings: List[str]) -> None:
    for w in warnings:
        print(f"Warning: {w}", file=sys.stderr)


def _write_stdout(text: str) -> None:
    """
    Write calendar text to stdout without newline translation (keeps CRLF).
    """
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        sys.stdout.write(text)
        return
    sys.stdout.flush()
    buffer.write(text.encode(sys.stdout.encoding or "utf-8"))
    buffer.flush()


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Build the term calendar from an entries file and write it.
    """
    config = load_config(
        args.config,
        term_start=args.term_start,
        term_end=args.term_end,
        output_path=args.out,
    )
    entries = load_entries(args.entries)

    warnings: List[str] = []
    calendar = build_calendar(entries, config.term_start, config.term_end, warnings)
    text = serialize_calendar(
        calendar,
        prodid=config.prodid,
        tzid=config.tzid,
        uid_domain=config.uid_domain,
    )
    _print_warnings(warnings)

    if config.output_path is None:
        _write_stdout(text)
        return 0

    out = write_calendar(text, config.output_path)
    skipped = len(entries) - len(calendar)
    print(f"Exported {len(calendar)} events to: {out} (skipped {skipped} unscheduled)")
    return 0


def _cmd_preview(args: argparse.Namespace) -> int:
    """
    Show how every entry is understood, without writing anything.
    """
    entries = load_entries(args.entries)
    warnings: List[str] = []

    table = Table(title=f"{len(entries)} courses", box=box.SIMPLE)
    table.add_column("Course")
    table.add_column("Type")
    table.add_column("Days")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Location")

    for e in entries:
        row_warnings: List[str] = []
        schedule = parse_schedule(e.days, e.times, row_warnings)
        warnings.extend(f"{e.course_name}: {w}" for w in row_warnings)
        if schedule is None:
            table.add_row(e.course_name, e.section_type, "[dim]unscheduled[/dim]", "", "", e.location)
            continue
        table.add_row(
            e.course_name,
            e.section_type,
            ",".join(schedule.byday()),
            f"{schedule.start:%H:%M}",
            f"{schedule.end:%H:%M}",
            e.location,
        )

    Console().print(table)
    _print_warnings(warnings)
    return 0


def _cmd_import_html(args: argparse.Namespace) -> int:
    n = import_html(args.html, args.out)
    print(f"Imported {n} courses to: {args.out}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="coursecal", description="Course schedule to iCalendar")
    parser.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ERROR")
    parser.add_argument("--log-json", action="store_true", help="Log as JSON lines")
    sub = parser.add_subparsers(dest="command", required=True)

    p_export = sub.add_parser("export", help="Export entries to .ics")
    p_export.add_argument("entries", type=str, help="Entries file (.json)")
    p_export.add_argument("--config", "-c", type=str, default=None, help="Config file (.json)")
    p_export.add_argument("--term-start", type=str, default=None, help="First day of term (YYYY-MM-DD)")
    p_export.add_argument("--term-end", type=str, default=None, help="Last day of term (YYYY-MM-DD)")
    p_export.add_argument("--out", "-o", type=str, default=None, help="Output file path (e.g. courses.ics)")

    p_preview = sub.add_parser("preview", help="Show parsed schedules")
    p_preview.add_argument("entries", type=str, help="Entries file (.json)")

    p_import = sub.add_parser("import-html", help="Convert a saved schedule page to entries JSON")
    p_import.add_argument("html", type=str, help="Saved schedule page (.html)")
    p_import.add_argument("out", type=str, help="Output entries file (.json)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(json_output=args.log_json, log_level=args.log_level)

    handlers = {
        "export": _cmd_export,
        "preview": _cmd_preview,
        "import-html": _cmd_import_html,
    }

    try:
        raise SystemExit(handlers[args.command](args))
    except (CourseCalError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)
