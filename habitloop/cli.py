#!/usr/bin/env python3
"""
HabitLoop Command Line Interface

Main entry point for the `habitloop` command. Every subcommand prints a
JSON result and exits with status 1 when the result is unsuccessful.

Usage:
    habitloop log --source Shopping --notes "Added three things to my cart at midnight"
    habitloop analyze 1
    habitloop detect --text "I keep scrolling the feed for hours"
    habitloop dashboard --window 30
    habitloop library
    habitloop program --generate
    habitloop check-in --completed --mood 4 --notes "Phone stayed in the kitchen"
    habitloop progress
    habitloop refresh
    habitloop serve --port 8000
    habitloop --version
"""

import argparse
import json
import sys
from typing import Any

from habitloop import __version__
from habitloop.logging_config import setup_logging


def _emit(result: dict[str, Any]) -> int:
    print(json.dumps(result, indent=2, default=str))
    return 0 if result.get("success") else 1


def cmd_log(args):
    """Handle log subcommand."""
    from habitloop.service import log_entry

    notes = args.notes if args.notes is not None else sys.stdin.read()
    image = None
    if args.image:
        with open(args.image, "rb") as f:
            image = f.read()

    return _emit(
        log_entry(
            source_label=args.source,
            notes=notes,
            timestamp=args.timestamp,
            image=image,
            external_blob=args.external_blob,
        )
    )


def cmd_entries(args):
    from habitloop.service import get_entry, list_entries

    if args.entry_id is not None:
        return _emit(get_entry(args.entry_id))
    return _emit(list_entries())


def cmd_analyze(args):
    from habitloop.service import analyze_entry

    return _emit(analyze_entry(args.entry_id))


def cmd_detect(args):
    """Run the pattern detector on text without storing anything."""
    from habitloop.analysis.pattern_detector import detect_patterns

    text = args.text if args.text is not None else sys.stdin.read()
    detections = detect_patterns(text)
    return _emit(
        {
            "success": True,
            "patterns": [d.to_dict() for d in detections],
            "count": len(detections),
        }
    )


def cmd_patterns(args):
    from habitloop.service import list_patterns

    return _emit(list_patterns())


def cmd_dashboard(args):
    from habitloop.service import get_dashboard

    return _emit(get_dashboard(args.window))


def cmd_library(args):
    from habitloop.service import get_habit_library

    return _emit(get_habit_library())


def cmd_program(args):
    """Show the stored program, or generate a new one with --generate."""
    from habitloop.service import create_program, get_program

    if args.generate:
        return _emit(create_program(args.window))
    return _emit(get_program())


def cmd_check_in(args):
    from habitloop.service import submit_check_in

    return _emit(
        submit_check_in(
            task_completed=args.completed,
            mood_rating=args.mood,
            notes=args.notes or "",
            reduced_behavior=args.reduced,
        )
    )


def cmd_progress(args):
    from habitloop.service import get_progress

    return _emit(get_progress())


def cmd_refresh(args):
    from habitloop.service import ProgramCoordinator

    return _emit(ProgramCoordinator().refresh(args.window))


def cmd_serve(args):
    """Start the HTTP API."""
    import uvicorn

    print(f"Starting HabitLoop API at http://{args.host}:{args.port}", file=sys.stderr)

    uvicorn.run(
        "habitloop.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="habitloop",
        description="HabitLoop - Notice your online habits, then rewire them",
    )
    parser.add_argument(
        "--version", "-V", action="store_true", help="Show version and exit"
    )
    parser.add_argument(
        "--log-level", default=None, help="Log level (default: HABITLOOP_LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # log
    log_parser = subparsers.add_parser("log", help="Log a snippet of online activity")
    log_parser.add_argument("--source", required=True, help="Source label (e.g. Shopping, Social Feed)")
    log_parser.add_argument("--notes", help="What you saw or did (reads stdin when omitted)")
    log_parser.add_argument("--timestamp", type=int, help="Epoch millis (default: now)")
    log_parser.add_argument("--image", help="Path to a screenshot (max 5MB)")
    log_parser.add_argument("--external-blob", help="Reference to externally stored media")
    log_parser.set_defaults(func=cmd_log)

    # entries
    entries_parser = subparsers.add_parser("entries", help="List logged entries, or show one")
    entries_parser.add_argument("entry_id", type=int, nargs="?", help="Entry ID")
    entries_parser.set_defaults(func=cmd_entries)

    # analyze
    analyze_parser = subparsers.add_parser("analyze", help="Detect and store patterns for an entry")
    analyze_parser.add_argument("entry_id", type=int, help="Entry ID")
    analyze_parser.set_defaults(func=cmd_analyze)

    # detect
    detect_parser = subparsers.add_parser("detect", help="Detect patterns in text without storing")
    detect_parser.add_argument("--text", help="Text to analyze (reads stdin when omitted)")
    detect_parser.set_defaults(func=cmd_detect)

    # patterns
    patterns_parser = subparsers.add_parser("patterns", help="List stored patterns")
    patterns_parser.set_defaults(func=cmd_patterns)

    # dashboard
    dashboard_parser = subparsers.add_parser("dashboard", help="Show pattern dashboard insights")
    dashboard_parser.add_argument("--window", type=int, default=None, help="Window in days (7 or 30)")
    dashboard_parser.set_defaults(func=cmd_dashboard)

    # library
    library_parser = subparsers.add_parser("library", help="Show the habit library")
    library_parser.set_defaults(func=cmd_library)

    # program
    program_parser = subparsers.add_parser("program", help="Show or generate the 30-day program")
    program_parser.add_argument("--generate", action="store_true", help="Generate a new program")
    program_parser.add_argument("--window", type=int, default=None, help="Signature window in days (7 or 30)")
    program_parser.set_defaults(func=cmd_program)

    # check-in
    check_in_parser = subparsers.add_parser("check-in", help="Check in for the current program day")
    check_in_parser.add_argument("--completed", action="store_true", help="Task was completed")
    check_in_parser.add_argument("--mood", type=int, default=None, help="Mood rating 1-5")
    check_in_parser.add_argument("--notes", default="", help="Reflection notes")
    check_in_parser.add_argument("--reduced", action="store_true", help="Target behavior was reduced")
    check_in_parser.set_defaults(func=cmd_check_in)

    # progress
    progress_parser = subparsers.add_parser("progress", help="Show program progress")
    progress_parser.set_defaults(func=cmd_progress)

    # refresh
    refresh_parser = subparsers.add_parser(
        "refresh", help="Regenerate the program if behavior has shifted"
    )
    refresh_parser.add_argument("--window", type=int, default=None, help="Window in days (7 or 30)")
    refresh_parser.set_defaults(func=cmd_refresh)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    serve_parser.set_defaults(func=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(f"HabitLoop version {__version__}")
        return 0

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(level=args.log_level)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
