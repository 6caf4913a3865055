"""Command-line front door for lazyhub.

Parses CLI options, merges them with persisted config, and either prints one
directory lookup as JSON or launches the interactive search UI.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .directory import DirectoryClient, DirectoryError
from .highlight import available_style_names, render_json
from .logging_setup import setup_logging
from .runtime import run_app
from .runtime.config import (
    MAX_PAGE_SIZE,
    load_api_base,
    load_search_settings,
    load_style_name,
    load_token,
    save_style_name,
)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _page_size(value: str) -> int:
    parsed = _positive_int(value)
    if parsed > MAX_PAGE_SIZE:
        raise argparse.ArgumentTypeError(f"value must be <= {MAX_PAGE_SIZE}")
    return parsed


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazyhub",
        description="Search GitHub users incrementally and browse their repositories.",
    )
    parser.add_argument("query", nargs="?", default="", help="Initial search text for the interactive UI.")
    lookup = parser.add_mutually_exclusive_group()
    lookup.add_argument("--print", dest="print_query", metavar="QUERY", help="Search once and print users as JSON.")
    lookup.add_argument("--repos", metavar="LOGIN", help="Print LOGIN's repositories as JSON.")
    lookup.add_argument("--user", metavar="LOGIN", help="Print LOGIN's profile as JSON.")
    lookup.add_argument("--list-styles", action="store_true", help="Print available Pygments styles and exit.")
    parser.add_argument("--delay-ms", type=_positive_int, default=None, help="Debounce delay in milliseconds.")
    parser.add_argument("--page-size", type=_page_size, default=None, help="Maximum users per search.")
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Request timeout in seconds.")
    parser.add_argument("--api-base", default=None, help="Directory API base URL.")
    parser.add_argument("--style", default=None, help="Pygments style name for JSON output.")
    parser.add_argument("--save-style", action="store_true", help="Persist --style as the default style.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--debug", action="store_true", help="Log at DEBUG level.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run a print mode or the interactive UI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.debug else "INFO", args.log_file)

    if args.save_style:
        if args.style is None:
            parser.error("--save-style requires --style")
        if args.style not in available_style_names():
            parser.error(f"unknown style: {args.style!r}")
        save_style_name(args.style)
    if args.list_styles:
        sys.stdout.write("\n".join(available_style_names()) + "\n")
        return

    settings = load_search_settings(
        debounce_seconds=args.delay_ms / 1000.0 if args.delay_ms is not None else None,
        page_size=args.page_size,
        request_timeout_seconds=args.timeout,
    )
    client = DirectoryClient(
        args.api_base or load_api_base(),
        token=load_token(),
        timeout_seconds=settings.request_timeout_seconds,
    )

    if args.print_query is None and args.repos is None and args.user is None:
        run_app(client, settings, initial_query=args.query)
        return

    if args.query:
        raise SystemExit("Cannot combine positional query with --print/--repos/--user.")

    try:
        if args.print_query is not None:
            payload: object = [user.to_json() for user in client.search(args.print_query, settings.page_size)]
        elif args.repos is not None:
            payload = [repo.to_json() for repo in client.list_dependents(args.repos)]
        else:
            payload = client.get_user(args.user).to_json()
    except DirectoryError as exc:
        raise SystemExit(f"lazyhub: {exc}") from exc

    no_color = args.no_color or not sys.stdout.isatty()
    sys.stdout.write(render_json(payload, args.style or load_style_name(), no_color))


if __name__ == "__main__":
    main()
