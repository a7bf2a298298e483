"""Entry point for ``python -m txt2cal``.

Command-line front end for the text-to-calendar pipeline.  Uses stdlib
:mod:`argparse` for argument parsing.

Subcommands:
    convert -- Default. Extract an event from text and write an .ics file.
    extract -- Extract an event from text and print it as JSON.
    render  -- Turn an event JSON file (possibly hand-edited) into .ics.

Exit codes:
    0 -- Success.
    1 -- A conversion, configuration or input error occurred.
    2 -- Argument parsing error (handled by argparse).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from txt2cal.config import ConfigError, Settings, load_settings
from txt2cal.exceptions import ConversionError
from txt2cal.extractor import extract_event
from txt2cal.log import setup_logging
from txt2cal.models.event import EventRecord
from txt2cal.pipeline import run_pipeline
from txt2cal.serializer import serialize_event, suggested_filename

logger = logging.getLogger(__name__)

_SUBCOMMANDS = {"convert", "extract", "render"}
_STDIO = "-"


def _add_text_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Event description, or '-' to read it from stdin.",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=str,
        default=None,
        help="Read the event description from a text file.",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Gemini API key (defaults to GEMINI_API_KEY from config).",
    )


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug-level logging.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="txt2cal",
        description="Turn a free-form event description into an .ics file.",
    )
    subparsers = parser.add_subparsers(dest="command")

    convert_parser = subparsers.add_parser(
        "convert",
        help="Extract an event from text and write an .ics file.",
    )
    _add_text_arguments(convert_parser)
    convert_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output path, or '-' for stdout (default: <title>.ics).",
    )
    _add_common_arguments(convert_parser)

    extract_parser = subparsers.add_parser(
        "extract",
        help="Extract an event from text and print it as JSON.",
    )
    _add_text_arguments(extract_parser)
    _add_common_arguments(extract_parser)

    render_parser = subparsers.add_parser(
        "render",
        help="Write an .ics file from an event JSON file.",
    )
    render_parser.add_argument(
        "record_file",
        type=str,
        help="Path to a JSON file with the event fields, or '-' for stdin.",
    )
    render_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output path, or '-' for stdout (default: <title>.ics).",
    )
    _add_common_arguments(render_parser)

    return parser


def _resolve_command(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> argparse.Namespace:
    """Parse *argv*, routing to ``convert`` when no subcommand is given."""
    if argv and argv[0] not in _SUBCOMMANDS and argv[0] not in {"-h", "--help"}:
        argv = ["convert", *argv]
    return parser.parse_args(argv)


def _read_text(args: argparse.Namespace) -> str:
    """Return the event text from ``--file``, stdin or the positional argument."""
    if args.file is not None:
        return Path(args.file).read_text(encoding="utf-8")
    if args.text == _STDIO:
        return sys.stdin.read()
    return args.text or ""


def _write_ics(ics: bytes, output: str | None, default_name: str) -> None:
    if output == _STDIO:
        sys.stdout.buffer.write(ics)
        sys.stdout.flush()
        return
    path = Path(output or default_name)
    path.write_bytes(ics)
    print(f"Wrote {path}", file=sys.stderr)


def _handle_convert(args: argparse.Namespace, settings: Settings) -> int:
    text = _read_text(args)
    result = run_pipeline(text, args.api_key, settings=settings)
    _write_ics(result.ics, args.output, result.filename)
    return 0


def _handle_extract(args: argparse.Namespace, settings: Settings) -> int:
    text = _read_text(args)
    record = extract_event(text, args.api_key, settings=settings)
    print(json.dumps(record.to_payload(), ensure_ascii=False, indent=2))
    return 0


def _handle_render(args: argparse.Namespace, settings: Settings) -> int:
    if args.record_file == _STDIO:
        raw = sys.stdin.read()
    else:
        raw = Path(args.record_file).read_text(encoding="utf-8")
    try:
        record = EventRecord.model_validate_json(raw)
    except ValidationError as exc:
        print(f"Error: Invalid event record: {exc}", file=sys.stderr)
        return 1
    ics = serialize_event(record, calendar_name=settings.calendar_name)
    _write_ics(ics, args.output, suggested_filename(record))
    return 0


_HANDLERS = {
    "convert": _handle_convert,
    "extract": _handle_extract,
    "render": _handle_render,
}


def main(argv: list[str] | None = None) -> int:
    """Run the txt2cal CLI.

    Args:
        argv: Command-line arguments.  Defaults to ``sys.argv[1:]``.

    Returns:
        Exit code: ``0`` on success, ``1`` on error.
    """
    parser = build_parser()
    args = _resolve_command(parser, argv if argv is not None else sys.argv[1:])

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = load_settings()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        setup_logging("DEBUG" if args.verbose else settings.log_level)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        return _HANDLERS[args.command](args, settings)
    except ConversionError as exc:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
