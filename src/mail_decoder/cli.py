"""Command-line interface for Mail Decoder.

This module provides the main entry point for the CLI application.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from mail_decoder import __version__
from mail_decoder.config import DecoderLimits, get_settings
from mail_decoder.exceptions import MailDecoderError
from mail_decoder.mime import parse, parse_headers
from mail_decoder.models import Headers, Mail

logger = structlog.get_logger()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mail-decoder", description="Mail Decoder")
    subparsers = parser.add_subparsers(dest="command", required=True)

    show_parser = subparsers.add_parser(
        "show",
        help="Decode a raw message file and print its headers and bodies",
    )
    show_parser.add_argument("path", type=Path, help="Path to a raw RFC 822 message (.eml)")
    show_parser.add_argument(
        "--headers-only",
        action="store_true",
        help="Only decode the header block",
    )
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the decoded model as JSON",
    )
    show_parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum multipart nesting depth (default: settings max_nesting_depth)",
    )
    show_parser.add_argument(
        "--max-part-size",
        type=int,
        default=None,
        help="Maximum characters buffered per body part; larger parts are dropped (default: settings max_part_size)",
    )

    return parser


def _limits(args: argparse.Namespace) -> DecoderLimits:
    limits = get_settings().decoder_limits()
    overrides = {}
    if args.max_depth is not None:
        overrides["max_nesting_depth"] = args.max_depth
    if args.max_part_size is not None:
        overrides["max_part_size"] = args.max_part_size
    if overrides:
        limits = DecoderLimits(**{**limits.model_dump(), **overrides})
    return limits


def _print_headers(headers: Headers) -> None:
    date = headers.date()
    print(f"Subject: {headers.subject() or '(no subject)'}")
    print(f"From: {headers.from_() or '(unknown sender)'}")
    print(f"Date: {date.isoformat() if date else '(no date)'}")
    content_type = headers.content_type()
    if content_type is not None:
        print(f"Content-Type: {content_type.mime_type}")


def _print_mail(mail: Mail) -> None:
    _print_headers(mail.headers)
    print(f"Parts: {len(mail.parts)}")
    if mail.plain is not None:
        print("\n--- text/plain ---")
        print(mail.plain)
    if mail.html is not None:
        print("\n--- text/html ---")
        print(mail.html)


def _cmd_show(args: argparse.Namespace) -> int:
    path: Path = args.path
    try:
        raw = path.read_bytes()
    except OSError as exc:
        logger.error("message_read_failed", path=str(path), error=str(exc))
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return 1

    try:
        limits = _limits(args)
    except ValidationError as exc:
        print(f"Invalid limits: {exc}", file=sys.stderr)
        return 2

    try:
        result = parse_headers(raw, limits) if args.headers_only else parse(raw, limits)
    except MailDecoderError as exc:
        logger.error("message_decode_failed", path=str(path), error=str(exc))
        print(f"Cannot decode {path}: {exc}", file=sys.stderr)
        return 1

    logger.info("message_decoded", path=str(path), headers_only=args.headers_only)

    if args.json:
        print(result.model_dump_json(indent=2))
    elif isinstance(result, Mail):
        _print_mail(result)
    else:
        _print_headers(result)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the Mail Decoder CLI.

    Args:
        args: Command-line arguments. If None, uses sys.argv.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    if args is None:
        args = sys.argv[1:]

    settings = get_settings()

    # Configure logging
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, settings.log_level.upper(), logging.INFO)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )

    logger.debug("mail_decoder_started", version=__version__, debug=settings.debug)

    parser = _build_parser()
    parsed = parser.parse_args(args)

    if parsed.command == "show":
        return _cmd_show(parsed)

    logger.error("unknown_command", command=parsed.command)
    return 2


if __name__ == "__main__":
    sys.exit(main())
