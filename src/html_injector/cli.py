#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html_injector/cli.py
"""Command-line interface for html_injector.

Reads markup from a file or standard input, converts it and writes the
resulting tree to standard output, either as JSON or re-rendered as HTML.

Exit codes:

- 0: a tree was produced
- 1: the input held no content
- 2: usage error (bad arguments, unreadable input, unavailable parser)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from html_injector import __version__
from html_injector.ast.serialization import node_to_json
from html_injector.constants import (
    DEFAULT_HTML_PARSER,
    DEFAULT_JSON_INDENT,
    DEFAULT_OUTPUT_FORMAT,
    EXIT_NO_CONTENT,
    EXIT_SUCCESS,
    EXIT_USAGE_ERROR,
    HTML_PARSERS,
    OUTPUT_FORMATS,
)
from html_injector.exceptions import HtmlInjectorError
from html_injector.logging_utils import configure_logging
from html_injector.options import InjectorOptions
from html_injector.pipeline import convert
from html_injector.renderers.html import render_html

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="html-injector",
        description="Sanitize untrusted HTML and print it as an output node tree.",
    )
    parser.add_argument("input", nargs="?", default="-", help="Input file, or '-' for standard input (default)")
    parser.add_argument(
        "--format",
        "-f",
        choices=OUTPUT_FORMATS,
        default=DEFAULT_OUTPUT_FORMAT,
        help="Output format: 'json' tree (default) or re-rendered 'html'",
    )
    parser.add_argument(
        "--parser",
        choices=HTML_PARSERS,
        default=DEFAULT_HTML_PARSER,
        help="BeautifulSoup tree builder (default: %(default)s)",
    )
    parser.add_argument(
        "--no-sanitize",
        action="store_true",
        help="Skip sanitization (trusted input only; event handlers are still dropped)",
    )
    parser.add_argument(
        "--trailing-space",
        action="store_true",
        help="Append a single-space text node inside the container",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=DEFAULT_JSON_INDENT,
        help="JSON indentation; 0 for compact output (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: %(default)s)",
    )
    parser.add_argument("--log-file", type=str, default=None, help="Write log messages to this file as well")
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Enable trace mode: DEBUG level with timestamps and logger names",
    )
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    return parser


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes precedence over --log-level
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(args: list[str] | None = None) -> int:
    """Execute the command-line interface.

    Parameters
    ----------
    args : list[str], optional
        Command-line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    _setup_logging_level(parsed_args)

    if parsed_args.indent < 0:
        print("Error: --indent must not be negative", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        markup = _read_input(parsed_args.input)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: Could not read input {parsed_args.input!r}: {e}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    try:
        options = InjectorOptions(
            html_parser=parsed_args.parser,
            sanitize=not parsed_args.no_sanitize,
            trailing_space=parsed_args.trailing_space,
        )
        tree = convert(markup, options)
    except HtmlInjectorError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_USAGE_ERROR

    if tree is None:
        logger.info("No content in %s", "standard input" if parsed_args.input == "-" else parsed_args.input)
        return EXIT_NO_CONTENT

    if parsed_args.format == "html":
        print(render_html(tree))
    else:
        print(node_to_json(tree, indent=parsed_args.indent or None))

    return EXIT_SUCCESS
