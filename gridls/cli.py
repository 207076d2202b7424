"""Command-line front door for gridls.

Parses CLI options, reads the target directory, and prints the rendered
listing. Fatal errors are reported on stderr and exit with status 1.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import load_fallback_width, load_show_hidden, load_use_color
from .entries import DirectoryReadError, EntryMetadataError, read_directory
from .listing import DisplayOptions, render_listing
from .printer import ColorizedPrinter, default_printer
from .terminal import resolve_terminal_width

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridls",
        description=(
            "List information about DIRECTORY. "
            "If no directory is specified, the current directory is used."
        ),
    )
    parser.add_argument("path", nargs="?", default=None, metavar="DIRECTORY", help="Directory to list.")
    parser.add_argument(
        "-a",
        "--all",
        dest="show_hidden",
        action="store_const",
        const=True,
        default=None,
        help="Do not ignore entries starting with '.'.",
    )
    parser.add_argument("-l", dest="long_format", action="store_true", help="Use a long listing format.")
    color_group = parser.add_mutually_exclusive_group()
    color_group.add_argument(
        "--color", dest="color", action="store_const", const=True, default=None, help="Colorize output."
    )
    color_group.add_argument(
        "--no-color", dest="color", action="store_const", const=False, help="Disable color output."
    )
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Column width for grid layout (default: terminal width).",
    )
    parser.add_argument("--debug", action="store_true", help="Log diagnostics to stderr.")
    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def resolve_options(args: argparse.Namespace) -> DisplayOptions:
    """Merge explicit flags with persisted defaults."""
    show_color = args.color if args.color is not None else load_use_color()
    show_hidden = args.show_hidden if args.show_hidden is not None else load_show_hidden()
    return DisplayOptions(show_color=show_color, show_hidden=show_hidden, long_format=args.long_format)


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse arguments and print the listing for one directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is listed.
    """
    args = create_parser().parse_args(argv)
    _configure_logging(args.debug)
    options = resolve_options(args)
    printer = ColorizedPrinter() if options.show_color else default_printer()

    if args.path is not None:
        path = Path(args.path)
    else:
        path = default_path if default_path is not None else Path.cwd()
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    try:
        entries = read_directory(path)
    except DirectoryReadError as exc:
        printer.print_error(exc.cause, f"unable to read directory {path}")
        raise SystemExit(1) from exc

    width = args.width if args.width is not None else resolve_terminal_width(load_fallback_width())
    logger.debug("listing %s with width %d and %s", path, width, options)

    try:
        output = render_listing(entries, options, width)
    except EntryMetadataError as exc:
        printer.print_error(exc.cause, f"unable to get file info for {exc.name}")
        raise SystemExit(1) from exc

    printer.write(output)


if __name__ == "__main__":
    main()
