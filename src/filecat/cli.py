"""filecat: print file contents with headers.

Usage
-----
    filecat src/*.py
    filecat -r src --exclude "**/__pycache__" --header "### {file}"
    filecat -r assets --hex --output dump.txt --counter

Content goes to stdout (or the file given with ``--output``, which must not
exist yet). Errors, warnings and counters go to the log stream on stderr.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

from colorama import just_fix_windows_console

from filecat import __version__
from filecat.config import FILE_PLACEHOLDER, ExitCode
from filecat.exceptions import FilecatError, NoInputPathsError
from filecat.expansion import expand_patterns
from filecat.logging import logger, setup_logging
from filecat.matching import ExclusionMatcher
from filecat.output_construction import check_output_path, open_sink
from filecat.settings import Settings
from filecat.traversal import FileCat

if TYPE_CHECKING:
    from collections.abc import Sequence


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="filecat",
        description="Print file contents with headers.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument(
        "paths",
        nargs="*",
        help="File or directory paths (supports glob patterns like src/*.py).",
    )
    p.add_argument("-r", "--recursive", action="store_true", help="Recursively read directories.")
    p.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Exclude files or directories (glob, e.g. *.py or src/**/*.py; repeatable).",
    )
    p.add_argument(
        "--header",
        default=argparse.SUPPRESS,
        metavar="TEMPLATE",
        help="Header template; {file} is replaced by the path (default: '==> {file}').",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print content as decoded text instead of escaping non-printable characters.",
    )
    p.add_argument("--hex", action="store_true", help="Print non-text file contents in hexadecimal.")
    p.add_argument("--color", action="store_true", help="Enable colored output of headers.")
    p.add_argument(
        "--no-log-color",
        action="store_true",
        help="Disable colored output of log messages.",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write output to a new file.",
    )
    p.add_argument("--counter", action="store_true", help="Log running and total file counts.")
    p.add_argument(
        "--skip-non-text",
        action="store_true",
        help="Print a marker instead of the content of non-text files.",
    )
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    return p


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    args = build_parser().parse_args(argv)
    return Settings(**vars(args))


def run(settings: Settings) -> ExitCode:
    """Validate the configuration, then print every matching file.

    Every fatal check happens before the output is opened, so a rejected run
    leaves no partial output file behind.

    Args:
        settings (Settings): the resolved configuration of the run

    Raises:
        FilecatError: when the configuration is rejected.

    Returns:
        ExitCode: ``SUCCESS`` once the traversal is done or nothing matched
    """
    if not settings.paths:
        raise NoInputPathsError
    matcher = ExclusionMatcher.from_patterns(settings.exclude)
    paths = expand_patterns(settings.paths)
    if not paths:
        logger.warning("No matching files found")
        return ExitCode.SUCCESS

    if settings.output is not None:
        check_output_path(settings.output)

    if FILE_PLACEHOLDER not in settings.header:
        logger.warning("Header does not contain the placeholder %s", FILE_PLACEHOLDER)

    with open_sink(settings.output) as sink:
        FileCat(settings, matcher, sink).run(paths)
    return ExitCode.SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    settings = parse_args(argv)
    just_fix_windows_console()
    setup_logging(settings.log_file or None, use_color=settings.use_log_color)

    try:
        return run(settings)
    except FilecatError as e:
        logger.error(str(e))
        return ExitCode.FATAL


if __name__ == "__main__":
    raise SystemExit(main())
