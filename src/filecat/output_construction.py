from __future__ import annotations

import io
import sys
from contextlib import contextmanager
from typing import TYPE_CHECKING

from colorama import Fore, Style

from filecat.config import FILE_PLACEHOLDER
from filecat.exceptions import OutputPathExistsError, OutputPathIsDirectoryError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path
    from typing import TextIO


def build_header(template: str, display_path: str, *, color: bool = False) -> str:
    """Build the header line written before the content of a file.

    ``{file}`` is replaced literally; a template without the placeholder is used
    verbatim.

    Args:
        template (str): the header template, e.g. ``==> {file}``
        display_path (str): the normalized path of the file
        color (bool): wrap the header in bold blue ANSI codes

    Returns:
        str: the header line, newline included
    """
    header = template.replace(FILE_PLACEHOLDER, display_path)
    if color:
        header = f"{Style.BRIGHT}{Fore.BLUE}{header}{Style.RESET_ALL}"
    return header + "\n"


def check_output_path(path: Path) -> None:
    """Refuse an output path that is a directory or an existing file.

    Raises:
        OutputPathIsDirectoryError: if ``path`` is a directory.
        OutputPathExistsError: if ``path`` already exists.
    """
    if path.is_dir():
        raise OutputPathIsDirectoryError(path=path)
    if path.exists():
        raise OutputPathExistsError(path=path)


@contextmanager
def open_sink(path: Path | None) -> Iterator[TextIO]:
    """Open the single output stream of a run.

    Without ``path`` the content goes to stdout, flushed on exit, with
    characters its encoding cannot represent replaced. Otherwise a
    new file is created exclusively and closed on exit, whatever happens
    in the body.

    Raises:
        OutputPathExistsError: if the file appeared since it was checked.
    """
    if path is None:
        # unencodable characters become `?` on a non-UTF-8 console
        if isinstance(sys.stdout, io.TextIOWrapper):
            sys.stdout.reconfigure(errors="replace")
        try:
            yield sys.stdout
        finally:
            sys.stdout.flush()
        return
    try:
        handle = path.open("x", encoding="utf-8", newline="")
    except FileExistsError:
        raise OutputPathExistsError(path=path) from None
    with handle:
        yield handle
