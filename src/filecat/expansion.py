from __future__ import annotations

import fnmatch
import os
from pathlib import Path
from typing import TYPE_CHECKING

from filecat.exceptions import InvalidInputError
from filecat.logging import logger
from filecat.matching import glob_syntax_error

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

_MAGIC_CHARS = frozenset("*?[")
_RECURSIVE = "**"


def has_magic(component: str) -> bool:
    return any(ch in _MAGIC_CHARS for ch in component)


def validate_input_patterns(patterns: Sequence[str]) -> list[str]:
    """Normalize separators and check the glob syntax of every input pattern.

    Args:
        patterns (Sequence[str]): raw patterns from the command line

    Raises:
        InvalidInputError: for the first pattern with malformed glob syntax.

    Returns:
        list[str]: the patterns with ``\\`` separators replaced by ``/``
    """
    normalized: list[str] = []
    for pattern in patterns:
        candidate = pattern.replace("\\", "/")
        reason = glob_syntax_error(candidate)
        if reason is not None:
            raise InvalidInputError(pattern=pattern, reason=reason)
        normalized.append(candidate)
    return normalized


def _join(base: str, name: str) -> str:
    if not base:
        return name
    if base.endswith("/"):
        return base + name
    return f"{base}/{name}"


def scan_directory(directory: str) -> list[os.DirEntry[str]]:
    """List ``directory``, logging a warning when it exists but cannot be read.

    Args:
        directory (str): the directory to list, ``""`` for the working directory

    Returns:
        list[os.DirEntry[str]]: the entries, or an empty list on failure
    """
    try:
        with os.scandir(directory or ".") as entries:
            return list(entries)
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as e:
        logger.warning("Failed to read path: %s", e)
        return []


def _subdirectories(base: str) -> Iterator[str]:
    yield base
    for entry in scan_directory(base):
        if entry.is_dir(follow_symlinks=False):
            yield from _subdirectories(_join(base, entry.name))


def _descendants(base: str) -> Iterator[str]:
    for entry in scan_directory(base):
        path = _join(base, entry.name)
        yield path
        if entry.is_dir(follow_symlinks=False):
            yield from _descendants(path)


def _expand(base: str, components: list[str]) -> Iterator[str]:
    head, rest = components[0], components[1:]
    if head == _RECURSIVE:
        if not rest:
            yield from _descendants(base)
            return
        for directory in _subdirectories(base):
            yield from _expand(directory, rest)
    elif not has_magic(head):
        candidate = _join(base, head)
        if not rest:
            if os.path.lexists(candidate):
                yield candidate
        elif os.path.isdir(candidate):
            yield from _expand(candidate, rest)
    else:
        for entry in scan_directory(base):
            if not fnmatch.fnmatchcase(entry.name, head):
                continue
            candidate = _join(base, entry.name)
            if not rest:
                yield candidate
            elif entry.is_dir():
                yield from _expand(candidate, rest)


def expand_pattern(pattern: str) -> list[Path]:
    """Expand a single validated pattern, in lexical order.

    Components are matched one directory at a time: ``*``, ``?`` and
    ``[...]`` stay within a component, hidden entries are included and ``**``
    spans any number of directories. A directory that exists but cannot be
    listed is reported as a warning and contributes no paths.
    """
    if pattern.startswith("/"):
        base, remainder = "/", pattern.lstrip("/")
    else:
        base, remainder = "", pattern
    if not remainder:
        return [Path(base)] if base else []
    matches = sorted(set(_expand(base, remainder.split("/"))))
    return [Path(m) for m in matches]


def expand_patterns(patterns: Sequence[str]) -> list[Path]:
    """Turn input glob patterns or literal paths into concrete filesystem entries.

    All patterns are validated before anything is listed, so a malformed
    pattern aborts the run without touching the filesystem. Results keep the
    order of ``patterns``; matches of one pattern are sorted lexically.

    Args:
        patterns (Sequence[str]): glob patterns or literal paths

    Raises:
        InvalidInputError: if any pattern has malformed glob syntax.

    Returns:
        list[Path]: the matching files and directories, possibly empty
    """
    paths: list[Path] = []
    for pattern in validate_input_patterns(patterns):
        paths.extend(expand_pattern(pattern))
    return paths
