from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike
from typing import TYPE_CHECKING

from filecat.exceptions import InvalidPatternError

if TYPE_CHECKING:
    from collections.abc import Iterable

ERROR_WILDCARDS = "wildcards are either regular `*` or recursive `**`"
ERROR_RECURSIVE_WILDCARDS = "recursive wildcards must form a single path component"
ERROR_INVALID_RANGE = "invalid range pattern"

_CURRENT_DIR = "./"


def normalize_path(path: str | PathLike[str]) -> str:
    """Return ``path`` with POSIX separators and no leading ``./`` markers.

    Args:
        path (str | PathLike[str]): the path to normalize

    Returns:
        str: the normalized path, e.g. ``.\\src\\main.rs`` -> ``src/main.rs``
    """
    text = str(path).replace("\\", "/")
    while text.startswith(_CURRENT_DIR):
        text = text[len(_CURRENT_DIR) :].lstrip("/")
    return text


def _class_end(pattern: str, start: int) -> int:
    """Index of the ``]`` closing the character class opened at ``start``, or -1."""
    i = start + 1
    if i < len(pattern) and pattern[i] == "!":
        i += 1
    # a leading `]` is a literal member of the class
    if i < len(pattern) and pattern[i] == "]":
        i += 1
    return pattern.find("]", i)


def glob_syntax_error(pattern: str) -> str | None:
    """Check ``pattern`` for malformed glob syntax.

    Args:
        pattern (str): the glob pattern, with ``/`` separators

    Returns:
        str | None: a description of the first syntax error, or None if the pattern is valid
    """
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            if j - i > 2:  # noqa: PLR2004
                return ERROR_WILDCARDS
            if j - i == 2:  # noqa: PLR2004
                starts_component = i == 0 or pattern[i - 1] == "/"
                ends_component = j == n or pattern[j] == "/"
                if not (starts_component and ends_component):
                    return ERROR_RECURSIVE_WILDCARDS
            i = j
        elif ch == "[":
            end = _class_end(pattern, i)
            if end == -1:
                return ERROR_INVALID_RANGE
            i = end + 1
        else:
            i += 1
    return None


def _translate_class(body: str) -> str:
    negate = body.startswith("!")
    if negate:
        body = body[1:]
    body = body.replace("\\", r"\\")
    body = re.sub(r"([&~|\[^])", r"\\\1", body)
    return f"[{'^' if negate else ''}{body}]"


def translate(pattern: str) -> str:
    """Translate a validated glob into a regular expression source.

    ``*`` matches any run of characters (separators included), ``**/`` matches
    zero or more leading directories and a trailing ``/**`` everything below.

    Args:
        pattern (str): a glob accepted by :func:`glob_syntax_error`

    Returns:
        str: a regex source to be used with ``fullmatch``
    """
    parts: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if pattern.startswith("**", i):
            if pattern.startswith("**/", i):
                parts.append("(?:.*/)?")
                i += 3
            elif parts and parts[-1] == re.escape("/"):
                # trailing `/**`: the separator was already emitted
                parts[-1] = "(?:/.*)?"
                i += 2
            else:
                parts.append(".*")
                i += 2
        elif ch == "*":
            parts.append(".*")
            i += 1
        elif ch == "?":
            parts.append(".")
            i += 1
        elif ch == "[":
            end = _class_end(pattern, i)
            parts.append(_translate_class(pattern[i + 1 : end]))
            i = end + 1
        else:
            parts.append(re.escape(ch))
            i += 1
    return "".join(parts)


@dataclass(frozen=True)
class ExclusionRule:
    """A normalized exclusion pattern with its compiled glob matcher."""

    pattern: str
    regex: re.Pattern[str]

    @classmethod
    def compile(cls, raw: str) -> ExclusionRule:
        """Build a rule from a raw command-line pattern.

        Raises:
            InvalidPatternError: if ``raw`` is not a valid glob.
        """
        pattern = normalize_path(raw)
        reason = glob_syntax_error(pattern)
        if reason is not None:
            raise InvalidPatternError(pattern=raw, reason=reason)
        try:
            regex = re.compile(translate(pattern), re.DOTALL)
        except re.error as e:
            raise InvalidPatternError(pattern=raw, reason=str(e)) from e
        return cls(pattern=pattern, regex=regex)

    def matches_exactly(self, normalized: str) -> bool:
        return normalized in {self.pattern, _CURRENT_DIR + self.pattern}

    def matches_glob(self, normalized: str) -> bool:
        return self.regex.fullmatch(normalized) is not None


@dataclass(frozen=True)
class ExclusionMatcher:
    """Immutable set of exclusion rules, compiled once for the whole run."""

    rules: tuple[ExclusionRule, ...] = ()

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> ExclusionMatcher:
        """Compile every pattern; a single invalid pattern aborts the whole set.

        Raises:
            InvalidPatternError: for the first pattern that does not compile.
        """
        return cls(rules=tuple(ExclusionRule.compile(p) for p in patterns))

    def is_excluded(self, path: str | PathLike[str]) -> bool:
        normalized = normalize_path(path)
        if any(rule.matches_exactly(normalized) for rule in self.rules):
            return True
        return any(rule.matches_glob(normalized) for rule in self.rules)
