from __future__ import annotations

from enum import IntEnum, StrEnum, auto

FILE_PLACEHOLDER = "{file}"
DEFAULT_HEADER = f"==> {FILE_PLACEHOLDER}"
HEADER_ENV_VAR = "FILECAT_HEADER"

NON_TEXT_MARKER = "Non-text file"
HEX_ROW_WIDTH = 16

# Bytes written literally by the filtered-printable renderer besides ASCII graphics.
LITERAL_CONTROL_BYTES = frozenset(b"\n\t \r")


class Classification(StrEnum):
    """Coarse content category derived from the bytes of a file."""

    TEXT = auto()
    BINARY = auto()


class RenderMode(StrEnum):
    """How the content of a single file is written to the output."""

    VERBOSE_RAW = auto()
    FILTERED_PRINTABLE = auto()
    HEX_DUMP = auto()
    NON_TEXT_MARKER = auto()


class ExitCode(IntEnum):
    """Process exit status.

    Soft conditions (no matching files, unreadable entries) keep ``SUCCESS``;
    configuration errors detected before any output is produced are ``FATAL``.
    """

    SUCCESS = 0
    FATAL = 1
