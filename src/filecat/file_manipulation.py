from __future__ import annotations

import string
from functools import wraps
from typing import TYPE_CHECKING, Any

from filecat.config import (
    HEX_ROW_WIDTH,
    LITERAL_CONTROL_BYTES,
    NON_TEXT_MARKER,
    Classification,
    RenderMode,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from filecat.settings import Settings

    RendererFn = Callable[[bytes], str]

_GRAPHIC_BYTES = frozenset(range(0x21, 0x7F))
# string.whitespace is " \t\n\r\x0b\x0c"; vertical tab is not ASCII whitespace here.
_WHITESPACE_BYTES = frozenset(string.whitespace.encode("ascii")) - {0x0B}
_TEXT_BYTES = _GRAPHIC_BYTES | _WHITESPACE_BYTES | {ord("\r")}
_LITERAL_BYTES = _GRAPHIC_BYTES | LITERAL_CONTROL_BYTES

RENDERERS: dict[RenderMode, RendererFn] = {}


def register_renderer(mode: RenderMode) -> Callable[[RendererFn], RendererFn]:
    """Decorator to register the function rendering file content for a given mode.

    Args:
        mode (RenderMode): the render mode the decorated function handles

    Returns:
        Callable[[RendererFn], RendererFn]: a decorator storing the function in
        ``RENDERERS`` under ``mode`` and returning it
    """

    def decorator(func: RendererFn) -> RendererFn:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
            return func(*args, **kwargs)

        RENDERERS[mode] = wrapper
        return wrapper

    return decorator


def is_text_byte(byte: int) -> bool:
    """Check whether a byte may appear in a text file.

    Printable ASCII graphics, ASCII whitespace (space, tab, newline, form feed)
    and carriage return qualify. Everything else, NUL, other control
    characters and any byte above 0x7F, does not.

    Args:
        byte (int): the byte value, 0 to 255

    Returns:
        bool: True if the byte is allowed in text content
    """
    return byte in _TEXT_BYTES


def classify(content: bytes) -> Classification:
    """Classify a buffer as text or binary.

    The whole buffer is scanned, stopping at the first disqualifying byte.
    An empty buffer is text.

    Args:
        content (bytes): the raw file content

    Returns:
        Classification: ``TEXT`` if every byte passes :func:`is_text_byte`, ``BINARY`` otherwise
    """
    if all(byte in _TEXT_BYTES for byte in content):
        return Classification.TEXT
    return Classification.BINARY


def debug_escape(byte: int) -> str:
    """Quoted escape of a byte read as a Latin-1 character, e.g. ``'\\u{7}'``."""
    if byte == 0:
        return "'\\0'"
    ch = chr(byte)
    if byte > 0x7F and ch.isprintable():  # noqa: PLR2004
        return f"'{ch}'"
    return f"'\\u{{{byte:x}}}'"


@register_renderer(RenderMode.VERBOSE_RAW)
def render_verbose(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


@register_renderer(RenderMode.FILTERED_PRINTABLE)
def render_printable(content: bytes) -> str:
    """Write printable bytes literally and escape the others.

    Every escaped byte is followed by a space, and a newline is appended after
    the whole buffer, so clean ASCII text comes out unchanged plus one newline.
    """
    parts = [chr(byte) if byte in _LITERAL_BYTES else debug_escape(byte) + " " for byte in content]
    parts.append("\n")
    return "".join(parts)


@register_renderer(RenderMode.HEX_DUMP)
def render_hex(content: bytes) -> str:
    """Classic hex dump: 16 bytes per row, each row prefixed by its offset.

    Example row: ``00000010  68 69 0a ``. Rows are separated by newlines and the
    dump ends with a single newline.
    """
    rows: list[str] = []
    for offset in range(0, len(content), HEX_ROW_WIDTH):
        chunk = content[offset : offset + HEX_ROW_WIDTH]
        rows.append(f"{offset:08x}  " + "".join(f"{byte:02x} " for byte in chunk))
    return "\n".join(rows) + "\n"


@register_renderer(RenderMode.NON_TEXT_MARKER)
def render_marker(_content: bytes) -> str:
    return NON_TEXT_MARKER + "\n"


def select_render_mode(
    classification: Classification,
    *,
    verbose: bool,
    hex_dump: bool,
    skip_non_text: bool,
) -> RenderMode:
    """Pick how a file is rendered.

    Binary content is replaced by a marker when ``skip_non_text`` is set, or
    hex dumped when ``hex_dump`` is set. Text content, and binary content with
    neither flag, uses the verbose or the filtered-printable rendering.

    Args:
        classification (Classification): the classification of the file content
        verbose (bool): use the raw decoded rendering instead of the filtered one
        hex_dump (bool): hex dump binary content
        skip_non_text (bool): replace binary content by a marker line

    Returns:
        RenderMode: the mode to render the content with
    """
    if classification is Classification.BINARY:
        if skip_non_text:
            return RenderMode.NON_TEXT_MARKER
        if hex_dump:
            return RenderMode.HEX_DUMP
    return RenderMode.VERBOSE_RAW if verbose else RenderMode.FILTERED_PRINTABLE


def render(content: bytes, mode: RenderMode) -> str:
    return RENDERERS[mode](content)


def render_content(content: bytes, settings: Settings) -> str:
    """Classify ``content`` and render it according to the run settings."""
    mode = select_render_mode(
        classify(content),
        verbose=settings.verbose,
        hex_dump=settings.hex,
        skip_non_text=settings.skip_non_text,
    )
    return render(content, mode)
