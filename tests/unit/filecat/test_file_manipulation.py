from __future__ import annotations

import math
import string

import pytest

from filecat.config import NON_TEXT_MARKER, Classification, RenderMode
from filecat.file_manipulation import (
    RENDERERS,
    classify,
    debug_escape,
    is_text_byte,
    render,
    render_content,
    render_hex,
    render_printable,
    render_verbose,
    select_render_mode,
)
from filecat.settings import Settings

CLEAN_ASCII = b"def main():\r\n\tprint('hello, world!')  # ~{}[]|\\\n"


def parse_hex_dump(dump: str) -> tuple[int, bytes]:
    rows = dump.rstrip("\n").split("\n") if dump.strip() else []
    data = bytearray()
    for index, row in enumerate(rows):
        offset, _, cells = row.partition("  ")
        assert int(offset, 16) == index * 16
        data.extend(bytes.fromhex(cells))
    return len(rows), bytes(data)


@pytest.mark.unit
def test_is_text_byte_matches_ascii_predicate() -> None:
    allowed = {ord(c) for c in string.printable if c != "\x0b"}

    for byte in range(256):
        assert is_text_byte(byte) is (byte in allowed), byte


@pytest.mark.unit
@pytest.mark.parametrize(
    ("content", "expected"),
    [
        (b"", Classification.TEXT),
        (CLEAN_ASCII, Classification.TEXT),
        (b"page\x0cbreak", Classification.TEXT),
        (b"\x00", Classification.BINARY),
        (b"text then \x00 nul", Classification.BINARY),
        (b"bell\x07", Classification.BINARY),
        (b"vertical\x0btab", Classification.BINARY),
        ("café".encode(), Classification.BINARY),
        (b"\x7f", Classification.BINARY),
    ],
)
def test_classify(content: bytes, expected: Classification) -> None:
    assert classify(content) is expected


@pytest.mark.unit
@pytest.mark.parametrize("position", [0, 5, 11])
def test_single_nul_forces_binary(position: int) -> None:
    content = bytearray(b"plain text!!")
    content[position] = 0

    assert classify(bytes(content)) is Classification.BINARY


@pytest.mark.unit
@pytest.mark.parametrize(
    ("byte", "expected"),
    [
        (0x00, "'\\0'"),
        (0x07, "'\\u{7}'"),
        (0x1B, "'\\u{1b}'"),
        (0x7F, "'\\u{7f}'"),
        (0x85, "'\\u{85}'"),
        (0xA0, "'\\u{a0}'"),
        (0xE9, "'é'"),
    ],
)
def test_debug_escape(byte: int, expected: str) -> None:
    assert debug_escape(byte) == expected


@pytest.mark.unit
def test_printable_rendering_is_identity_on_clean_ascii() -> None:
    assert render_printable(CLEAN_ASCII) == CLEAN_ASCII.decode("ascii") + "\n"


@pytest.mark.unit
def test_printable_rendering_escapes_other_bytes() -> None:
    assert render_printable(b"a\x07b\x00\xe9") == "a'\\u{7}' b'\\0' 'é' \n"


@pytest.mark.unit
def test_printable_rendering_of_empty_buffer_is_a_newline() -> None:
    assert render_printable(b"") == "\n"


@pytest.mark.unit
def test_verbose_rendering_replaces_invalid_utf8() -> None:
    assert render_verbose("café ".encode() + b"\xff") == "café \ufffd"


@pytest.mark.unit
def test_hex_dump_layout() -> None:
    assert render_hex(b"hi\n") == "00000000  68 69 0a \n"
    assert render_hex(bytes(range(17))) == (
        "00000000  00 01 02 03 04 05 06 07 08 09 0a 0b 0c 0d 0e 0f \n00000010  10 \n"
    )


@pytest.mark.unit
def test_hex_dump_of_empty_buffer() -> None:
    assert render_hex(b"") == "\n"


@pytest.mark.unit
@pytest.mark.parametrize("size", [1, 15, 16, 17, 32, 100])
def test_hex_dump_reconstructs_the_buffer(size: int) -> None:
    content = bytes((i * 37) % 256 for i in range(size))

    rows, data = parse_hex_dump(render_hex(content))

    assert data == content
    assert rows == math.ceil(size / 16)


@pytest.mark.unit
@pytest.mark.parametrize(
    ("classification", "verbose", "hex_dump", "skip_non_text", "expected"),
    [
        (Classification.BINARY, False, True, True, RenderMode.NON_TEXT_MARKER),
        (Classification.BINARY, True, True, False, RenderMode.HEX_DUMP),
        (Classification.BINARY, True, False, False, RenderMode.VERBOSE_RAW),
        (Classification.BINARY, False, False, False, RenderMode.FILTERED_PRINTABLE),
        (Classification.TEXT, False, True, True, RenderMode.FILTERED_PRINTABLE),
        (Classification.TEXT, True, True, False, RenderMode.VERBOSE_RAW),
    ],
)
def test_select_render_mode(
    classification: Classification,
    verbose: bool,  # noqa: FBT001
    hex_dump: bool,  # noqa: FBT001
    skip_non_text: bool,  # noqa: FBT001
    expected: RenderMode,
) -> None:
    mode = select_render_mode(classification, verbose=verbose, hex_dump=hex_dump, skip_non_text=skip_non_text)

    assert mode is expected


@pytest.mark.unit
def test_every_render_mode_has_a_renderer() -> None:
    assert set(RENDERERS) == set(RenderMode)
    assert render(b"\x00", RenderMode.NON_TEXT_MARKER) == NON_TEXT_MARKER + "\n"


@pytest.mark.unit
def test_render_content_uses_hex_only_for_binary() -> None:
    settings = Settings(hex=True)

    assert render_content(b"ab", settings) == "ab\n"
    assert render_content(b"a\x00", settings) == "00000000  61 00 \n"
