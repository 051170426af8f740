from pathlib import Path

import pytest

from snipslide.core.decode import decode_bytes, read_text


def test_decode_utf8_with_bom_and_crlf() -> None:
    data = b"\xef\xbb\xbfHi there.\r\nSecond line.\rThird."

    decoded = decode_bytes(data)

    assert decoded.encoding == "utf-8-sig"
    assert decoded.text == "Hi there.\nSecond line.\nThird."
    assert decoded.had_replacement is False


def test_decode_strips_zero_width_and_controls() -> None:
    decoded = decode_bytes("a\u200bb\x07c\td".encode("utf-8"))

    assert decoded.text == "abc\td"


def test_decode_falls_back_to_cp1252() -> None:
    decoded = decode_bytes(b"caf\xe9 notes")

    assert decoded.encoding == "cp1252"
    assert decoded.text == "café notes"


def test_decode_empty() -> None:
    decoded = decode_bytes(b"")

    assert decoded.text == ""
    assert decoded.encoding == "utf-8"


def test_read_text_from_file(tmp_path: Path) -> None:
    path = tmp_path / "notes.txt"
    path.write_bytes("Café time.\n".encode("utf-8"))

    assert read_text(path).text == "Café time.\n"


def test_read_text_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        read_text(tmp_path / "missing.txt")
