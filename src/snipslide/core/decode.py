# decode.py
# SPDX-License-Identifier: MIT
"""Decode notes files into clean text for segmentation."""

from __future__ import annotations

import unicodedata as _ud
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .log import get_logger

__all__ = [
    "DecodedText",
    "decode_bytes",
    "read_text",
]

log = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class DecodedText:
    """Decoded notes with the encoding that was used."""

    text: str
    encoding: str
    had_replacement: bool


_BOMS: tuple[tuple[bytes, str], ...] = (
    (b"\xEF\xBB\xBF", "utf-8-sig"),
    (b"\xFE\xFF", "utf-16-be"),
    (b"\xFF\xFE", "utf-16-le"),
)

_ZERO_WIDTH = {
    0x200B,  # ZERO WIDTH SPACE
    0x200C,  # ZERO WIDTH NON-JOINER
    0x200D,  # ZERO WIDTH JOINER
    0x2060,  # WORD JOINER
    0xFEFF,  # ZERO WIDTH NO-BREAK SPACE
}

NormalizeForm = Literal["NFC", "NFD", "NFKC", "NFKD"]


def _detect_bom(data: bytes) -> str | None:
    for sig, enc in _BOMS:
        if data.startswith(sig):
            return enc
    return None


def _clean(s: str, *, normalize: NormalizeForm | None) -> str:
    """Unify newlines to LF and drop control/zero-width characters.

    Tabs survive; the word splitter only breaks on spaces, so a tab stays
    part of its word.
    """
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    s = "".join(
        ch for ch in s
        if (ch == "\n" or ch == "\t" or _ud.category(ch)[0] != "C") and ord(ch) not in _ZERO_WIDTH
    )
    if normalize:
        s = _ud.normalize(normalize, s)
    return s


def decode_bytes(data: bytes, *, normalize: NormalizeForm | None = "NFC") -> DecodedText:
    """Decode raw notes bytes.

    Strategy:
      1) Honor a UTF-8 or UTF-16 BOM.
      2) Decode as strict UTF-8.
      3) Fall back to cp1252, then latin-1, logging a warning since notes
         are expected to be UTF-8.

    Args:
        data (bytes): Raw file contents.
        normalize (str | None): Unicode normalization form, or None to skip.

    Returns:
        DecodedText: Cleaned text plus the encoding that succeeded.
    """
    if not data:
        return DecodedText("", "utf-8", False)

    candidates: list[str] = []
    bom = _detect_bom(data)
    if bom:
        candidates.append(bom)
    candidates.extend(["utf-8", "cp1252"])

    for enc in candidates:
        try:
            raw = data.decode(enc, errors="strict")
        except UnicodeDecodeError:
            continue
        if enc == "cp1252":
            log.warning("Notes are not valid UTF-8; decoded as cp1252.")
        text = _clean(raw, normalize=normalize)
        return DecodedText(text, enc, "\ufffd" in text)

    log.warning("Notes are not valid UTF-8 or cp1252; decoded as latin-1.")
    text = _clean(data.decode("latin-1", errors="replace"), normalize=normalize)
    return DecodedText(text, "latin-1", "\ufffd" in text)


def read_text(path: str | Path, *, normalize: NormalizeForm | None = "NFC") -> DecodedText:
    """Read and decode a notes file.

    Raises:
        OSError: If the file cannot be read.
    """
    p = Path(path)
    data = p.read_bytes()
    decoded = decode_bytes(data, normalize=normalize)
    log.debug("Read %s (%d bytes, %s).", p, len(data), decoded.encoding)
    return decoded
