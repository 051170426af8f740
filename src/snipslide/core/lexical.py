# lexical.py
# SPDX-License-Identifier: MIT
"""Lexical helpers: lines, words, sentences and phrases.

Every function here is pure and total. Empty or degenerate input yields an
empty list rather than an error. Splitting is a whitespace/punctuation
heuristic, not an NLP sentence boundary detector.
"""

from __future__ import annotations

__all__ = [
    "SHORT_WORD_MAX_LEN",
    "lines",
    "words",
    "non_empty_words",
    "significant_words",
    "count_significant",
    "sentences",
    "phrases",
]

# Words of this length or shorter are ignored when sizing fragments.
SHORT_WORD_MAX_LEN = 2

_STRIP_CHARS = " \t\n\r"
_ELLIPSIS = "..."
# "..." is swapped for the first private-use code point from here on that
# the line does not already contain.
_ELLIPSIS_TOKEN_START = 0xE000
_SENTENCE_SEP = ". "


def _ellipsis_token(text: str) -> str:
    code = _ELLIPSIS_TOKEN_START
    while chr(code) in text:
        code += 1
    return chr(code)


def lines(text: str) -> list[str]:
    """Split text on newlines, strip each line and drop the empty ones."""
    out: list[str] = []
    for raw in (text or "").split("\n"):
        line = raw.strip(_STRIP_CHARS)
        if line:
            out.append(line)
    return out


def words(text: str) -> list[str]:
    """Split on single spaces; the result can contain empty tokens."""
    return (text or "").split(" ")


def non_empty_words(text: str) -> list[str]:
    return [w for w in words(text) if w]


def significant_words(text: str) -> list[str]:
    """Return the words longer than two characters."""
    return [w for w in words(text) if len(w) > SHORT_WORD_MAX_LEN]


def count_significant(text: str) -> int:
    return len(significant_words(text))


def sentences(line: str) -> list[str]:
    """Split a line into sentences on ``". "`` boundaries.

    ``"..."`` is shielded from splitting and restored afterwards. Every
    sentence except the last gets its period back; the last one keeps a
    period only when the line itself ended with one.

    Args:
        line (str): A single (already stripped) note line.

    Returns:
        list[str]: Non-empty sentences in source order.
    """
    text = line or ""
    # A final period has no trailing space to split on.
    if text.endswith("."):
        text = text + " "
    token = _ellipsis_token(text)
    text = text.replace(_ELLIPSIS, token)
    ends_with_period = text.strip(_STRIP_CHARS).endswith(".")

    pieces = text.split(_SENTENCE_SEP)
    last = len(pieces) - 1
    out: list[str] = []
    for index, piece in enumerate(pieces):
        sentence = piece.strip(_STRIP_CHARS)
        if not sentence:
            continue
        if index < last or ends_with_period:
            sentence = sentence + "."
        out.append(sentence.replace(token, _ELLIPSIS))
    return out


def phrases(sentence: str) -> list[str]:
    """Split a sentence on commas, keeping pieces unstripped.

    Pieces keep their surrounding spaces so that phrases clubbed back
    together read exactly like the source; pieces that are only
    whitespace are dropped.
    """
    return [p for p in (sentence or "").split(",") if p.strip(_STRIP_CHARS)]
