# interfaces.py
# SPDX-License-Identifier: MIT
"""Shared data types and the sink protocol used across snipslide."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Tuple, runtime_checkable

__all__ = [
    "PLACEHOLDER_PREFIX",
    "SnippetKind",
    "Snippet",
    "SlideRecord",
    "SnippetSink",
]

# A text snippet whose first fragment starts with this is an image stand-in.
PLACEHOLDER_PREFIX = "PLACEHOLDER_IMAGE "


class SnippetKind:
    """Kinds of slide content.

    Kinds:
    * ``CODE``: verbatim lines from a ``{{{{{{`` ... ``}}}}}}`` block.
    * ``TEXT``: rebalanced prose fragments.
    * ``PLACEHOLDER_IMAGE``: a pre-made image file to be moved into the
      slide's slot instead of rendering text.
    """

    CODE = "code"
    TEXT = "text"
    PLACEHOLDER_IMAGE = "placeholder_image"
    ALL = {CODE, TEXT, PLACEHOLDER_IMAGE}


@dataclass(frozen=True, slots=True)
class Snippet:
    """One slide's worth of content.

    Attributes:
        kind (str): One of :class:`SnippetKind`.
        lines (tuple[str, ...]): Fragments (text) or verbatim source lines
            (code), in display order. Never empty.
        placeholder (str | None): File name carried by a placeholder
            snippet; None for other kinds.
    """

    kind: str
    lines: Tuple[str, ...]
    placeholder: Optional[str] = None

    @classmethod
    def code(cls, lines) -> "Snippet":
        return cls(kind=SnippetKind.CODE, lines=tuple(lines))

    @classmethod
    def text(cls, fragments) -> "Snippet":
        """Build a text snippet, promoting it to a placeholder when the
        first fragment carries the ``PLACEHOLDER_IMAGE`` prefix."""
        frags = tuple(fragments)
        if frags and frags[0].startswith(PLACEHOLDER_PREFIX):
            name = frags[0][len(PLACEHOLDER_PREFIX):].strip()
            return cls(kind=SnippetKind.PLACEHOLDER_IMAGE, lines=frags, placeholder=name)
        return cls(kind=SnippetKind.TEXT, lines=frags)

    @property
    def is_placeholder(self) -> bool:
        return self.kind == SnippetKind.PLACEHOLDER_IMAGE


# Record handed to the renderer; see records.build_slide_records.
SlideRecord = Mapping[str, Any]


@runtime_checkable
class SnippetSink(Protocol):
    """Destination for slide records (JSONL, preview text, Parquet...)."""

    def open(self) -> None:
        ...

    def write(self, record: SlideRecord) -> None:
        ...

    def close(self) -> None:
        ...

    def abort(self) -> None:
        """Release resources after a failed run without publishing output."""
        ...
