# naming.py
# SPDX-License-Identifier: MIT
"""Deterministic output names for rendered slides."""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional

__all__ = [
    "DEFAULT_SLIDE_EXT",
    "index_width",
    "normalize_extension",
    "slide_output_name",
]

DEFAULT_SLIDE_EXT = ".jpg"
# Placeholder files with these suffixes keep their own format.
_PASSTHROUGH_EXTS = {".png"}


def index_width(count: int) -> int:
    """Digits needed for the largest index of ``count`` slides (at least 1)."""
    return len(str(max(count - 1, 0)))


def normalize_extension(ext: Optional[str]) -> str:
    """Return ``ext`` lowercased with a leading dot; default ``.jpg``."""
    cleaned = (ext or "").strip().lower()
    if not cleaned:
        return DEFAULT_SLIDE_EXT
    return cleaned if cleaned.startswith(".") else f".{cleaned}"


def slide_output_name(
    index: int,
    count: int,
    *,
    placeholder: Optional[str] = None,
    default_ext: str = DEFAULT_SLIDE_EXT,
) -> str:
    """Build the file name of slide ``index`` out of ``count``.

    The index is zero-padded to the width of ``count - 1`` so names sort
    in render order. Slides get ``default_ext`` unless they come from a
    placeholder image whose own suffix is ``.png``.

    Args:
        index (int): Zero-based slide position.
        count (int): Total number of slides in the run.
        placeholder (str | None): Placeholder image file name, if any.
        default_ext (str): Extension for rendered slides.

    Returns:
        str: File name such as ``"07.jpg"`` or ``"3.png"``.

    Raises:
        ValueError: If ``index`` is outside ``range(count)``.
    """
    if index < 0 or index >= count:
        raise ValueError(f"slide index {index} out of range for {count} slides")
    ext = normalize_extension(default_ext)
    if placeholder:
        suffix = PurePath(placeholder).suffix.lower()
        if suffix in _PASSTHROUGH_EXTS:
            ext = suffix
    return f"{index:0{index_width(count)}d}{ext}"
