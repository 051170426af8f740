# snippets.py
# SPDX-License-Identifier: MIT
"""Turn raw notes into the ordered list of slide snippets.

This is the top of the segmentation core: it normalizes lines, drives the
block scanner (which in turn calls the rebalancer for prose), and collects
emitted snippets in render order. Placeholder-image snippets are recognized
by :meth:`Snippet.text` as they are built.

Examples:
    >>> from snipslide.core.snippets import assemble_snippets
    >>> [s.lines for s in assemble_snippets("Hi there.")]
    [('Hi there.',)]
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .config import SegmentConfig
from .interfaces import Snippet
from .lexical import lines
from .scanner import Default, ScanState, finish, scan_line

__all__ = ["iter_snippets", "assemble_snippets"]


def iter_snippets(text: str, config: Optional[SegmentConfig] = None) -> Iterator[Snippet]:
    """Yield snippets for ``text`` as soon as each one is complete.

    Args:
        text (str): Raw notes; any newline-delimited text.
        config (SegmentConfig | None): Scanner/rebalancer settings.
            Defaults to bracket mode with the 10/8 budget.

    Yields:
        Snippet: Non-empty snippets in render order.
    """
    cfg = config or SegmentConfig()
    state: ScanState = Default()
    for line in lines(text):
        step = scan_line(state, line, cfg)
        state = step.state
        yield from step.emitted
    yield from finish(state, cfg)


def assemble_snippets(text: str, config: Optional[SegmentConfig] = None) -> List[Snippet]:
    """Return the full snippet list for ``text``; see :func:`iter_snippets`."""
    return list(iter_snippets(text, config))
