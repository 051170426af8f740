# scanner.py
# SPDX-License-Identifier: MIT
"""Line-by-line block scanner.

Each normalized note line is classified as a delimiter, code content,
text-block content, or a standalone line. The scanner state is an explicit
tagged value (:class:`Default`, :class:`InCode`, :class:`InText`) passed
into and returned from :func:`scan_line`; nothing is kept between calls.

Delimiters are whole-line, exact matches:

* ``{{{{{{`` / ``}}}}}}`` wrap a code block, kept verbatim.
* ``[[[[[[`` / ``]]]]]]`` wrap a text block (bracket mode), or a single
  ``___`` line toggles a text block (liner mode).

A standalone line becomes its own text snippet; lines inside a text block
share one snippet until the block closes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .config import CODE_BLOCK_END, CODE_BLOCK_START, TEXT_BLOCK_END, TEXT_BLOCK_START, SegmentConfig
from .interfaces import Snippet
from .log import get_logger
from .rebalance import rebalance_line

__all__ = [
    "Default",
    "InCode",
    "InText",
    "ScanState",
    "ScanStep",
    "scan_line",
    "finish",
]

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Default:
    """Outside any block."""


@dataclass(frozen=True, slots=True)
class InText:
    """Inside a text block; ``fragments`` accumulated so far."""

    fragments: Tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class InCode:
    """Inside a code block.

    Attributes:
        lines (tuple[str, ...]): Verbatim code lines collected so far.
        resume (Default | InText): State to return to when the block
            closes; a code block may sit inside an open text block.
    """

    lines: Tuple[str, ...] = ()
    resume: Union[Default, InText] = Default()


ScanState = Union[Default, InText, InCode]


@dataclass(frozen=True, slots=True)
class ScanStep:
    """Result of scanning one line: the next state and any finished snippets."""

    state: ScanState
    emitted: Tuple[Snippet, ...] = ()


_DEFAULT_CONFIG = SegmentConfig()


def _text_snippets(fragments) -> Tuple[Snippet, ...]:
    return (Snippet.text(fragments),) if fragments else ()


def _code_snippets(lines) -> Tuple[Snippet, ...]:
    return (Snippet.code(lines),) if lines else ()


def _text_delimiter(state: Union[Default, InText], line: str, cfg: SegmentConfig) -> Optional[ScanStep]:
    """Handle text block markers; None when ``line`` is not one."""
    if cfg.is_liner:
        if line != cfg.liner_marker:
            return None
        if isinstance(state, InText):
            return ScanStep(Default(), _text_snippets(state.fragments))
        return ScanStep(InText())

    if line == TEXT_BLOCK_START:
        # Re-opening an open block keeps what it has collected.
        return ScanStep(state if isinstance(state, InText) else InText())
    if line == TEXT_BLOCK_END:
        if isinstance(state, InText):
            return ScanStep(Default(), _text_snippets(state.fragments))
        return ScanStep(state)
    return None


def scan_line(state: ScanState, line: str, config: Optional[SegmentConfig] = None) -> ScanStep:
    """Advance the scanner by one normalized line.

    Args:
        state (ScanState): Current scanner state.
        line (str): Stripped, non-empty note line.
        config (SegmentConfig | None): Markers and rebalancing budget.

    Returns:
        ScanStep: Next state plus the snippets completed by this line.
    """
    cfg = config or _DEFAULT_CONFIG

    if line == CODE_BLOCK_START:
        if isinstance(state, InCode):
            return ScanStep(state)
        return ScanStep(InCode(resume=state))

    if line == CODE_BLOCK_END:
        if isinstance(state, InCode):
            return ScanStep(state.resume, _code_snippets(state.lines))
        return ScanStep(state)

    if isinstance(state, InCode):
        return ScanStep(InCode(lines=state.lines + (line,), resume=state.resume))

    step = _text_delimiter(state, line, cfg)
    if step is not None:
        return step

    if isinstance(state, InText):
        fragments = list(state.fragments)
        rebalance_line(line, fragments, cfg)
        return ScanStep(InText(tuple(fragments)))

    standalone: list[str] = []
    rebalance_line(line, standalone, cfg)
    return ScanStep(state, _text_snippets(standalone))


def finish(state: ScanState, config: Optional[SegmentConfig] = None) -> Tuple[Snippet, ...]:
    """Close out the scan at end of input.

    A block that is still open is dropped (with a warning) unless
    ``config.flush_unterminated`` is set, in which case its content is
    emitted: the code lines first, then any text block that enclosed them.
    """
    cfg = config or _DEFAULT_CONFIG
    if isinstance(state, Default):
        return ()

    if isinstance(state, InCode):
        pending_code = state.lines
        enclosing = state.resume.fragments if isinstance(state.resume, InText) else ()
    else:
        pending_code = ()
        enclosing = state.fragments

    if not cfg.flush_unterminated:
        if pending_code or enclosing:
            log.warning(
                "Dropping unterminated block at end of input (%d code lines, %d text fragments).",
                len(pending_code),
                len(enclosing),
            )
        return ()
    return _code_snippets(pending_code) + _text_snippets(enclosing)
