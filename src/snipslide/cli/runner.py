# runner.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path
from typing import Any, Iterable, List, Optional

from ..core.config import SegmentConfig, SnipConfig
from ..core.decode import read_text
from ..core.interfaces import Snippet, SnippetSink
from ..core.log import get_logger
from ..core.records import SlideRecordDict, SnippetStats, build_slide_records
from ..core.snippets import assemble_snippets
from ..sinks.sinks import build_sinks

__all__ = ["split_text", "plan_slides", "write_records", "convert_notes"]

log = get_logger(__name__)


def _segment_config(config: SnipConfig | SegmentConfig | None) -> SegmentConfig:
    if config is None:
        return SegmentConfig()
    if isinstance(config, SnipConfig):
        return config.segment
    return config


def split_text(text: str, config: SnipConfig | SegmentConfig | None = None) -> List[Snippet]:
    """Segment raw notes into snippets using the segment settings of ``config``."""
    return assemble_snippets(text, _segment_config(config))


def plan_slides(text: str, config: SnipConfig | SegmentConfig | None = None) -> List[SlideRecordDict]:
    """Segment ``text`` and return the numbered records a renderer consumes."""
    return build_slide_records(split_text(text, config))


def _finalizer(sink: SnippetSink):
    """Exit callback that publishes ``sink`` on success and aborts it on error."""

    def _exit(exc_type, exc, tb) -> bool:
        if exc_type is None:
            sink.close()
        else:
            sink.abort()
        return False

    return _exit


def write_records(records: Iterable[SlideRecordDict], sinks: Iterable[SnippetSink]) -> int:
    """Stream ``records`` into every sink, then close them all.

    If anything raises mid-run every opened sink is aborted, so earlier
    output files are left as they were.

    Returns:
        int: Number of records written.
    """
    written = 0
    with ExitStack() as stack:
        opened: List[SnippetSink] = []
        for sink in sinks:
            sink.open()
            stack.push(_finalizer(sink))
            opened.append(sink)
        for record in records:
            for sink in opened:
                sink.write(record)
            written += 1
    return written


def convert_notes(
    notes_path: str | Path,
    config: Optional[SnipConfig] = None,
    *,
    sinks: Optional[List[SnippetSink]] = None,
) -> dict[str, Any]:
    """Read a notes file, segment it and write slide records.

    This is the main programmatic entry point. Sinks come from
    ``config.output`` unless passed explicitly.

    Args:
        notes_path (str | Path): UTF-8 notes file.
        config (SnipConfig | None): Run configuration; validated here.
        sinks (list[SnippetSink] | None): Explicit sinks overriding
            ``config.output``.

    Returns:
        dict[str, Any]: Run statistics (snippet counts per kind, etc.).

    Raises:
        OSError: If the notes file cannot be read or an output cannot be
            written.
        ValueError: If the configuration is inconsistent.
    """
    cfg = config or SnipConfig()
    cfg.validate()

    decoded = read_text(notes_path)
    snippets = split_text(decoded.text, cfg)
    records = build_slide_records(snippets)

    targets = build_sinks(cfg.output) if sinks is None else sinks
    written = write_records(records, targets)

    stats = SnippetStats.from_snippets(snippets).as_dict()
    stats["records_written"] = written if targets else 0
    stats["sinks"] = len(targets)
    stats["encoding"] = decoded.encoding
    log.info("split complete for %s: %s", notes_path, stats)
    return stats
