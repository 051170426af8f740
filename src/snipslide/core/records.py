# records.py
# SPDX-License-Identifier: MIT
"""Convert snippets into renderer-facing slide records and run stats.

A slide record is a flat mapping::

    {"index": 0, "kind": "text", "output_name": "0.jpg",
     "fragments": ["Hi there."], "sha256": "...", "schema_version": "1"}

Placeholder snippets carry ``filename`` instead of ``fragments``; the
renderer moves that file into ``output_name`` rather than drawing text.
"""

from __future__ import annotations

import hashlib
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NotRequired, Sequence, TypedDict

from .interfaces import Snippet, SnippetKind
from .naming import DEFAULT_SLIDE_EXT, slide_output_name

__all__ = [
    "RECORD_SCHEMA_VERSION",
    "SlideRecordDict",
    "snippet_digest",
    "snippet_to_record",
    "build_slide_records",
    "SnippetStats",
]

# Bump when record fields change so downstream renderers can detect mixes.
RECORD_SCHEMA_VERSION = "1"


class SlideRecordDict(TypedDict):
    index: int
    kind: str
    output_name: str
    sha256: str
    schema_version: str
    fragments: NotRequired[List[str]]
    filename: NotRequired[str]


def snippet_digest(snippet: Snippet) -> str:
    """Stable sha256 over a snippet's kind and lines."""
    h = hashlib.sha256()
    h.update(snippet.kind.encode("utf-8"))
    for line in snippet.lines:
        h.update(b"\n")
        h.update(line.encode("utf-8", "strict"))
    return h.hexdigest()


def snippet_to_record(
    snippet: Snippet,
    index: int,
    count: int,
    *,
    default_ext: str = DEFAULT_SLIDE_EXT,
) -> SlideRecordDict:
    """Build the record for one snippet at ``index`` of ``count`` slides."""
    record: SlideRecordDict = {
        "index": index,
        "kind": snippet.kind,
        "output_name": slide_output_name(
            index,
            count,
            placeholder=snippet.placeholder,
            default_ext=default_ext,
        ),
        "sha256": snippet_digest(snippet),
        "schema_version": RECORD_SCHEMA_VERSION,
    }
    if snippet.is_placeholder:
        record["filename"] = snippet.placeholder or ""
    else:
        record["fragments"] = list(snippet.lines)
    return record


def build_slide_records(
    snippets: Sequence[Snippet],
    *,
    default_ext: str = DEFAULT_SLIDE_EXT,
) -> List[SlideRecordDict]:
    """Number snippets in render order and convert them to records."""
    count = len(snippets)
    return [
        snippet_to_record(snippet, index, count, default_ext=default_ext)
        for index, snippet in enumerate(snippets)
    ]


@dataclass(slots=True)
class SnippetStats:
    """Counters describing one segmentation run."""

    snippets: int = 0
    fragments: int = 0
    by_kind: Counter = field(default_factory=Counter)
    max_fragments: int = 0

    def observe(self, snippet: Snippet) -> None:
        self.snippets += 1
        self.by_kind[snippet.kind] += 1
        if snippet.kind == SnippetKind.TEXT:
            self.fragments += len(snippet.lines)
            self.max_fragments = max(self.max_fragments, len(snippet.lines))

    @classmethod
    def from_snippets(cls, snippets: Iterable[Snippet]) -> "SnippetStats":
        stats = cls()
        for snippet in snippets:
            stats.observe(snippet)
        return stats

    def as_dict(self) -> Dict[str, Any]:
        return {
            "snippets": self.snippets,
            "text_fragments": self.fragments,
            "max_fragments_per_slide": self.max_fragments,
            "by_kind": {kind: self.by_kind.get(kind, 0) for kind in sorted(SnippetKind.ALL)},
        }
