# __init__.py
# SPDX-License-Identifier: MIT
"""
Top-level package exports for :mod:`snipslide`.

snipslide turns freeform notes into an ordered list of slide-sized
snippets. The public surface is small:

- :func:`assemble_snippets` / :func:`iter_snippets` run the segmentation
  core on a string.
- :func:`plan_slides` adds slide numbering and output names, producing the
  records a renderer consumes.
- :func:`convert_notes` reads a notes file and writes records to the sinks
  configured in a :class:`SnipConfig`.

Notes syntax
------------
Lines are independent slides unless grouped:

- ``{{{{{{`` ... ``}}}}}}`` wraps verbatim code for one slide.
- ``[[[[[[`` ... ``]]]]]]`` groups prose lines onto one slide (or a single
  ``___`` line toggles a group in liner mode).
- ``PLACEHOLDER_IMAGE <file>`` reserves a slide for a pre-made image.

Examples:
    >>> from snipslide import assemble_snippets
    >>> snippets = assemble_snippets("{{{{{{\\nfoo()\\nbar()\\n}}}}}}")
    >>> snippets[0].kind, snippets[0].lines
    ('code', ('foo()', 'bar()'))
"""

from __future__ import annotations

try:
    from importlib.metadata import version as _pkg_version

    __version__ = _pkg_version("snipslide")
except Exception:  # PackageNotFoundError when running from a source tree
    __version__ = "0.0.0+unknown"


from .cli.runner import convert_notes, plan_slides, split_text
from .core.config import (
    CLUB_THRESHOLD,
    MAX_SIGNIFICANT_WORDS,
    LoggingConfig,
    OutputConfig,
    SegmentConfig,
    SnipConfig,
    TextBlockMode,
    load_config_from_path,
)
from .core.decode import decode_bytes, read_text
from .core.interfaces import Snippet, SnippetKind, SnippetSink
from .core.lexical import lines, phrases, sentences, significant_words, words
from .core.log import configure_logging, get_logger
from .core.naming import slide_output_name
from .core.rebalance import rebalance_line, rebalance_sentence
from .core.records import SnippetStats, build_slide_records
from .core.scanner import Default, InCode, InText, ScanStep, finish, scan_line
from .core.snippets import assemble_snippets, iter_snippets
from .sinks.sinks import GzipJSONLSink, JSONLSink, PreviewTextSink, build_sinks

PRIMARY_API = [
    "__version__",
    "assemble_snippets",
    "iter_snippets",
    "plan_slides",
    "split_text",
    "convert_notes",
    "Snippet",
    "SnippetKind",
    "SegmentConfig",
    "SnipConfig",
    "load_config_from_path",
]

__all__ = list(PRIMARY_API)
