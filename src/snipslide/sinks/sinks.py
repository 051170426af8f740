# sinks.py
# SPDX-License-Identifier: MIT
"""Sinks that hand slide records to a renderer or a human reviewer."""
from __future__ import annotations

import gzip
import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, List, Self, TextIO

from ..core.config import OutputConfig
from ..core.interfaces import SnippetSink
from ..core.log import get_logger

__all__ = [
    "JSONLSink",
    "GzipJSONLSink",
    "PreviewTextSink",
    "build_sinks",
]

log = get_logger(__name__)


class _TempFileSink:
    """Write to ``<name>.tmp`` and move it over the target on close.

    :meth:`abort` drops the temp file instead, so a failed run leaves any
    previous output at the target untouched.
    """

    def __init__(self, out_path: str | os.PathLike[str]):
        self._path = Path(out_path)
        self._fp: TextIO | None = None
        self._tmp_path: Path | None = None

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._tmp_path = self._path.parent / f"{self._path.name}.tmp"
        self._fp = self._open_handle(self._tmp_path)

    def write(self, record: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def close(self) -> None:
        """Close the handle and move the temp file into place."""
        if not self._fp:
            return
        try:
            self._fp.close()
        finally:
            self._fp = None
        if self._tmp_path:
            os.replace(self._tmp_path, self._path)
            self._tmp_path = None

    def abort(self) -> None:
        """Close the handle and delete the temp file without publishing it."""
        fp, self._fp = self._fp, None
        if fp is not None:
            fp.close()
        if self._tmp_path is not None:
            self._tmp_path.unlink(missing_ok=True)
            log.debug("Discarded partial output for %s.", self._path)
            self._tmp_path = None

    def __enter__(self) -> Self:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()

    def _open_handle(self, path: Path) -> TextIO:
        return open(path, "w", encoding="utf-8", newline="")


class JSONLSink(_TempFileSink):
    """One compact JSON slide record per line."""

    def write(self, record: Mapping[str, Any]) -> None:
        assert self._fp is not None
        self._fp.write(json.dumps(dict(record), ensure_ascii=False, separators=(",", ":")) + "\n")


class GzipJSONLSink(JSONLSink):
    """JSONL sink that gzip-compresses its output."""

    def _open_handle(self, path: Path) -> TextIO:
        return gzip.open(path, "wt", encoding="utf-8", newline="")


class PreviewTextSink(_TempFileSink):
    """Human-readable dump of each slide, for eyeballing a split.

    Text and code slides list their lines under a heading; placeholder
    slides name the image that will be moved into place.
    """

    def __init__(
        self,
        out_path: str | os.PathLike[str],
        *,
        heading_fmt: str = "### slide {index} [{kind}] -> {output_name}",
    ):
        super().__init__(out_path)
        self._heading_fmt = heading_fmt

    def write(self, record: Mapping[str, Any]) -> None:
        assert self._fp is not None
        heading = self._heading_fmt.format(
            index=record.get("index", "?"),
            kind=record.get("kind", "?"),
            output_name=record.get("output_name", "?"),
        )
        if "filename" in record:
            body = f"(placeholder image: {record['filename']})"
        else:
            body = "\n".join(record.get("fragments") or [])
        self._fp.write(f"{heading}\n{body}\n\n")


def build_sinks(cfg: OutputConfig) -> List[SnippetSink]:
    """Instantiate the sinks enabled in ``cfg`` (possibly none).

    Raises:
        RuntimeError: If a Parquet path is set but pyarrow is missing.
    """
    sinks: List[SnippetSink] = []

    jsonl = cfg.resolve(cfg.jsonl_path)
    if jsonl is not None:
        if cfg.compress_jsonl or jsonl.suffix == ".gz":
            if jsonl.suffix != ".gz":
                jsonl = jsonl.with_name(jsonl.name + ".gz")
            sinks.append(GzipJSONLSink(jsonl))
        else:
            sinks.append(JSONLSink(jsonl))

    preview = cfg.resolve(cfg.preview_path)
    if preview is not None:
        sinks.append(PreviewTextSink(preview))

    parquet = cfg.resolve(cfg.parquet_path)
    if parquet is not None:
        try:
            from .parquet import ParquetSnippetSink
        except ImportError as exc:
            raise RuntimeError(
                "Parquet output requires pyarrow; install the 'parquet' extra (pip install snipslide[parquet])."
            ) from exc
        sinks.append(ParquetSnippetSink(parquet))

    log.debug("Built %d sink(s).", len(sinks))
    return sinks
