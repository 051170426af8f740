# parquet.py
# SPDX-License-Identifier: MIT
"""Parquet sink for slide records (requires the ``parquet`` extra)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Mapping

import pyarrow as pa
import pyarrow.parquet as pq

from ..core.log import get_logger

__all__ = ["SLIDE_SCHEMA", "ParquetSnippetSink"]

log = get_logger(__name__)

SLIDE_SCHEMA = pa.schema(
    [
        pa.field("index", pa.int32(), nullable=False),
        pa.field("kind", pa.string(), nullable=False),
        pa.field("output_name", pa.string(), nullable=False),
        pa.field("fragments", pa.list_(pa.string())),
        pa.field("filename", pa.string()),
        pa.field("sha256", pa.string()),
        pa.field("schema_version", pa.string()),
    ]
)


class ParquetSnippetSink:
    """Buffer slide records and write them as one Parquet file on close.

    Placeholder records get a null ``fragments`` column; text and code
    records get a null ``filename``.
    """

    def __init__(self, path: str | Path, *, compression: str = "snappy") -> None:
        self._path = Path(path)
        self._compression = compression or "snappy"
        self._rows: List[Mapping[str, Any]] = []
        self._opened = False

    @property
    def path(self) -> Path:
        return self._path

    def open(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._rows.clear()
        self._opened = True

    def write(self, record: Mapping[str, Any]) -> None:
        if not self._opened:
            log.warning("Write called on closed ParquetSnippetSink; ignoring record.")
            return
        self._rows.append(record)

    def close(self) -> None:
        if not self._opened:
            return
        self._opened = False
        columns = {name: [row.get(name) for row in self._rows] for name in SLIDE_SCHEMA.names}
        table = pa.Table.from_pydict(columns, schema=SLIDE_SCHEMA)
        pq.write_table(table, self._path, compression=self._compression)
        log.debug("Wrote %d slide rows to %s.", table.num_rows, self._path)
        self._rows.clear()

    def abort(self) -> None:
        """Discard buffered rows; nothing is written."""
        self._opened = False
        self._rows.clear()

    def __enter__(self) -> "ParquetSnippetSink":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()
