# config.py
# SPDX-License-Identifier: MIT
"""Configuration models and loaders for snipslide runs.

Settings are plain dataclasses: segmentation thresholds and block markers,
output destinations, and logging. They serialize to JSON and load from
JSON or TOML files whose tables mirror the dataclass layout::

    [segment]
    text_block_mode = "liner"
    max_significant_words = 12

    [output]
    jsonl_path = "out/slides.jsonl"
"""
from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

from .log import PACKAGE_LOGGER_NAME, configure_logging

__all__ = [
    "MAX_SIGNIFICANT_WORDS",
    "CLUB_THRESHOLD",
    "CODE_BLOCK_START",
    "CODE_BLOCK_END",
    "TEXT_BLOCK_START",
    "TEXT_BLOCK_END",
    "LINER_MARKER",
    "TextBlockMode",
    "SegmentConfig",
    "OutputConfig",
    "LoggingConfig",
    "SnipConfig",
    "load_config_from_path",
]

# A unit with more significant words than this gets split.
MAX_SIGNIFICANT_WORDS = 10
# Club with the previous fragment while the combined count stays below this.
CLUB_THRESHOLD = 8

CODE_BLOCK_START = "{{{{{{"
CODE_BLOCK_END = "}}}}}}"
TEXT_BLOCK_START = "[[[[[["
TEXT_BLOCK_END = "]]]]]]"
LINER_MARKER = "___"

# Thresholds used alongside the liner (toggle) markers.
LINER_MAX_SIGNIFICANT_WORDS = 12
LINER_CLUB_THRESHOLD = 13


class TextBlockMode:
    """How text blocks are delimited.

    Modes:
    * ``BRACKET``: ``[[[[[[`` opens a block and ``]]]]]]`` closes it.
    * ``LINER``: a single marker line (``___``) toggles a block open and
      closed.
    """

    BRACKET = "bracket"
    LINER = "liner"
    ALL = {BRACKET, LINER}

    @classmethod
    def normalize(cls, value: Optional[str]) -> str:
        mode = (value or cls.BRACKET).strip().lower()
        if mode not in cls.ALL:
            raise ValueError(f"Invalid text block mode: {value!r}. Expected one of {sorted(cls.ALL)}")
        return mode


@dataclass(slots=True)
class SegmentConfig:
    """Knobs for the block scanner and the rebalancer.

    Attributes:
        max_significant_words (int): Significant-word budget for a single
            fragment before a sentence or phrase is split.
        club_threshold (int): Two fragments are merged only while their
            combined significant-word count is strictly below this.
        text_block_mode (str): One of :class:`TextBlockMode`.
        liner_marker (str): Toggle line used in liner mode.
        flush_unterminated (bool): Emit the content of a block still open
            at end of input instead of dropping it.
    """

    max_significant_words: int = MAX_SIGNIFICANT_WORDS
    club_threshold: int = CLUB_THRESHOLD
    text_block_mode: str = TextBlockMode.BRACKET
    liner_marker: str = LINER_MARKER
    flush_unterminated: bool = False

    @classmethod
    def liner(cls, **overrides: Any) -> "SegmentConfig":
        """Preset for toggle-delimited notes with the looser 12/13 budget."""
        values: Dict[str, Any] = {
            "max_significant_words": LINER_MAX_SIGNIFICANT_WORDS,
            "club_threshold": LINER_CLUB_THRESHOLD,
            "text_block_mode": TextBlockMode.LINER,
        }
        values.update(overrides)
        return cls(**values)

    def use_liner_markers(self) -> None:
        """Switch to liner mode in place.

        Budgets still at the bracket defaults move to the liner 12/13;
        customized budgets and the marker are kept.
        """
        self.text_block_mode = TextBlockMode.LINER
        if self.max_significant_words == MAX_SIGNIFICANT_WORDS:
            self.max_significant_words = LINER_MAX_SIGNIFICANT_WORDS
        if self.club_threshold == CLUB_THRESHOLD:
            self.club_threshold = LINER_CLUB_THRESHOLD

    @property
    def is_liner(self) -> bool:
        return self.text_block_mode == TextBlockMode.LINER

    def validate(self) -> None:
        self.text_block_mode = TextBlockMode.normalize(self.text_block_mode)
        if int(self.max_significant_words) < 1:
            raise ValueError("segment.max_significant_words must be >= 1.")
        if int(self.club_threshold) < 0:
            raise ValueError("segment.club_threshold must be >= 0.")
        if self.is_liner:
            marker = (self.liner_marker or "").strip()
            if not marker:
                raise ValueError("segment.liner_marker must be a non-empty token in liner mode.")
            if marker in {CODE_BLOCK_START, CODE_BLOCK_END}:
                raise ValueError("segment.liner_marker cannot reuse the code block delimiters.")
            self.liner_marker = marker


@dataclass(slots=True)
class OutputConfig:
    """Where slide records go.

    Relative paths are resolved against ``output_dir`` when it is set.
    ``compress_jsonl`` gzips the JSONL output (and appends ``.gz`` when
    the path lacks it).
    """

    output_dir: Optional[Path] = None
    jsonl_path: Optional[str] = None
    compress_jsonl: bool = False
    preview_path: Optional[str] = None
    parquet_path: Optional[str] = None

    def resolve(self, value: Optional[str]) -> Optional[Path]:
        if not value:
            return None
        path = Path(value)
        if self.output_dir is not None and not path.is_absolute():
            path = Path(self.output_dir) / path
        return path


@dataclass(slots=True)
class LoggingConfig:
    """The ``[logging]`` table, applied by the CLI before a command runs.

    ``level = "DEBUG"`` surfaces the rebalancer's split and club trace.
    ``propagate`` left unset keeps records flowing to root handlers.
    """

    level: int | str = "WARNING"
    propagate: Optional[bool] = None
    fmt: Optional[str] = None
    datefmt: Optional[str] = None
    logger_name: str = PACKAGE_LOGGER_NAME

    def apply(self) -> logging.Logger:
        return configure_logging(
            level=self.level,
            propagate=self.propagate,
            fmt=self.fmt,
            datefmt=self.datefmt,
            logger_name=self.logger_name or PACKAGE_LOGGER_NAME,
        )


T = TypeVar("T")


@dataclass(slots=True)
class SnipConfig:
    """Declarative settings for one snipslide run.

    Holds only serializable knobs; open files and sinks are created by the
    runner from these values.
    """

    segment: SegmentConfig = field(default_factory=SegmentConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        """Check internal consistency, normalizing modes in place.

        Raises:
            ValueError: On unknown modes, non-positive budgets, or output
                paths that collide.
        """
        self.segment.validate()
        targets = [
            self.output.resolve(p)
            for p in (self.output.jsonl_path, self.output.preview_path, self.output.parquet_path)
        ]
        resolved = [str(p.resolve()) for p in targets if p is not None]
        if len(resolved) != len(set(resolved)):
            raise ValueError("output paths must be distinct (jsonl_path, preview_path, parquet_path).")

    def to_dict(self) -> Dict[str, Any]:
        return _dataclass_to_dict(self)

    def to_json(self, path: Path | str, *, indent: int = 2) -> str:
        """Write the configuration as JSON and return the path written."""
        target = Path(path)
        target.write_text(json.dumps(self.to_dict(), indent=indent, sort_keys=True), encoding="utf-8")
        return str(target)

    @classmethod
    def from_dict(cls: Type[T], data: Mapping[str, Any]) -> T:
        return _dataclass_from_dict(cls, data)

    @classmethod
    def from_json(cls: Type[T], path: Path | str) -> T:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
        if not isinstance(payload, Mapping):
            raise TypeError(f"Top-level JSON document must be an object; got {type(payload).__name__}.")
        return cls.from_dict(payload)  # type: ignore[attr-defined]

    @classmethod
    def from_toml(cls: Type[T], path: Path | str) -> T:
        """Load from a TOML file with ``[segment]``, ``[output]`` and
        ``[logging]`` tables."""
        data = tomllib.loads(Path(path).read_bytes().decode("utf-8"))
        return cls.from_dict(data)  # type: ignore[attr-defined]


def load_config_from_path(path: str | Path) -> SnipConfig:
    """Load a SnipConfig from a ``.toml`` or ``.json`` file.

    Raises:
        ValueError: If the file extension is neither.
    """
    p = Path(path)
    suffix = p.suffix.lower()
    if suffix == ".toml":
        return SnipConfig.from_toml(p)
    if suffix == ".json":
        return SnipConfig.from_json(p)
    raise ValueError(f"Unsupported config extension {p.suffix!r}; expected .toml or .json.")


def _dataclass_to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize dataclasses to JSON-friendly dicts, skipping None values."""
    result: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if value is None:
            continue
        if is_dataclass(value):
            result[f.name] = _dataclass_to_dict(value)
        elif isinstance(value, Path):
            result[f.name] = str(value)
        else:
            result[f.name] = value
    return result


def _dataclass_from_dict(cls: Type[T], data: Mapping[str, Any] | None) -> T:
    """Build ``cls`` from a mapping, recursing into nested dataclasses.

    Raises:
        ValueError: If the mapping contains keys ``cls`` does not define.
    """
    if data is None:
        return cls()  # type: ignore[call-arg]
    if not isinstance(data, Mapping):
        raise TypeError(f"{cls.__name__} expects a mapping; got {type(data).__name__}.")
    known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
    unknown = sorted(k for k in data if k not in known)
    if unknown:
        raise ValueError(
            f"Unsupported options for {cls.__name__}: {', '.join(unknown)}. "
            f"Allowed keys: {', '.join(sorted(known))}"
        )
    type_hints = get_type_hints(cls)
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        if f.name not in data:
            continue
        kwargs[f.name] = _coerce_value(type_hints.get(f.name, f.type), data[f.name])
    return cls(**kwargs)  # type: ignore[arg-type]


def _coerce_value(expected_type: Any, value: Any) -> Any:
    base_type = _strip_optional(expected_type)
    if value is None:
        return None
    if isinstance(base_type, type) and is_dataclass(base_type):
        return _dataclass_from_dict(base_type, value)
    if base_type is Path:
        return Path(value)
    if base_type in {str, int, bool} and not isinstance(value, base_type):
        return base_type(value)
    return value


def _strip_optional(typ: Any) -> Any:
    """Return the single non-None member of an Optional annotation."""
    if get_origin(typ) is Union:
        args = [arg for arg in get_args(typ) if arg is not type(None)]
        if len(args) == 1:
            return _strip_optional(args[0])
    return typ
