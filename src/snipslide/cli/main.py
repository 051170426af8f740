# main.py
# SPDX-License-Identifier: MIT

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Optional, Sequence

from ..core.config import SnipConfig, load_config_from_path
from ..core.decode import read_text
from ..core.log import configure_logging
from .runner import convert_notes, plan_slides


def _build_parser() -> argparse.ArgumentParser:
    """Build the top-level snipslide argument parser.

    Subcommands: ``split`` writes slide records to the configured sinks,
    ``plan`` prints the records as JSON, and ``config`` prints the
    effective configuration.
    """
    parser = argparse.ArgumentParser(prog="snipslide", description="Split notes into slide-sized snippets")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g., DEBUG, INFO, WARNING); overrides the config file's [logging] level.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_segment_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument("-c", "--config", help="Path to config file (TOML or JSON).")
        p.add_argument(
            "--liner",
            action="store_true",
            help="Use the single-marker (___) text blocks with the 12/13 budget.",
        )
        p.add_argument("--max-words", type=int, help="Override segment.max_significant_words.")
        p.add_argument("--club-threshold", type=int, help="Override segment.club_threshold.")
        p.add_argument(
            "--flush-unterminated",
            action="store_true",
            help="Emit a block left open at end of input instead of dropping it.",
        )

    split_p = subparsers.add_parser("split", help="Split a notes file and write slide records.")
    split_p.add_argument("notes", help="Notes file (UTF-8 text).")
    add_segment_flags(split_p)
    split_p.add_argument("--jsonl", help="Write records as JSONL to this path.")
    split_p.add_argument("--gzip", action="store_true", help="Gzip the JSONL output.")
    split_p.add_argument("--preview", help="Write a human-readable preview to this path.")
    split_p.add_argument("--parquet", help="Write records as Parquet (needs pyarrow).")
    split_p.add_argument("--output-dir", help="Directory for relative output paths.")

    plan_p = subparsers.add_parser("plan", help="Print slide records for a notes file as JSON.")
    plan_p.add_argument("notes", help="Notes file (UTF-8 text).")
    add_segment_flags(plan_p)

    cfg_p = subparsers.add_parser("config", help="Print the effective configuration as JSON.")
    add_segment_flags(cfg_p)

    return parser


def _load_config(args: argparse.Namespace) -> SnipConfig:
    """Load the config file (if any) and layer command-line overrides on it."""
    cfg = load_config_from_path(args.config) if getattr(args, "config", None) else SnipConfig()
    if getattr(args, "liner", False):
        cfg.segment.use_liner_markers()
    if getattr(args, "max_words", None) is not None:
        cfg.segment.max_significant_words = int(args.max_words)
    if getattr(args, "club_threshold", None) is not None:
        cfg.segment.club_threshold = int(args.club_threshold)
    if getattr(args, "flush_unterminated", False):
        cfg.segment.flush_unterminated = True

    if getattr(args, "output_dir", None):
        cfg.output.output_dir = Path(args.output_dir)
    if getattr(args, "jsonl", None):
        cfg.output.jsonl_path = args.jsonl
    if getattr(args, "gzip", False):
        cfg.output.compress_jsonl = True
    if getattr(args, "preview", None):
        cfg.output.preview_path = args.preview
    if getattr(args, "parquet", None):
        cfg.output.parquet_path = args.parquet
    cfg.validate()
    return cfg


def _dispatch(args: argparse.Namespace) -> int:
    cfg = _load_config(args)
    cfg.logging.apply()
    if args.log_level:
        configure_logging(
            level=args.log_level,
            propagate=cfg.logging.propagate,
            logger_name=cfg.logging.logger_name,
        )
    cmd = args.command

    if cmd == "split":
        stats = convert_notes(args.notes, cfg)
        print(json.dumps(stats, indent=2))
        return 0

    if cmd == "plan":
        records = plan_slides(read_text(args.notes).text, cfg)
        print(json.dumps(records, indent=2, ensure_ascii=False))
        return 0

    if cmd == "config":
        print(json.dumps(cfg.to_dict(), indent=2, sort_keys=True))
        return 0

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Entry point for the ``snipslide`` console script.

    Args:
        argv (Sequence[str] | None): Arguments to parse instead of
            ``sys.argv[1:]``; mainly for tests.

    Returns:
        int: Process exit code; 0 on success, 1 on any error.
    """
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    try:
        return _dispatch(args)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
