from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from snipslide.cli.main import main
from snipslide.cli.runner import convert_notes, plan_slides, split_text
from snipslide.core.config import SegmentConfig, SnipConfig

NOTES = "Hi there.\n{{{{{{\nfoo()\n}}}}}}\nPLACEHOLDER_IMAGE photo.png\n"


def _write_notes(tmp_path: Path) -> Path:
    path = tmp_path / "notes.txt"
    path.write_text(NOTES, encoding="utf-8")
    return path


def test_split_command_writes_jsonl(tmp_path: Path, capsys) -> None:
    notes = _write_notes(tmp_path)
    out = tmp_path / "out" / "slides.jsonl"

    rc = main(["split", str(notes), "--jsonl", str(out)])

    assert rc == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats["snippets"] == 3
    assert stats["records_written"] == 3
    assert stats["by_kind"] == {"code": 1, "placeholder_image": 1, "text": 1}
    lines = out.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["output_name"] for line in lines] == ["0.jpg", "1.jpg", "2.png"]


def test_plan_command_prints_records(tmp_path: Path, capsys) -> None:
    notes = _write_notes(tmp_path)

    rc = main(["plan", str(notes)])

    assert rc == 0
    records = json.loads(capsys.readouterr().out)
    assert [r["kind"] for r in records] == ["text", "code", "placeholder_image"]
    assert records[1]["fragments"] == ["foo()"]


def test_config_command_shows_liner_mode(capsys) -> None:
    rc = main(["config", "--liner", "--max-words", "7"])

    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["segment"]["text_block_mode"] == "liner"
    assert payload["segment"]["max_significant_words"] == 7
    assert payload["segment"]["club_threshold"] == 13


def test_missing_notes_file_reports_error(tmp_path: Path, capsys) -> None:
    rc = main(["plan", str(tmp_path / "missing.txt")])

    assert rc == 1
    assert "Error:" in capsys.readouterr().err


def test_config_file_is_loaded(tmp_path: Path, capsys) -> None:
    cfg_path = tmp_path / "snip.json"
    SnipConfig(segment=SegmentConfig(club_threshold=3)).to_json(cfg_path)

    rc = main(["config", "-c", str(cfg_path), "--flush-unterminated"])

    assert rc == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["segment"]["club_threshold"] == 3
    assert payload["segment"]["flush_unterminated"] is True


def test_runner_helpers_accept_segment_or_run_config(tmp_path: Path) -> None:
    assert split_text("Hi there.") == split_text("Hi there.", SnipConfig())
    assert plan_slides("Hi there.", SegmentConfig())[0]["output_name"] == "0.jpg"

    stats = convert_notes(_write_notes(tmp_path), sinks=[])
    assert stats["snippets"] == 3
    assert stats["records_written"] == 0
    assert stats["encoding"] == "utf-8"


@pytest.fixture
def package_logger():
    logger = logging.getLogger("snipslide")
    saved = (logger.level, list(logger.handlers), logger.propagate)
    yield logger
    logger.setLevel(saved[0])
    logger.handlers[:] = saved[1]
    logger.propagate = saved[2]


def test_logging_table_from_config_is_applied(tmp_path: Path, package_logger) -> None:
    notes = _write_notes(tmp_path)
    cfg_path = tmp_path / "snip.toml"
    cfg_path.write_text('[logging]\nlevel = "DEBUG"\n', encoding="utf-8")

    rc = main(["plan", str(notes), "-c", str(cfg_path)])

    assert rc == 0
    assert package_logger.level == logging.DEBUG


def test_log_level_flag_overrides_config(tmp_path: Path, package_logger) -> None:
    notes = _write_notes(tmp_path)
    cfg_path = tmp_path / "snip.toml"
    cfg_path.write_text('[logging]\nlevel = "DEBUG"\n', encoding="utf-8")

    rc = main(["--log-level", "ERROR", "plan", str(notes), "-c", str(cfg_path)])

    assert rc == 0
    assert package_logger.level == logging.ERROR


def test_default_log_level_is_warning(tmp_path: Path, package_logger) -> None:
    rc = main(["plan", str(_write_notes(tmp_path))])

    assert rc == 0
    assert package_logger.level == logging.WARNING


def test_liner_flag_keeps_config_file_budgets(tmp_path: Path, capsys) -> None:
    cfg_path = tmp_path / "snip.toml"
    cfg_path.write_text(
        '[segment]\nmax_significant_words = 20\nliner_marker = "---"\n',
        encoding="utf-8",
    )

    rc = main(["config", "-c", str(cfg_path), "--liner"])

    assert rc == 0
    segment = json.loads(capsys.readouterr().out)["segment"]
    assert segment["text_block_mode"] == "liner"
    assert segment["max_significant_words"] == 20
    assert segment["club_threshold"] == 13
    assert segment["liner_marker"] == "---"
