from pathlib import Path

import pytest

from snipslide.core.config import (
    CLUB_THRESHOLD,
    MAX_SIGNIFICANT_WORDS,
    SegmentConfig,
    SnipConfig,
    TextBlockMode,
    load_config_from_path,
)


def test_segment_defaults_match_bracket_mode() -> None:
    cfg = SegmentConfig()

    assert cfg.max_significant_words == MAX_SIGNIFICANT_WORDS == 10
    assert cfg.club_threshold == CLUB_THRESHOLD == 8
    assert cfg.text_block_mode == TextBlockMode.BRACKET
    assert cfg.flush_unterminated is False


def test_liner_preset_uses_toggle_and_looser_budget() -> None:
    cfg = SegmentConfig.liner(flush_unterminated=True)

    assert cfg.is_liner
    assert cfg.liner_marker == "___"
    assert (cfg.max_significant_words, cfg.club_threshold) == (12, 13)
    assert cfg.flush_unterminated is True


def test_validate_normalizes_mode_and_rejects_bad_values() -> None:
    cfg = SegmentConfig(text_block_mode=" LINER ")
    cfg.validate()
    assert cfg.text_block_mode == "liner"

    with pytest.raises(ValueError):
        SegmentConfig(text_block_mode="fenced").validate()
    with pytest.raises(ValueError):
        SegmentConfig(max_significant_words=0).validate()
    with pytest.raises(ValueError):
        SegmentConfig.liner(liner_marker="{{{{{{").validate()


def test_validate_rejects_colliding_output_paths(tmp_path: Path) -> None:
    cfg = SnipConfig()
    cfg.output.output_dir = tmp_path
    cfg.output.jsonl_path = "slides.out"
    cfg.output.preview_path = str(tmp_path / "slides.out")

    with pytest.raises(ValueError):
        cfg.validate()


def test_from_dict_builds_nested_sections() -> None:
    cfg = SnipConfig.from_dict(
        {
            "segment": {"text_block_mode": "liner", "club_threshold": "5"},
            "output": {"output_dir": "out", "jsonl_path": "slides.jsonl"},
        }
    )

    assert cfg.segment.text_block_mode == "liner"
    assert cfg.segment.club_threshold == 5
    assert cfg.output.output_dir == Path("out")
    assert cfg.output.resolve(cfg.output.jsonl_path) == Path("out") / "slides.jsonl"


def test_from_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="max_words"):
        SnipConfig.from_dict({"segment": {"max_words": 3}})


def test_json_roundtrip(tmp_path: Path) -> None:
    cfg = SnipConfig(segment=SegmentConfig.liner())
    cfg.output.preview_path = "preview.txt"
    path = tmp_path / "cfg.json"

    cfg.to_json(path)
    loaded = load_config_from_path(path)

    assert loaded == cfg


def test_load_toml_config(tmp_path: Path) -> None:
    path = tmp_path / "snip.toml"
    path.write_text(
        "\n".join(
            [
                "[segment]",
                'text_block_mode = "liner"',
                "max_significant_words = 12",
                "flush_unterminated = true",
                "",
                "[logging]",
                'level = "DEBUG"',
            ]
        ),
        encoding="utf-8",
    )

    cfg = load_config_from_path(path)

    assert cfg.segment.is_liner
    assert cfg.segment.max_significant_words == 12
    assert cfg.segment.flush_unterminated is True
    assert cfg.logging.level == "DEBUG"


def test_load_config_rejects_unknown_extension(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_config_from_path(tmp_path / "cfg.yaml")
