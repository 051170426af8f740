import logging

from snipslide.core.config import SegmentConfig
from snipslide.core.interfaces import SnippetKind
from snipslide.core.scanner import Default, InCode, InText, finish, scan_line


def _run(lines, cfg=None):
    state = Default()
    emitted = []
    for line in lines:
        step = scan_line(state, line, cfg)
        state = step.state
        emitted.extend(step.emitted)
    return state, emitted


def test_code_block_lines_are_verbatim() -> None:
    state, emitted = _run(["{{{{{{", "x = 1. y = 2, z", "[[[[[[", "}}}}}}"])

    assert state == Default()
    assert len(emitted) == 1
    assert emitted[0].kind == SnippetKind.CODE
    assert emitted[0].lines == ("x = 1. y = 2, z", "[[[[[[")


def test_opening_code_block_keeps_previous_state() -> None:
    step = scan_line(InText(("kept.",)), "{{{{{{")

    assert step.state == InCode(lines=(), resume=InText(("kept.",)))
    assert step.emitted == ()


def test_code_block_inside_text_block_resumes_text() -> None:
    state, emitted = _run(
        ["[[[[[[", "Intro line.", "{{{{{{", "x = 1", "}}}}}}", "Outro line.", "]]]]]]"]
    )

    assert state == Default()
    assert [s.kind for s in emitted] == [SnippetKind.CODE, SnippetKind.TEXT]
    assert emitted[0].lines == ("x = 1",)
    assert emitted[1].lines == ("Intro line.", "Outro line.")


def test_standalone_line_emits_immediately() -> None:
    step = scan_line(Default(), "Hi there. How are you.")

    assert step.state == Default()
    assert len(step.emitted) == 1
    assert step.emitted[0].lines == ("Hi there.", "How are you.")


def test_text_block_accumulates_until_closed() -> None:
    state, emitted = _run(["[[[[[[", "One.", "Two."])

    assert emitted == []
    assert state == InText(("One.", "Two."))

    step = scan_line(state, "]]]]]]")
    assert step.state == Default()
    assert step.emitted[0].lines == ("One.", "Two.")


def test_scan_line_leaves_input_state_untouched() -> None:
    state = InText(("One.",))

    scan_line(state, "Two.")

    assert state.fragments == ("One.",)


def test_stray_closing_delimiters_emit_nothing() -> None:
    state, emitted = _run(["]]]]]]", "}}}}}}"])

    assert state == Default()
    assert emitted == []


def test_empty_blocks_are_dropped() -> None:
    state, emitted = _run(["{{{{{{", "}}}}}}", "[[[[[[", "]]]]]]"])

    assert state == Default()
    assert emitted == []


def test_liner_marker_toggles_text_block() -> None:
    cfg = SegmentConfig.liner()

    state, emitted = _run(["___", "Hello.", "World.", "___", "Next."], cfg)

    assert state == Default()
    assert [s.lines for s in emitted] == [("Hello.", "World."), ("Next.",)]


def test_liner_mode_treats_brackets_as_text() -> None:
    cfg = SegmentConfig.liner()

    state, emitted = _run(["[[[[[["], cfg)

    assert state == Default()
    assert emitted[0].kind == SnippetKind.TEXT
    assert emitted[0].lines == ("[[[[[[",)


def test_finish_drops_unterminated_block_with_warning(caplog) -> None:
    caplog.set_level(logging.WARNING, logger="snipslide")

    assert finish(InText(("Dangling.",))) == ()
    assert finish(Default()) == ()
    assert any("unterminated" in r.getMessage() for r in caplog.records)


def test_finish_can_flush_unterminated_blocks() -> None:
    cfg = SegmentConfig(flush_unterminated=True)
    state = InCode(lines=("x = 1",), resume=InText(("Intro.",)))

    flushed = finish(state, cfg)

    assert [s.kind for s in flushed] == [SnippetKind.CODE, SnippetKind.TEXT]
    assert flushed[0].lines == ("x = 1",)
    assert flushed[1].lines == ("Intro.",)
