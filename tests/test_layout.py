from __future__ import annotations

from unminify.layout import OutputBuffer, finalize


def test_output_buffer_tracks_indentation():
    out = OutputBuffer("  ")
    out.write("a {")
    out.indent()
    out.newline()
    out.write("b")
    out.dedent()
    out.ensure_line_start()
    out.write("}")

    assert out.getvalue() == "a {\n  b\n}"


def test_dedent_saturates_at_zero():
    out = OutputBuffer("  ")
    out.dedent()
    out.dedent()

    assert out.level == 0
    assert out.current_indent() == ""


def test_line_state_helpers():
    out = OutputBuffer("    ", level=1)
    out.reindent()

    assert out.line == "    "
    assert not out.has_content()
    assert out.last_char() is None

    out.write("x  ")
    assert out.has_content()
    assert out.last_char() == " "
    assert out.line_length == 7

    out.trim_trailing_space()
    assert out.line == "    x"
    assert out.ends_with("x")


def test_ensure_line_start_reuses_blank_line():
    out = OutputBuffer("  ")
    out.indent()
    out.ensure_line_start()
    out.ensure_line_start()

    assert out.getvalue() == "  "
    assert out.line_index == 0


def test_newline_strips_trailing_whitespace():
    out = OutputBuffer("  ")
    out.write("a   ")
    out.newline()

    assert out.getvalue() == "a\n"


def test_write_splits_embedded_newlines():
    out = OutputBuffer("  ")
    out.write("a\nb")

    assert out.line_index == 1
    assert out.line == "b"


def test_finalize_ends_with_single_newline():
    assert finalize("a {\n}\n\n") == "a {\n}\n"
    assert finalize("\n\nx") == "x\n"
    assert finalize("x   \ny  ") == "x\ny\n"


def test_finalize_collapses_blank_runs_on_request():
    assert finalize("a\n\n\n\nb", collapse_blank_runs=True) == "a\n\nb\n"
    assert finalize("a\n\n\n\nb") == "a\n\n\n\nb\n"
