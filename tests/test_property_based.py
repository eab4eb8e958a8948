from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from unminify.brackets import split_clustered_brackets
from unminify.css import format_css, tokenize_css
from unminify.formatter import format_code
from unminify.html import classify_tag, format_html, tokenize_html
from unminify.javascript import format_js_ts, tokenize_js
from unminify.models import FileType, TagKind, TokenKind
from unminify.spacing import space_operators

file_types = st.sampled_from(list(FileType))
source_text = st.text(
    alphabet=st.one_of(
        st.sampled_from(list("{}()[];,:=+-*/<>!&|'\"`\\ \n\t")),
        st.characters(min_codepoint=32, max_codepoint=126),
    ),
    max_size=200,
)


@given(source_text, file_types)
def test_output_ends_with_single_newline(content: str, file_type: FileType):
    result = format_code(content, file_type)

    assert result.endswith("\n")
    assert not result.endswith("\n\n")
    assert all(line == line.rstrip() for line in result.split("\n"))


@given(source_text, file_types, st.integers(min_value=0, max_value=8))
def test_formatting_is_deterministic(content: str, file_type: FileType, indent: int):
    assert format_code(content, file_type, indent) == format_code(content, file_type, indent)


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _js_depth_changes(line: str):
    for token in tokenize_js(line):
        if token.kind is TokenKind.OPEN:
            yield 1
        elif token.kind is TokenKind.CLOSE:
            yield -1


def _css_depth_changes(line: str):
    for token in tokenize_css(line):
        if token.kind is TokenKind.OPEN:
            yield 1
        elif token.kind is TokenKind.CLOSE:
            yield -1


def _html_depth_changes(line: str):
    for token in tokenize_html(line):
        if token.kind is not TokenKind.TAG:
            continue
        kind = classify_tag(token.text)
        if kind is TagKind.OPENING:
            yield 1
        elif kind is TagKind.CLOSING:
            yield -1


def _assert_indent_within_open_depth(result: str, depth_changes) -> None:
    """Each line is indented by at most the structures still open above it."""
    depth = 0
    for line in result.split("\n"):
        assert _indent_width(line) <= depth, line
        for change in depth_changes(line):
            depth = max(depth + change, 0)


# Literals and comments stay on one line, so each output line scans on its own.
js_sources = st.lists(
    st.sampled_from(
        [
            "a", "b1", "=", "+", "-", ",", ";", ":", "?", " ", "\n",
            "{", "}", "(", ")", "[", "]",
            "a/b", " return /\\(/", "=/[(]/g", "'(('", '"}"', "`[`", "/*{*/",
        ]
    ),
    max_size=40,
).map("".join)

css_sources = st.lists(
    st.sampled_from(
        ["a", "b c", ">", ",", " ", "{", "}", ";", "x:1", "color:red", "/*{*/", '"{"', "@import url(x)"]
    ),
    max_size=30,
).map("".join)

html_sources = st.lists(
    st.sampled_from(
        [
            "<div>", "</div>", "<p>", "</p>", "<br>", "<img src=a>", "<!DOCTYPE html>",
            "<!-- x -->", "<script>x=1</script>", "ab", "cd ef", " ",
        ]
    ),
    max_size=30,
).map("".join)


@given(js_sources)
def test_js_indentation_never_exceeds_open_structure(content: str):
    _assert_indent_within_open_depth(format_js_ts(content, indent=1), _js_depth_changes)


@given(css_sources)
def test_css_indentation_never_exceeds_open_structure(content: str):
    _assert_indent_within_open_depth(format_css(content, indent=1), _css_depth_changes)


@given(html_sources)
def test_html_indentation_never_exceeds_open_structure(content: str):
    _assert_indent_within_open_depth(format_html(content, indent=1), _html_depth_changes)


identifiers = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=6)
declarations = st.tuples(identifiers, st.text(alphabet=string.ascii_lowercase + string.digits, min_size=1, max_size=6))
rules = st.tuples(identifiers, st.lists(declarations, max_size=6))


@given(st.lists(rules, min_size=1, max_size=4))
def test_css_reformatting_is_stable(rule_list):
    source = "".join(
        f"{selector}{{{';'.join(f'{name}:{value}' for name, value in decls)}}}"
        for selector, decls in rule_list
    )
    once = format_css(source, indent=2)

    assert format_css(once.strip(), indent=2) == once


@given(st.lists(st.tuples(identifiers, st.integers(min_value=0, max_value=10**6)), min_size=1, max_size=8))
def test_js_assignments_reformat_stably(assignments):
    source = "".join(f"{name}={value};" for name, value in assignments)
    once = format_js_ts(source)

    assert once == "".join(f"{name} = {value};\n" for name, value in assignments)
    assert format_js_ts(once.strip()) == once


@given(st.text(alphabet=string.ascii_lowercase + " +-*=<>,", max_size=60))
def test_space_operators_is_idempotent(text: str):
    once = space_operators(text)

    assert space_operators(once) == once


@given(st.text(alphabet="()[]{}ab ,", max_size=120))
def test_bracket_splitting_keeps_non_space_characters(text: str):
    result = split_clustered_brackets(text, "  ")

    assert result.replace(" ", "").replace("\n", "") == text.replace(" ", "")
