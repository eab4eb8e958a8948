"""Splitting of clustered delimiter runs."""

from __future__ import annotations

from .constants import BRACKET_RUN_LIMIT, BRACKET_SPLIT_WIDTH, CLOSERS, OPENERS
from .layout import OutputBuffer
from .lexing import literal_end


def _leading_closers(text: str, start: int) -> int:
    count = 0
    i = start
    while i < len(text) and text[i] in CLOSERS and count < BRACKET_RUN_LIMIT:
        count += 1
        i += 1
    # A third closer starts a line of its own, so it never lowers this one.
    return min(count, BRACKET_RUN_LIMIT - 1)


class _DelimiterStack:
    """Unclosed delimiters, each recorded by the output line that opened it.

    Lines are pushed in non-decreasing order, so the distinct lines form
    contiguous runs and can be counted as the stack changes.
    """

    def __init__(self):
        self.lines: list[int] = []
        self.open_lines = 0

    def push(self, line: int) -> None:
        if not self.lines or self.lines[-1] != line:
            self.open_lines += 1
        self.lines.append(line)

    def pop(self) -> None:
        if not self.lines:
            return
        line = self.lines.pop()
        if not self.lines or self.lines[-1] != line:
            self.open_lines -= 1

    def depth(self, closing: int = 0) -> int:
        """Count the distinct lines still open once `closing` closers are popped."""
        keep = len(self.lines) - closing
        if keep <= 0:
            return 0
        dropped = set(self.lines[keep:]) - {self.lines[keep - 1]}
        return self.open_lines - len(dropped)


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def split_clustered_brackets(
    text: str, indent_unit: str, base_level: int = 0, width: int = BRACKET_SPLIT_WIDTH
) -> str:
    """Break runs of clustered delimiters and over-long lines.

    A newline is inserted after the third consecutive opening delimiter, before
    the third consecutive closing delimiter, and around any delimiter met while
    the current line is longer than `width`. Every line after a break or an
    explicit newline is indented to `base_level` plus the number of lines that
    still hold an unclosed delimiter, counted after the closers leading that
    line. Horizontal whitespace collapses to one space. String, template,
    comment, and regex literals are copied verbatim. The first line keeps its
    position.

    Args:
        text: Text to split.
        indent_unit: Literal string for one indent level.
        base_level: Indent level the text starts at.
        width: Line length that triggers a break, independent of the
            configured maximum line length.

    Returns:
        str: Text with clustered delimiters split across lines.

    Examples:
        split_clustered_brackets("a(((b)))", "  ")  # "a(((\\n  b))\\n)"
    """
    out = OutputBuffer(indent_unit, base_level)
    stack = _DelimiterStack()
    run = 0
    run_closing = False
    at_line_start = False
    previous: str | None = None
    joined = False
    i = 0

    while i < len(text):
        char = text[i]

        if char == "\n":
            out.write("\n")
            at_line_start = True
            joined = False
            run = 0
            i += 1
            continue

        if char in " \t":
            if not at_line_start and out.has_content() and not out.ends_with(" "):
                out.write(" ")
            joined = False
            i += 1
            continue

        if at_line_start:
            closing = _leading_closers(text, i)
            out.write(indent_unit * (base_level + stack.depth(closing)))
            at_line_start = False

        end = literal_end(text, i, previous)
        if end is not None:
            out.write(text[i:end])
            previous = "\x00"
            run = 0
            i = end
            continue

        if char in OPENERS:
            stack.push(out.line_index)
            out.write(char)
            run = run + 1 if run and not run_closing else 1
            run_closing = False
            if run >= BRACKET_RUN_LIMIT or out.line_length > width:
                out.write("\n")
                at_line_start = True
                run = 0
        elif char in CLOSERS:
            run = run + 1 if run and run_closing else 1
            run_closing = True
            if (run >= BRACKET_RUN_LIMIT or out.line_length > width) and out.has_content():
                out.trim_trailing_space()
                out.write("\n")
                at_line_start = True
                run = 0
                # Re-read the closer at the start of the new line.
                continue
            stack.pop()
            out.write(char)
        else:
            out.write(char)
            run = 0

        if joined and previous and _is_word_char(char) and _is_word_char(previous[-1]):
            previous += char
        else:
            previous = char
        joined = True
        i += 1

    return out.getvalue()
