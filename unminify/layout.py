"""Output cursor shared by the layout engines."""

from __future__ import annotations

import re

_BLANK_RUN_PATTERN = re.compile(r"\n{3,}")


class OutputBuffer:
    """Accumulate formatted text line by line and track indentation.

    The buffer owns the indent state (`indent_unit` and `level`) and the length
    of the line being written, so engines never keep their own counters. The
    current line is held as a list of written pieces, so appending to a long
    line does not copy it.

    Args:
        indent_unit: Literal string for one indent level.
        level: Initial indent level.

    Examples:
        out = OutputBuffer("  ")
        out.write("a {")
        out.indent()
        out.newline()
    """

    def __init__(self, indent_unit: str, level: int = 0):
        self.indent_unit = indent_unit
        self.level = level
        self._lines: list[str] = []
        self._parts: list[str] = []
        self._length = 0
        self._content = False

    @property
    def line(self) -> str:
        return "".join(self._parts)

    @property
    def line_length(self) -> int:
        return self._length

    @property
    def line_index(self) -> int:
        return len(self._lines)

    def has_content(self) -> bool:
        """Return True when the current line holds more than indentation."""
        return self._content

    def last_char(self) -> str | None:
        """Return the last character of the current line, or None if it is blank."""
        if not self._content:
            return None
        return self._parts[-1][-1]

    def ends_with(self, suffix: str) -> bool:
        tail = ""
        for part in reversed(self._parts):
            if len(tail) >= len(suffix):
                break
            tail = part + tail
        return tail.endswith(suffix)

    def _append(self, text: str) -> None:
        if not text:
            return
        self._parts.append(text)
        self._length += len(text)
        if not self._content and text.strip():
            self._content = True

    def _replace_line(self, text: str) -> None:
        self._parts = []
        self._length = 0
        self._content = False
        self._append(text)

    def _end_line(self, text: str) -> None:
        self._lines.append(text)
        self._replace_line("")

    def write(self, text: str) -> None:
        """Append text; embedded newlines start new lines without indentation."""
        if "\n" not in text:
            self._append(text)
            return
        first, *rest = text.split("\n")
        self._append(first)
        for piece in rest:
            self._end_line(self.line)
            self._append(piece)

    def current_indent(self) -> str:
        return self.indent_unit * self.level

    def newline(self) -> None:
        """Terminate the current line and start a new one at the current level."""
        self._end_line(self.line.rstrip())
        self._append(self.current_indent())

    def ensure_line_start(self) -> None:
        """Start a new line unless the current one holds only indentation."""
        if self.has_content():
            self.newline()
        else:
            self.reindent()

    def indent(self) -> None:
        self.level += 1

    def dedent(self) -> None:
        # Unmatched closers saturate at zero.
        self.level = max(self.level - 1, 0)

    def reindent(self) -> None:
        """Reset a blank current line to the indentation of the current level."""
        if not self._content:
            self._replace_line(self.current_indent())

    def trim_trailing_space(self) -> None:
        if not self._content:
            return
        while not self._parts[-1].strip(" \t"):
            self._length -= len(self._parts.pop())
        last = self._parts[-1].rstrip(" \t")
        self._length -= len(self._parts[-1]) - len(last)
        self._parts[-1] = last

    def getvalue(self) -> str:
        return "\n".join([*self._lines, self.line])


def finalize(text: str, collapse_blank_runs: bool = False) -> str:
    """Strip trailing whitespace and guarantee exactly one trailing newline.

    Args:
        text: Laid-out text.
        collapse_blank_runs: Collapse three or more newlines into two.

    Returns:
        str: Text with no trailing spaces on any line, ending in a single newline.

    Examples:
        finalize("a {\\n}\\n\\n")  # "a {\\n}\\n"
    """
    lines = [line.rstrip() for line in text.split("\n")]
    result = "\n".join(lines)
    if collapse_blank_runs:
        result = _BLANK_RUN_PATTERN.sub("\n\n", result)
    return result.strip("\n") + "\n"
