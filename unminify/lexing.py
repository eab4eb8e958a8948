"""Literal and comment boundary helpers shared by the text transforms."""

from __future__ import annotations

import re

from .constants import UNARY_KEYWORDS

# Characters after which a `/` starts a regex literal rather than a division.
REGEX_PRECEDERS = "(,=:[!&|?{};+-*%<>~^"

_TRAILING_WORD_PATTERN = re.compile(r"[\w$]+$")


def starts_regex(previous: str | None) -> bool:
    """Decide whether a ``/`` after `previous` opens a regex literal.

    Args:
        previous: Last significant source text before the slash, or None at
            the start of input. A trailing keyword such as ``return`` counts.

    Returns:
        bool: True for a regex literal, False for a division operator.

    Examples:
        starts_regex("=")  # True
        starts_regex("return")  # True
        starts_regex("x")  # False
    """
    if not previous:
        return True
    if previous[-1] in REGEX_PRECEDERS:
        return True
    word = _TRAILING_WORD_PATTERN.search(previous)
    return word is not None and word.group(0) in UNARY_KEYWORDS


def is_escaped(text: str, pos: int) -> bool:
    """Determine whether a character is escaped by preceding backslashes.

    Args:
        text: Text containing the character.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when an odd number of backslashes precede `pos`.
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == "\\":
        backslash_count += 1
        i -= 1
    return backslash_count % 2 == 1


def quoted_end(text: str, start: int) -> int:
    """Return the index just past the quote that closes the literal at `start`.

    Unterminated literals run to the end of `text`.
    """
    quote = text[start]
    i = start + 1
    while i < len(text):
        if text[i] == quote and not is_escaped(text, i):
            return i + 1
        i += 1
    return len(text)


def comment_end(text: str, start: int) -> int:
    """Return the index just past the ``//`` or ``/* */`` comment at `start`.

    Line comments stop before their terminating newline.
    """
    if text.startswith("//", start):
        end = text.find("\n", start)
        return len(text) if end == -1 else end
    end = text.find("*/", start + 2)
    return len(text) if end == -1 else end + 2


def regex_end(text: str, start: int) -> int:
    """Return the index past the regex literal (and its flags) at `start`.

    A ``/`` inside a character class does not close the literal. A newline
    ends an unterminated literal.
    """
    i = start + 1
    in_class = False
    while i < len(text):
        char = text[i]
        if char == "\n":
            return i
        if char == "\\":
            i += 2
            continue
        if char == "[":
            in_class = True
        elif char == "]":
            in_class = False
        elif char == "/" and not in_class:
            i += 1
            while i < len(text) and text[i].isalpha():
                i += 1
            return i
        i += 1
    return len(text)


def literal_end(text: str, start: int, previous: str | None) -> int | None:
    """Return the end of a JS literal or comment starting at `start`, if any.

    Args:
        text: Source text.
        start: Index of the candidate opening character.
        previous: Last significant character or word before `start`, used to
            tell a regex literal from a division operator.

    Returns:
        int | None: Index just past the literal, or None when `start` does not
            open a string, template, comment, or regex literal.

    Examples:
        literal_end("x = 'a';", 4, "=")  # 7
        literal_end("a / b", 2, "a")  # None
        literal_end("return /x/", 7, "return")  # 10
    """
    char = text[start]
    if char in "\"'`":
        return quoted_end(text, start)
    if char != "/":
        return None
    if text.startswith("//", start) or text.startswith("/*", start):
        return comment_end(text, start)
    if starts_regex(previous):
        return regex_end(text, start)
    return None
