"""Operator and punctuation spacing."""

from __future__ import annotations

import re

from .constants import (
    CLOSERS,
    CONTROL_KEYWORDS,
    DOUBLING_OPERATORS,
    JS_RULES,
    OPENERS,
    OPERATOR_CHARS,
    UNARY_KEYWORDS,
)
from .lexing import quoted_end
from .models import SpacingRules

_EXPONENT_PATTERN = re.compile(r"(?:^|[^\w$])(?:\d+\.?\d*|\.\d+)[eE]$")
_UNARY_PRECEDERS = OPERATOR_CHARS + OPENERS + ",;:?"


def _is_word(char: str | None) -> bool:
    # "\x00" marks literal placeholders, which behave like operands.
    return char is not None and (char.isalnum() or char in "_$\x00")


def _last(out: list[str], preceding: str | None) -> str | None:
    return out[-1] if out else preceding


def _follows_closer(out: list[str], preceding: str | None) -> bool:
    last = _last(out, preceding)
    return last is not None and last in CLOSERS


def _last_significant(out: list[str], preceding: str | None) -> str | None:
    for char in reversed(out):
        if not char.isspace():
            return char
    if preceding is None or preceding.isspace():
        return None
    return preceding


def _trailing_word(out: list[str]) -> str:
    i = len(out)
    while i > 0 and out[i - 1] in " \t":
        i -= 1
    end = i
    while i > 0 and _is_word(out[i - 1]):
        i -= 1
    return "".join(out[i:end])


def _trim_spaces(out: list[str]) -> None:
    while out and out[-1] in " \t":
        out.pop()


def _gap(out: list[str], preceding: str | None, pending_space: bool) -> None:
    """Re-emit a collapsed whitespace run unless it follows an opening delimiter."""
    last = _last(out, preceding)
    if pending_space and last is not None and not last.isspace() and last not in OPENERS:
        out.append(" ")


def _is_exponent_sign(out: list[str], char: str) -> bool:
    if char not in "+-" or not out or out[-1] not in "eE":
        return False
    tail = "".join(out[-24:])
    return _EXPONENT_PATTERN.search(tail) is not None


def _is_lone_question(text: str, i: int) -> bool:
    # Ternaries and optional chaining keep a single `?` as written.
    return text[i] == "?" and text[i + 1 : i + 2] != "?"


def _read_operator(text: str, start: int) -> str:
    """Greedily read the operator starting at `start`.

    Examples:
        _read_operator("a!==b", 1)  # "!=="
        _read_operator("x=>x", 1)  # "=>"
    """
    op = text[start]
    i = start + 1
    while i < len(text):
        char = text[i]
        if char == "=":
            op += char
        elif op == "=" and char == ">":
            op += char
            i += 1
            break
        elif char == op[-1] and char in DOUBLING_OPERATORS and len(op) < 3 and "=" not in op:
            op += char
        else:
            break
        i += 1
    return op


def _is_unary(op: str, out: list[str], preceding: str | None) -> bool:
    if op == "!":
        return True
    if op not in ("+", "-", "~"):
        return False
    previous = _last_significant(out, preceding)
    if previous is None or previous in _UNARY_PRECEDERS:
        return True
    return _trailing_word(out) in UNARY_KEYWORDS


def _emit_operator(
    out: list[str],
    op: str,
    following: str | None,
    preceding: str | None,
    pending_space: bool,
    rules: SpacingRules,
) -> None:
    if op in ("++", "--") or _is_unary(op, out, preceding):
        if _is_word(_last(out, preceding)) and _trailing_word(out) in UNARY_KEYWORDS:
            out.append(" ")
        else:
            _gap(out, preceding, pending_space)
        out.extend(op)
        return

    last = _last(out, preceding)
    if last is not None and not last.isspace() and last not in OPENERS:
        out.append(" ")
    out.extend(op)
    if following is not None and following not in CLOSERS and following not in rules.separators:
        out.append(" ")


def space_operators(
    text: str, rules: SpacingRules = JS_RULES, preceding: str | None = None
) -> str:
    """Insert canonical spacing around operators and punctuation.

    Each operator gets exactly one space on either side, adjacent whitespace is
    collapsed, and no space is placed right after an opening delimiter or right
    before a closing delimiter or separator. Separators get one trailing space
    unless whitespace or a closing delimiter follows. Quoted literals, newlines,
    and the indentation after a newline pass through untouched.

    Args:
        text: Fragment to space. Must not contain comments.
        rules: Operator, separator, and quote characters for the language.
        preceding: Last character already written before `text`, so a fragment
            flushed mid-line is spaced against its left neighbour.

    Returns:
        str: The spaced fragment.

    Examples:
        space_operators("a+b")  # "a + b"
        space_operators("f(a,b)")  # "f(a, b)"
        space_operators("x=-1;")  # "x = -1;"
        space_operators("=b", preceding=")")  # " = b"
    """
    out: list[str] = []
    pending_space = False
    i = 0

    while i < len(text):
        char = text[i]

        if char == "\n":
            _trim_spaces(out)
            out.append(char)
            i += 1
            while i < len(text) and text[i] in " \t":
                out.append(text[i])
                i += 1
            pending_space = False
            continue

        if char.isspace():
            pending_space = True
            i += 1
            continue

        if char in rules.quotes:
            end = quoted_end(text, i)
            if _follows_closer(out, preceding):
                out.append(" ")
            else:
                _gap(out, preceding, pending_space)
            out.extend(text[i:end])
            pending_space = False
            i = end
            continue

        if (
            char in rules.operators
            and not _is_exponent_sign(out, char)
            and not _is_lone_question(text, i)
        ):
            op = _read_operator(text, i)
            i += len(op)
            if op.startswith("=") and not pending_space and out and out[-1] in rules.prefixes:
                op = out.pop() + op
            following = text[i] if i < len(text) else None
            _emit_operator(out, op, following, preceding, pending_space, rules)
            pending_space = False
            continue

        if char in rules.separators:
            _trim_spaces(out)
            out.append(char)
            i += 1
            following = text[i] if i < len(text) else None
            if following is not None and not following.isspace() and following not in CLOSERS:
                out.append(" ")
            pending_space = False
            continue

        if char in OPENERS:
            last = _last(out, preceding)
            if char == "{":
                if last is not None and not last.isspace() and last not in OPENERS:
                    out.append(" ")
            elif (
                _trailing_word(out) in CONTROL_KEYWORDS
                and last is not None
                and not last.isspace()
            ):
                out.append(" ")
            else:
                _gap(out, preceding, pending_space)
            out.append(char)
            i += 1
            while i < len(text) and text[i] in " \t":
                i += 1
            pending_space = False
            continue

        if char in CLOSERS:
            _trim_spaces(out)
            out.append(char)
            pending_space = False
            i += 1
            continue

        if _is_word(char) and _follows_closer(out, preceding):
            out.append(" ")
        else:
            _gap(out, preceding, pending_space)
        out.append(char)
        pending_space = False
        i += 1

    return "".join(out)
