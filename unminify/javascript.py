"""JavaScript and TypeScript tokenizing and layout."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from .brackets import split_clustered_brackets
from .constants import (
    BLOCK_CONTINUATION_WORDS,
    CLOSER_CONTINUATIONS,
    CLOSERS,
    JS_RULES,
    OPENERS,
)
from .layout import OutputBuffer, finalize
from .lexing import starts_regex
from .models import JsMode, ScanContext, Token, TokenKind
from .spacing import space_operators

logger = logging.getLogger(__name__)

_PLACEHOLDER_PATTERN = re.compile(r"\x00(\d+)\x00")
_LEADING_WORD_PATTERN = re.compile(r"[A-Za-z_$][\w$]*")

_PUNCTUATION = {
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    **{char: TokenKind.OPEN for char in OPENERS},
    **{char: TokenKind.CLOSE for char in CLOSERS},
}


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in "_$"


def _previous_text(ctx: ScanContext) -> str | None:
    """Return the last significant source text before the scan position."""
    if ctx.buffer:
        # Only the trailing word or character matters.
        tail: list[str] = []
        for char in reversed(ctx.buffer):
            if not _is_word_char(char):
                return char if not tail else "".join(reversed(tail))
            tail.append(char)
        return "".join(reversed(tail))
    for token in reversed(ctx.tokens):
        if token.kind is TokenKind.WHITESPACE or token.kind is TokenKind.COMMENT:
            continue
        if token.kind is TokenKind.STRING:
            return "\x00"
        return token.text
    return None


def _starts_regex(ctx: ScanContext) -> bool:
    return starts_regex(_previous_text(ctx))


def _scan_code(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    if char.isspace():
        ctx.emit(TokenKind.TEXT)
        if ctx.tokens and ctx.tokens[-1].kind is not TokenKind.WHITESPACE:
            ctx.emit(TokenKind.WHITESPACE, " ")
        return i + 1

    if char == "/" and text.startswith(("//", "/*"), i):
        ctx.emit(TokenKind.TEXT)
        ctx.mode = JsMode.LINE_COMMENT if text[i + 1] == "/" else JsMode.BLOCK_COMMENT
        ctx.buffer.extend(text[i : i + 2])
        return i + 2

    if char == "/" and _starts_regex(ctx):
        ctx.emit(TokenKind.TEXT)
        ctx.mode = JsMode.REGEX
        ctx.in_class = False
        ctx.buffer.append(char)
        return i + 1

    if char in "\"'`":
        ctx.emit(TokenKind.TEXT)
        ctx.mode = JsMode.TEMPLATE if char == "`" else JsMode.STRING
        ctx.quote = char
        ctx.buffer.append(char)
        return i + 1

    if char in _PUNCTUATION:
        ctx.emit(TokenKind.TEXT)
        ctx.emit(_PUNCTUATION[char], char)
        return i + 1

    ctx.buffer.append(char)
    return i + 1


def _scan_quoted(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    if char == "\n" and ctx.mode is JsMode.STRING:
        # Plain strings cannot span lines; end the unterminated literal here.
        ctx.emit(TokenKind.STRING)
        ctx.mode = JsMode.CODE
        ctx.quote = None
        return i
    ctx.buffer.append(char)
    if char == "\\" and i + 1 < len(text):
        ctx.buffer.append(text[i + 1])
        return i + 2
    if char == ctx.quote:
        ctx.emit(TokenKind.STRING)
        ctx.mode = JsMode.CODE
        ctx.quote = None
    return i + 1


def _scan_regex(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    if char == "\n":
        ctx.emit(TokenKind.STRING)
        ctx.mode = JsMode.CODE
        return i
    ctx.buffer.append(char)
    if char == "\\" and i + 1 < len(text):
        ctx.buffer.append(text[i + 1])
        return i + 2
    if char == "[":
        ctx.in_class = True
    elif char == "]":
        ctx.in_class = False
    elif char == "/" and not ctx.in_class:
        i += 1
        while i < len(text) and text[i].isalpha():
            ctx.buffer.append(text[i])
            i += 1
        ctx.emit(TokenKind.STRING)
        ctx.mode = JsMode.CODE
        return i
    return i + 1


def _scan_line_comment(ctx: ScanContext, text: str, i: int) -> int:
    if text[i] == "\n":
        ctx.emit(TokenKind.COMMENT)
        ctx.mode = JsMode.CODE
        return i
    ctx.buffer.append(text[i])
    return i + 1


def _scan_block_comment(ctx: ScanContext, text: str, i: int) -> int:
    ctx.buffer.append(text[i])
    if len(ctx.buffer) >= 4 and ctx.buffer[-2:] == ["*", "/"]:
        ctx.emit(TokenKind.COMMENT)
        ctx.mode = JsMode.CODE
    return i + 1


_HANDLERS: dict[JsMode, Callable[[ScanContext, str, int], int]] = {
    JsMode.CODE: _scan_code,
    JsMode.STRING: _scan_quoted,
    JsMode.TEMPLATE: _scan_quoted,
    JsMode.REGEX: _scan_regex,
    JsMode.LINE_COMMENT: _scan_line_comment,
    JsMode.BLOCK_COMMENT: _scan_block_comment,
}

_TRAILING_KIND = {
    JsMode.CODE: TokenKind.TEXT,
    JsMode.STRING: TokenKind.STRING,
    JsMode.TEMPLATE: TokenKind.STRING,
    JsMode.REGEX: TokenKind.STRING,
    JsMode.LINE_COMMENT: TokenKind.COMMENT,
    JsMode.BLOCK_COMMENT: TokenKind.COMMENT,
}


def tokenize_js(content: str) -> list[Token]:
    """Split JavaScript or TypeScript into layout tokens.

    String, template, and regex literals become STRING tokens and comments
    become COMMENT tokens, both copied verbatim. A backslash inside a literal
    escapes the next character. Whitespace runs outside literals collapse into
    a single WHITESPACE token.

    Args:
        content: JavaScript or TypeScript source.

    Returns:
        list[Token]: Tokens in source order.

    Examples:
        tokenize_js("f(a);")
        # [Token(TEXT, "f"), Token(OPEN, "("), Token(TEXT, "a"),
        #  Token(CLOSE, ")"), Token(SEMICOLON, ";")]
    """
    ctx = ScanContext(mode=JsMode.CODE)
    i = 0
    while i < len(content):
        i = _HANDLERS[ctx.mode](ctx, content, i)
    ctx.emit(_TRAILING_KIND[ctx.mode])
    return ctx.tokens


class PendingStatement:
    """Statement text gathered since the last flush.

    Literals are held out of the text as ``\\x00N\\x00`` placeholders so that
    operator spacing never reaches inside them.
    """

    def __init__(self):
        self.parts: list[str] = []
        self.literals: list[str] = []
        self.length = 0

    def __bool__(self) -> bool:
        return bool(self.parts)

    def add(self, text: str) -> None:
        if "\x00" in text:
            # Stray NULs would read as placeholders.
            self.add_literal(text)
            return
        self.parts.append(text)
        self.length += len(text)

    def add_space(self) -> None:
        if self.parts and not self.parts[-1].endswith(" "):
            self.add(" ")

    def add_literal(self, text: str) -> None:
        self.parts.append(f"\x00{len(self.literals)}\x00")
        self.literals.append(text)
        self.length += len(text)

    def render(self, preceding: str | None = None) -> str:
        spaced = space_operators("".join(self.parts), JS_RULES, preceding)
        return _PLACEHOLDER_PATTERN.sub(lambda match: self.literals[int(match.group(1))], spaced)

    def clear(self) -> None:
        self.parts.clear()
        self.literals.clear()
        self.length = 0


def _following_tokens(tokens: list[Token]) -> list[Token | None]:
    """Map each position to the next non-whitespace token after it."""
    following: list[Token | None] = [None] * len(tokens)
    upcoming = None
    for index in range(len(tokens) - 1, -1, -1):
        following[index] = upcoming
        if tokens[index].kind is not TokenKind.WHITESPACE:
            upcoming = tokens[index]
    return following


def _starts_statement(token: Token | None) -> bool:
    if token is None or token.kind is not TokenKind.TEXT:
        return False
    word = _LEADING_WORD_PATTERN.match(token.text)
    return word is not None and word.group(0) not in BLOCK_CONTINUATION_WORDS


class _JsLayout:
    """Brace-driven statement layout for one JavaScript or TypeScript file."""

    def __init__(self, indent_unit: str, max_line_length: int):
        self.out = OutputBuffer(indent_unit)
        self.max_line_length = max_line_length
        self.pending = PendingStatement()
        self.stack: list[str] = []

    def flush(self) -> None:
        if not self.pending:
            return
        text = self.pending.render(self.out.last_char())
        self.pending.clear()
        self.out.write(text if self.out.has_content() else text.lstrip())

    def comment(self, text: str) -> None:
        self.flush()
        if self.out.has_content() and not self.out.ends_with(" "):
            self.out.write(" ")
        self.out.write(text)
        self.out.newline()

    def open(self, char: str) -> None:
        self.pending.add(char)
        self.flush()
        self.stack.append(char)
        if char == "{":
            self.out.indent()
            self.out.newline()

    def close(self, char: str, following: Token | None) -> None:
        self.flush()
        if char == "}":
            self.out.dedent()
            self.out.ensure_line_start()
        else:
            self.out.trim_trailing_space()
        self.out.write(char)
        if self.stack:
            self.stack.pop()

        if char == "}" and _starts_statement(following):
            self.out.newline()
        elif (
            following is not None
            and following.text[0] not in CLOSER_CONTINUATIONS
            and self.out.line_length > self.max_line_length
        ):
            self.out.newline()

    def semicolon(self) -> None:
        self.pending.add(";")
        if self.stack and self.stack[-1] != "{":
            # `for (init; test; update)` stays on one line.
            return
        self.flush()
        self.out.newline()

    def comma(self) -> None:
        self.pending.add(",")
        if self.out.line_length + self.pending.length > self.max_line_length:
            self.flush()
            self.out.newline()

    def finish(self) -> str:
        if self.pending:
            statement = self.pending.render(self.out.last_char())
            self.pending.clear()
            statement = split_clustered_brackets(
                statement, self.out.indent_unit, self.out.level
            )
            if not self.out.has_content():
                statement = statement.lstrip()
            self.out.write(statement)
            if not statement.rstrip().endswith((";", "}", ")", "]")):
                self.out.write(";")
            self.out.newline()
        return self.out.getvalue()


def layout_js(tokens: list[Token], indent_unit: str, max_line_length: int) -> str:
    """Lay out JavaScript tokens with one nesting level per open brace."""
    layout = _JsLayout(indent_unit, max_line_length)
    following = _following_tokens(tokens)
    for index, token in enumerate(tokens):
        if token.kind is TokenKind.TEXT:
            layout.pending.add(token.text)
        elif token.kind is TokenKind.WHITESPACE:
            layout.pending.add_space()
        elif token.kind is TokenKind.STRING:
            layout.pending.add_literal(token.text)
        elif token.kind is TokenKind.COMMENT:
            layout.comment(token.text)
        elif token.kind is TokenKind.OPEN:
            layout.open(token.text)
        elif token.kind is TokenKind.CLOSE:
            layout.close(token.text, following[index])
        elif token.kind is TokenKind.SEMICOLON:
            layout.semicolon()
        elif token.kind is TokenKind.COMMA:
            layout.comma()
    return layout.finish()


def format_js_ts(content: str, indent: int = 4, max_line_length: int = 80) -> str:
    """Reformat JavaScript or TypeScript with brace indentation and statement breaks.

    Args:
        content: Source text, typically minified.
        indent: Number of spaces per indent level.
        max_line_length: Soft limit used to break after commas and closers.

    Returns:
        str: Formatted source ending in exactly one newline.

    Examples:
        format_js_ts("function f(a,b){return a+b;}", indent=2)
        # "function f(a, b) {\\n  return a + b;\\n}\\n"
    """
    indent_unit = " " * indent
    tokens = tokenize_js(content)
    logger.debug("Tokenized JS/TS into %d tokens", len(tokens))
    laid_out = layout_js(tokens, indent_unit, max_line_length)
    return finalize(split_clustered_brackets(laid_out, indent_unit))
