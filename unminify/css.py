"""CSS tokenizing and layout."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .constants import CSS_RULES
from .layout import OutputBuffer, finalize
from .lexing import is_escaped
from .models import CssMode, ScanContext, Token, TokenKind
from .spacing import space_operators

logger = logging.getLogger(__name__)

MAX_COMPACT_DECLARATIONS = 3

_STRUCTURE = {
    "{": TokenKind.OPEN,
    "}": TokenKind.CLOSE,
    ";": TokenKind.SEMICOLON,
}


def _scan_normal(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    if text.startswith("/*", i):
        ctx.emit(TokenKind.TEXT)
        ctx.mode = CssMode.COMMENT
        ctx.buffer.extend("/*")
        return i + 2
    if char in _STRUCTURE:
        ctx.emit(TokenKind.TEXT)
        ctx.emit(_STRUCTURE[char], char)
        return i + 1
    if char.isspace():
        if ctx.buffer and ctx.buffer[-1] != " ":
            ctx.buffer.append(" ")
        return i + 1
    if char in "\"'":
        ctx.mode = CssMode.STRING
        ctx.quote = char
    ctx.buffer.append(char)
    return i + 1


def _scan_string(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    ctx.buffer.append(char)
    if char == ctx.quote and not is_escaped(text, i):
        ctx.mode = CssMode.NORMAL
        ctx.quote = None
    return i + 1


def _scan_comment(ctx: ScanContext, text: str, i: int) -> int:
    ctx.buffer.append(text[i])
    if len(ctx.buffer) >= 4 and ctx.buffer[-2:] == ["*", "/"]:
        ctx.emit(TokenKind.COMMENT)
        ctx.mode = CssMode.NORMAL
    return i + 1


_HANDLERS: dict[CssMode, Callable[[ScanContext, str, int], int]] = {
    CssMode.NORMAL: _scan_normal,
    CssMode.STRING: _scan_string,
    CssMode.COMMENT: _scan_comment,
}


def tokenize_css(content: str) -> list[Token]:
    """Split CSS into text, comment, brace, and semicolon tokens.

    Whitespace outside strings collapses to single spaces. Quoted strings are
    part of the surrounding TEXT token and never end a declaration.

    Args:
        content: CSS source.

    Returns:
        list[Token]: Tokens in source order.

    Examples:
        tokenize_css("a{color:red}")
        # [Token(TEXT, "a"), Token(OPEN, "{"), Token(TEXT, "color:red"), Token(CLOSE, "}")]
    """
    ctx = ScanContext(mode=CssMode.NORMAL)
    i = 0
    while i < len(content):
        i = _HANDLERS[ctx.mode](ctx, content, i)
    ctx.emit(TokenKind.COMMENT if ctx.mode is CssMode.COMMENT else TokenKind.TEXT)
    return ctx.tokens


def format_declaration(declaration: str) -> str:
    """Trim a declaration, space its first colon, and space its operators.

    Examples:
        format_declaration(" font-family:Arial,sans-serif ")
        # "font-family: Arial, sans-serif"
    """
    name, colon, value = declaration.strip().partition(":")
    if colon:
        declaration = f"{name.strip()}: {value.strip()}"
    return space_operators(declaration, CSS_RULES)


def format_selector(selector: str) -> str:
    """Trim a selector and space its combinators and commas.

    Examples:
        format_selector("ul>li,a:hover")  # "ul > li, a:hover"
    """
    return space_operators(selector.strip(), CSS_RULES)


def render_declarations(out: OutputBuffer, declarations: list[str], max_line_length: int) -> None:
    """Write a rule's declarations compactly on one line or one per line.

    The compact form is used for at most `MAX_COMPACT_DECLARATIONS`
    declarations whose ``"; "``-joined text, indented, stays shorter than
    `max_line_length`.
    """
    if not declarations:
        return
    out.ensure_line_start()
    joined = "; ".join(declarations)
    if (
        len(declarations) <= MAX_COMPACT_DECLARATIONS
        and out.line_length + len(joined) < max_line_length
    ):
        out.write(f"{joined};")
    else:
        for index, declaration in enumerate(declarations):
            if index:
                out.newline()
            out.write(f"{declaration};")
    out.newline()


class _CssLayout:
    """Brace-driven layout state for one CSS document."""

    def __init__(self, indent_unit: str, max_line_length: int):
        self.out = OutputBuffer(indent_unit)
        self.max_line_length = max_line_length
        self.pending = ""
        self.declarations: list[str] = []
        self.depth = 0
        self.after_block = False

    def _take_pending(self) -> str:
        text, self.pending = self.pending.strip(), ""
        return text

    def _flush_declarations(self) -> None:
        render_declarations(self.out, self.declarations, self.max_line_length)
        if self.declarations:
            self.after_block = False
        self.declarations = []

    def _start_block_line(self) -> None:
        self.out.ensure_line_start()
        if self.after_block:
            self.out.newline()
            self.after_block = False

    def comment(self, text: str) -> None:
        self._flush_declarations()
        self._start_block_line()
        self.out.write(text)
        self.out.newline()

    def open_block(self) -> None:
        selector = format_selector(self._take_pending())
        self._flush_declarations()
        self._start_block_line()
        self.out.write(f"{selector} {{" if selector else "{")
        self.out.indent()
        self.out.newline()
        self.depth += 1

    def end_declaration(self) -> None:
        text = self._take_pending()
        if not text:
            return
        if self.depth:
            self.declarations.append(format_declaration(text))
            return
        # Top-level statements such as @import and @charset.
        self._start_block_line()
        self.out.write(f"{format_selector(text)};")
        self.out.newline()

    def close_block(self) -> None:
        text = self._take_pending()
        if text:
            self.declarations.append(format_declaration(text))
        self._flush_declarations()
        self.out.dedent()
        self.out.ensure_line_start()
        self.out.write("}")
        self.out.newline()
        self.depth = max(self.depth - 1, 0)
        self.after_block = True

    def finish(self) -> str:
        text = self._take_pending()
        if text:
            self.declarations.append(format_declaration(text))
        if self.depth:
            while self.depth:
                self.close_block()
        else:
            self._flush_declarations()
        return self.out.getvalue()


def layout_css(tokens: list[Token], indent_unit: str, max_line_length: int) -> str:
    """Lay out CSS tokens with one nesting level per open brace."""
    layout = _CssLayout(indent_unit, max_line_length)
    for token in tokens:
        if token.kind is TokenKind.TEXT:
            layout.pending += token.text
        elif token.kind is TokenKind.COMMENT:
            layout.comment(token.text)
        elif token.kind is TokenKind.OPEN:
            layout.open_block()
        elif token.kind is TokenKind.SEMICOLON:
            layout.end_declaration()
        elif token.kind is TokenKind.CLOSE:
            layout.close_block()
    return finalize(layout.finish(), collapse_blank_runs=True)


def format_css(content: str, indent: int = 4, max_line_length: int = 80) -> str:
    """Reformat CSS with one rule per block and declarations compacted when short.

    Args:
        content: CSS source, typically minified.
        indent: Number of spaces per indent level.
        max_line_length: Width limit for the compact declaration form.

    Returns:
        str: Formatted CSS ending in exactly one newline.

    Examples:
        format_css("a{color:red;margin:0;padding:0}", indent=2)
        # "a {\\n  color: red; margin: 0; padding: 0;\\n}\\n"
    """
    tokens = tokenize_css(content)
    logger.debug("Tokenized CSS into %d tokens", len(tokens))
    return layout_css(tokens, " " * indent, max_line_length)
