"""HTML tokenizing and layout."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from .constants import HTML_RULES, RAW_TEXT_ELEMENTS, VOID_ELEMENTS
from .layout import OutputBuffer, finalize
from .models import HtmlMode, ScanContext, TagKind, Token, TokenKind
from .spacing import space_operators

logger = logging.getLogger(__name__)

TAG_NAME_PATTERN = re.compile(r"/?\s*([A-Za-z][\w:.-]*)")
_SPACE_BEFORE_END_PATTERN = re.compile(r"\s+>$")


def tag_name(tag: str) -> str:
    """Return the lower-cased element name of a tag, or an empty string.

    Examples:
        tag_name("<IMG src='a.png'>")  # "img"
        tag_name("</div>")  # "div"
    """
    match = TAG_NAME_PATTERN.match(tag.lstrip("<"))
    return match.group(1).lower() if match else ""


def _scan_text(ctx: ScanContext, text: str, i: int) -> int:
    if text[i] != "<":
        ctx.buffer.append(text[i])
        return i + 1

    ctx.emit(TokenKind.TEXT)
    if text.startswith("<!--", i):
        ctx.mode = HtmlMode.COMMENT
        ctx.buffer.extend("<!--")
        return i + 4

    ctx.mode = HtmlMode.TAG
    ctx.buffer.append("<")
    return i + 1


def _scan_tag(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    ctx.buffer.append(char)
    if char in "\"'":
        ctx.mode = HtmlMode.TAG_QUOTE
        ctx.quote = char
    elif char == ">":
        tag = "".join(ctx.buffer)
        ctx.emit(TokenKind.TAG)
        name = tag_name(tag)
        opens_raw_text = (
            name in RAW_TEXT_ELEMENTS and not tag.startswith("</") and not tag.endswith("/>")
        )
        ctx.raw_tag = name if opens_raw_text else None
        ctx.mode = HtmlMode.RAW_TEXT if opens_raw_text else HtmlMode.TEXT
    return i + 1


def _scan_tag_quote(ctx: ScanContext, text: str, i: int) -> int:
    char = text[i]
    ctx.buffer.append(char)
    if char == ctx.quote:
        ctx.mode = HtmlMode.TAG
        ctx.quote = None
    return i + 1


def _scan_comment(ctx: ScanContext, text: str, i: int) -> int:
    ctx.buffer.append(text[i])
    # Seven characters is the shortest complete comment, "<!---->".
    if len(ctx.buffer) >= 7 and ctx.buffer[-3:] == ["-", "-", ">"]:
        ctx.emit(TokenKind.COMMENT)
        ctx.mode = HtmlMode.TEXT
    return i + 1


def _scan_raw_text(ctx: ScanContext, text: str, i: int) -> int:
    closing = re.compile(rf"</{re.escape(ctx.raw_tag)}", re.IGNORECASE).search(text, i)
    end = closing.start() if closing else len(text)
    ctx.emit(TokenKind.STRING, text[i:end])
    ctx.mode = HtmlMode.TEXT
    ctx.raw_tag = None
    return end


_HANDLERS: dict[HtmlMode, Callable[[ScanContext, str, int], int]] = {
    HtmlMode.TEXT: _scan_text,
    HtmlMode.TAG: _scan_tag,
    HtmlMode.TAG_QUOTE: _scan_tag_quote,
    HtmlMode.COMMENT: _scan_comment,
    HtmlMode.RAW_TEXT: _scan_raw_text,
}

# Kind given to whatever is still buffered when the input ends.
_TRAILING_KIND = {
    HtmlMode.TEXT: TokenKind.TEXT,
    HtmlMode.TAG: TokenKind.TAG,
    HtmlMode.TAG_QUOTE: TokenKind.TAG,
    HtmlMode.COMMENT: TokenKind.COMMENT,
    HtmlMode.RAW_TEXT: TokenKind.STRING,
}


def tokenize_html(content: str) -> list[Token]:
    """Split HTML into text, tag, comment, and raw-text tokens.

    Tags end at the first ``>`` outside a quoted attribute value. Comments end
    at ``-->``. The content of ``<script>`` and ``<style>`` elements is emitted
    as a single STRING token. Unterminated tags and comments run to the end of
    the input.

    Args:
        content: HTML source.

    Returns:
        list[Token]: Tokens in source order.

    Examples:
        tokenize_html("<p>Hi</p>")
        # [Token(TAG, "<p>"), Token(TEXT, "Hi"), Token(TAG, "</p>")]
    """
    ctx = ScanContext(mode=HtmlMode.TEXT)
    i = 0
    while i < len(content):
        i = _HANDLERS[ctx.mode](ctx, content, i)
    ctx.emit(_TRAILING_KIND[ctx.mode])
    return ctx.tokens


def normalize_tag(tag: str) -> str:
    """Normalize whitespace and ``=`` spacing inside a tag.

    ``=`` becomes ``" = "`` with any surrounding whitespace removed, quoted
    attribute values are copied untouched, and other whitespace runs collapse
    to a single space.

    Examples:
        normalize_tag('<a  href="x  y"\\n class=b>')  # '<a href = "x  y" class = b>'
    """
    result = ""
    i = 0
    while i < len(tag):
        char = tag[i]
        if char == "=":
            result = result.rstrip() + " = "
            i += 1
            while i < len(tag) and tag[i].isspace():
                i += 1
            continue
        if char in "\"'":
            end = tag.find(char, i + 1)
            end = len(tag) if end == -1 else end + 1
            result += tag[i:end]
            i = end
            continue
        if char.isspace():
            if not result.endswith(" "):
                result += " "
            i += 1
            continue
        result += char
        i += 1
    return _SPACE_BEFORE_END_PATTERN.sub(">", result)


def classify_tag(tag: str) -> TagKind:
    """Decide how a normalized tag affects indentation.

    Examples:
        classify_tag("<div class = a>")  # TagKind.OPENING
        classify_tag('<img src = "a.png">')  # TagKind.VOID
    """
    if tag.startswith("<!--"):
        return TagKind.DECLARATION
    inner = tag[1:].removesuffix(">").rstrip()
    if inner.startswith("/"):
        return TagKind.CLOSING
    if inner.endswith("/") or tag_name(inner) in VOID_ELEMENTS:
        return TagKind.VOID
    if inner.startswith(("!", "?")):
        return TagKind.DECLARATION
    return TagKind.OPENING


def _write_text(out: OutputBuffer, text: str, max_line_length: int) -> None:
    words = space_operators(" ".join(text.split()), HTML_RULES).split()
    for index, word in enumerate(words):
        separator = " " if index or text[0].isspace() else ""
        if not out.has_content() or out.ends_with(" "):
            separator = ""
        if out.has_content() and out.line_length + len(separator) + len(word) > max_line_length:
            out.newline()
            separator = ""
        out.write(separator + word)
    if text[-1].isspace() and out.has_content() and not out.ends_with(" "):
        out.write(" ")


def _write_tag(out: OutputBuffer, token: Token, max_line_length: int) -> None:
    tag = token.text if token.kind is TokenKind.COMMENT else normalize_tag(token.text)
    if out.has_content() and out.line_length > max_line_length:
        out.newline()

    kind = classify_tag(tag)
    if kind is TagKind.CLOSING:
        out.dedent()
        # A closer on an otherwise blank line lines up with its opener.
        out.reindent()
    out.write(tag)
    if kind is TagKind.OPENING:
        out.indent()
    out.newline()


def layout_html(tokens: list[Token], indent_unit: str, max_line_length: int) -> str:
    """Lay out HTML tokens with one nesting level per open element."""
    out = OutputBuffer(indent_unit)
    for token in tokens:
        if token.kind is TokenKind.TEXT:
            _write_text(out, token.text, max_line_length)
        elif token.kind is TokenKind.STRING:
            if token.text.strip():
                out.write(token.text.strip())
                out.newline()
        else:
            _write_tag(out, token, max_line_length)
    return finalize(out.getvalue())


def format_html(content: str, indent: int = 4, max_line_length: int = 80) -> str:
    """Reformat HTML with one indent level per open element.

    Args:
        content: HTML source, typically minified.
        indent: Number of spaces per indent level.
        max_line_length: Soft limit used to wrap text and start tags on new lines.

    Returns:
        str: Formatted HTML ending in exactly one newline.

    Examples:
        format_html("<ul><li>a</li></ul>", indent=2)
        # "<ul>\\n  <li>\\n    a</li>\\n</ul>\\n"
    """
    tokens = tokenize_html(content)
    logger.debug("Tokenized HTML into %d tokens", len(tokens))
    return layout_html(tokens, " " * indent, max_line_length)
