"""Data models for unminify."""

from dataclasses import dataclass, field
from enum import Enum, auto


class FileType(str, Enum):
    """Source languages understood by the formatter.

    Attributes:
        HTML: Hypertext markup.
        CSS: Cascading style sheets.
        JS: JavaScript.
        TS: TypeScript, laid out with the JavaScript engine.
    """

    HTML = "html"
    CSS = "css"
    JS = "js"
    TS = "ts"


class TokenKind(Enum):
    """Kinds of tokens produced by the language scanners.

    Attributes:
        TEXT: Run of ordinary characters.
        WHITESPACE: Run of whitespace, already collapsed to one space.
        TAG: Complete HTML tag, including its angle brackets.
        COMMENT: Comment, copied verbatim.
        STRING: String, template, or regex literal, copied verbatim.
        OPEN: Opening delimiter (``{``, ``(``, ``[``).
        CLOSE: Closing delimiter (``}``, ``)``, ``]``).
        SEMICOLON: Statement or declaration terminator.
        COMMA: Comma separator.
    """

    TEXT = auto()
    WHITESPACE = auto()
    TAG = auto()
    COMMENT = auto()
    STRING = auto()
    OPEN = auto()
    CLOSE = auto()
    SEMICOLON = auto()
    COMMA = auto()


class TagKind(Enum):
    """Layout classes of HTML tags.

    Attributes:
        OPENING: Start tag that nests the content after it.
        CLOSING: End tag.
        VOID: Self-closing tag or void element.
        DECLARATION: Doctype, processing instruction, or comment.
    """

    OPENING = auto()
    CLOSING = auto()
    VOID = auto()
    DECLARATION = auto()


class HtmlMode(Enum):
    """Scanner modes used while tokenizing HTML.

    Attributes:
        TEXT: Between tags.
        TAG: Inside ``<...>``.
        TAG_QUOTE: Inside a quoted attribute value.
        COMMENT: Inside ``<!-- ... -->``.
        RAW_TEXT: Inside ``<script>`` or ``<style>`` content.
    """

    TEXT = auto()
    TAG = auto()
    TAG_QUOTE = auto()
    COMMENT = auto()
    RAW_TEXT = auto()


class CssMode(Enum):
    """Scanner modes used while tokenizing CSS.

    Attributes:
        NORMAL: Selectors, declarations, and braces.
        STRING: Inside a quoted string.
        COMMENT: Inside ``/* ... */``.
    """

    NORMAL = auto()
    STRING = auto()
    COMMENT = auto()


class JsMode(Enum):
    """Scanner modes used while tokenizing JavaScript and TypeScript.

    Attributes:
        CODE: Ordinary source text.
        STRING: Inside a single- or double-quoted string.
        TEMPLATE: Inside a backtick template literal.
        REGEX: Inside a regular expression literal.
        LINE_COMMENT: Inside a ``//`` comment.
        BLOCK_COMMENT: Inside a ``/* ... */`` comment.
    """

    CODE = auto()
    STRING = auto()
    TEMPLATE = auto()
    REGEX = auto()
    LINE_COMMENT = auto()
    BLOCK_COMMENT = auto()


@dataclass(frozen=True)
class Token:
    """A lexical unit produced by a scanner.

    Attributes:
        kind: Token category.
        text: Source text of the token.
    """

    kind: TokenKind
    text: str


@dataclass
class ScanContext:
    """Encapsulate scanner state while walking source text.

    Attributes:
        mode: Current scanner mode.
        quote: Quote character that opened the active literal, if any.
        buffer: Characters of the token being assembled.
        tokens: Tokens emitted so far.
        raw_tag: Name of the raw-text element being scanned (HTML only).
        in_class: Whether a regex scan is inside a ``[...]`` class.
    """

    mode: Enum
    quote: str | None = None
    buffer: list[str] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    raw_tag: str | None = None
    in_class: bool = False

    def emit(self, kind: TokenKind, text: str | None = None) -> None:
        """Append a token built from `text` or from the pending buffer."""
        if text is None:
            text = "".join(self.buffer)
            self.buffer.clear()
        if text:
            self.tokens.append(Token(kind, text))


@dataclass(frozen=True)
class SpacingRules:
    """Language-specific character classes for operator spacing.

    Attributes:
        operators: Characters that may start an operator.
        separators: Punctuation followed by one space.
        quotes: Characters delimiting literals copied through untouched.
        prefixes: Characters that join a following ``=`` into one operator
            without being operators themselves.
    """

    operators: str
    separators: str
    quotes: str
    prefixes: str = ""
