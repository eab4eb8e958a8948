"""Constants used across the unminify package."""

from __future__ import annotations

from .config import FormatConfig
from .models import FileType, SpacingRules

DEFAULT_CONFIG = FormatConfig()

DEFAULT_INDENT = DEFAULT_CONFIG.indent
DEFAULT_LINE_LENGTH = DEFAULT_CONFIG.line_length
DEFAULT_MAX_FILE_SIZE = DEFAULT_CONFIG.max_file_size

SUPPORTED_EXTENSIONS = {
    "html": FileType.HTML,
    "css": FileType.CSS,
    "js": FileType.JS,
    "ts": FileType.TS,
}

# Delimiters
OPENERS = "([{"
CLOSERS = ")]}"

# Bracket splitting uses its own width, independent of the configured line length.
BRACKET_SPLIT_WIDTH = 80
BRACKET_RUN_LIMIT = 3

# Operator spacing
OPERATOR_CHARS = "=+-*/%><!&|^~?"
DOUBLING_OPERATORS = "&|+-*<>?"
UNARY_KEYWORDS = frozenset(
    {"return", "typeof", "case", "throw", "in", "of", "void", "delete", "yield", "await", "new"}
)
CONTROL_KEYWORDS = frozenset({"if", "for", "while", "switch", "catch", "with"})

JS_RULES = SpacingRules(operators=OPERATOR_CHARS, separators=",;", quotes="\"'`")
CSS_RULES = SpacingRules(operators="=>+~", separators=",", quotes="\"'", prefixes="^$*|")
HTML_RULES = SpacingRules(operators="=", separators=",", quotes="")

# HTML
VOID_ELEMENTS = frozenset(
    {
        "meta",
        "link",
        "img",
        "br",
        "hr",
        "area",
        "base",
        "col",
        "embed",
        "input",
        "param",
        "source",
        "track",
        "wbr",
    }
)
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})

# JavaScript
BLOCK_CONTINUATION_WORDS = frozenset({"else", "catch", "finally", "while"})
CLOSER_CONTINUATIONS = ",;})"
