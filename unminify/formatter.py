"""File type detection and dispatch to the language engines."""

from __future__ import annotations

import logging
from pathlib import Path

from .constants import DEFAULT_INDENT, DEFAULT_LINE_LENGTH, SUPPORTED_EXTENSIONS
from .css import format_css
from .exceptions import MissingExtensionError, UnsupportedExtensionError, UnsupportedFileTypeError
from .html import format_html
from .javascript import format_js_ts
from .models import FileType

logger = logging.getLogger(__name__)

_ENGINES = {
    FileType.HTML: format_html,
    FileType.CSS: format_css,
    FileType.JS: format_js_ts,
    FileType.TS: format_js_ts,
}


def detect_file_type(path: Path | str) -> FileType:
    """Infer the file type from a path's extension.

    The extension is compared case-insensitively.

    Args:
        path: Input path.

    Returns:
        FileType: Detected file type.

    Raises:
        MissingExtensionError: If the path has no extension.
        UnsupportedExtensionError: If the extension is not html, css, js, or ts.

    Examples:
        detect_file_type("bundle.min.JS")  # FileType.JS
    """
    suffix = Path(path).suffix
    if not suffix or suffix == ".":
        raise MissingExtensionError(path)

    extension = suffix[1:].lower()
    try:
        file_type = SUPPORTED_EXTENSIONS[extension]
    except KeyError as error:
        raise UnsupportedExtensionError(path, extension) from error

    logger.debug("Detected %s as %s", path, file_type.value)
    return file_type


def prepare_content(content: str) -> str:
    """Drop carriage returns and surrounding whitespace.

    Examples:
        prepare_content("  a{}\\r\\n")  # "a{}"
    """
    return content.replace("\r", "").strip()


def format_code(
    content: str,
    file_type: FileType | str,
    indent: int = DEFAULT_INDENT,
    line_length: int = DEFAULT_LINE_LENGTH,
) -> str:
    """Format source text with the engine for `file_type`.

    Args:
        content: Source text. Carriage returns and surrounding whitespace are
            removed before formatting.
        file_type: One of ``"html"``, ``"css"``, ``"js"``, ``"ts"`` or the
            matching `FileType` member.
        indent: Number of spaces per indent level.
        line_length: Soft maximum line length.

    Returns:
        str: Formatted text ending in exactly one newline.

    Raises:
        UnsupportedFileTypeError: If no engine handles `file_type`.

    Examples:
        format_code("a{color:red}", "css", indent=2)
        # "a {\\n  color: red;\\n}\\n"
    """
    try:
        engine = _ENGINES[FileType(file_type)]
    except ValueError as error:
        raise UnsupportedFileTypeError(str(file_type)) from error

    return engine(prepare_content(content), indent, line_length)
