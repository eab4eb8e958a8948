"""
unminify: reformat minified HTML, CSS, JavaScript, and TypeScript.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    unminify -i app.min.js -o app.js --indent 2

Library Usage:
    from unminify import format_code

    formatted = format_code("a{color:red}", "css", indent=2)
"""

from .brackets import split_clustered_brackets
from .css import format_css
from .exceptions import (
    FormatError,
    InputReadError,
    MissingExtensionError,
    OutputWriteError,
    UnsupportedExtensionError,
    UnsupportedFileTypeError,
)
from .formatter import detect_file_type, format_code, prepare_content
from .html import format_html
from .javascript import format_js_ts
from .models import FileType
from .spacing import space_operators

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "format_code",
    "detect_file_type",
    "prepare_content",
    "format_html",
    "format_css",
    "format_js_ts",
    # Shared transforms
    "space_operators",
    "split_clustered_brackets",
    # Data models
    "FileType",
    # Exceptions
    "FormatError",
    "InputReadError",
    "MissingExtensionError",
    "OutputWriteError",
    "UnsupportedExtensionError",
    "UnsupportedFileTypeError",
    # Version
    "__version__",
]
