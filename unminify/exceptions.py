"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class FormatError(ValueError):
    """Base class for errors that abort a formatting run."""


class MissingExtensionError(FormatError):
    """Raised when the input path has no extension to infer a file type from.

    Args:
        path: Input path without an extension.
    """

    def __init__(self, path: Path | str):
        self.path = path
        super().__init__(f"{path} has no file extension; cannot detect the file type")


class UnsupportedExtensionError(FormatError):
    """Raised when the input path has an extension that is not supported.

    Args:
        path: Input path.
        extension: Extension found on the path, without the leading dot.
    """

    def __init__(self, path: Path | str, extension: str):
        self.path = path
        self.extension = extension
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return (
            f"{self.path}: unsupported file type '{self.extension}' "
            "(supported: html, css, js, ts)"
        )


class UnsupportedFileTypeError(FormatError):
    """Raised when `format_code` is asked for a file type it has no engine for.

    Args:
        file_type: The rejected file type tag.
    """

    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type} (supported: html, css, js, ts)")


class InputReadError(FormatError):
    """Raised when the input file cannot be read or decoded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read input file {path}: {reason}")


class OutputWriteError(FormatError):
    """Raised when the formatted output cannot be written."""

    def __init__(self, path: Path | str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write output file {path}: {reason}")
