"""Filesystem helpers for unminify."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path

from .constants import DEFAULT_MAX_FILE_SIZE
from .exceptions import InputReadError, OutputWriteError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE_ENV_VAR = "UNMINIFY_MAX_FILE_SIZE"


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed input size.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ValueError: If the environment value is not a positive integer.

    Examples:
        os.environ["UNMINIFY_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ValueError(error_message) from error

    if max_size <= 0:
        error_message = f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}."
        raise ValueError(error_message)

    return max_size


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for an input file.

    Raises:
        InputReadError: If the path is inaccessible or not a regular file.
    """
    try:
        stat_result = os.stat(filepath)
    except OSError as error:
        raise InputReadError(filepath, error.strerror or str(error)) from error

    if not stat.S_ISREG(stat_result.st_mode):
        raise InputReadError(filepath, "not a regular file")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against inputs that exceed the configured maximum size.

    Raises:
        InputReadError: If `stat_result.st_size` exceeds `max_size`.

    Examples:
        enforce_file_size(os.stat("app.min.js"), 102400, Path("app.min.js"))
    """
    if stat_result.st_size > max_size:
        raise InputReadError(
            filepath, f"file exceeds the maximum allowed size of {max_size} bytes"
        )


def read_source(filepath: Path, max_size: int = DEFAULT_MAX_FILE_SIZE) -> str:
    """Read an input file as UTF-8 after checking its type and size.

    Args:
        filepath: Path to the input file.
        max_size: Maximum allowed size in bytes.

    Returns:
        str: The file content.

    Raises:
        InputReadError: If the file is missing, too large, unreadable, or not
            valid UTF-8.

    Examples:
        content = read_source(Path("site.min.css"))
    """
    stat_result = collect_file_stat(filepath)
    enforce_file_size(stat_result, max_size, filepath)
    try:
        with open(filepath, "r", encoding="UTF-8") as handle:
            content = handle.read()
    except UnicodeDecodeError as error:
        raise InputReadError(filepath, "file is not valid UTF-8") from error
    except OSError as error:
        raise InputReadError(filepath, error.strerror or str(error)) from error

    logger.debug("Read %d characters from %s", len(content), filepath)
    return content


def write_output(filepath: Path, text: str):
    """Write formatted text to `filepath`, replacing it atomically.

    The text is written to a temporary file in the destination directory and
    moved into place, so a failed run never leaves a truncated output. An
    existing destination keeps its permission bits; a new one gets the
    default bits for the current umask.

    Args:
        filepath: Destination path.
        text: Formatted text to write.

    Raises:
        OutputWriteError: If the destination directory is missing or the file
            cannot be written.

    Examples:
        write_output(Path("site.css"), formatted)
    """
    try:
        permissions = stat.S_IMODE(os.stat(filepath).st_mode)
    except OSError:
        umask = os.umask(0)
        os.umask(umask)
        permissions = 0o666 & ~umask

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(text)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(temp_path, permissions)
        os.replace(temp_path, filepath)
    except OSError as error:
        raise OutputWriteError(filepath, error.strerror or str(error)) from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass

    logger.debug("Wrote %d characters to %s", len(text), filepath)
