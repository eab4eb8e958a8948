"""
Reformats a minified HTML, CSS, JavaScript, or TypeScript file into an
indented, human-readable one.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from .config import ConfigError, build_config
from .exceptions import (
    InputReadError,
    MissingExtensionError,
    OutputWriteError,
    UnsupportedExtensionError,
)
from .filesystem import get_max_file_size, read_source, write_output
from .formatter import detect_file_type, format_code

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option()
@click.option(
    "-i",
    "--input",
    "input_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Minified source file (.html, .css, .js or .ts)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Where to write the formatted file",
)
@click.option("-n", "--indent", type=int, help="Spaces per indent level [default: 4]")
@click.option("-l", "--line-length", type=int, help="Soft maximum line length [default: 80]")
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr")
def cli(
    input_path: Path,
    output_path: Path,
    indent: int | None = None,
    line_length: int | None = None,
    verbose: bool = False,
):
    """
    Entry point for reformatting a minified source file.

    Args:
        input_path: File to read. Its extension selects the formatter.
        output_path: File to write the formatted result to.
        indent: Override for the number of spaces per indent level.
        line_length: Override for the soft maximum line length.
        verbose: Enable debug logging.

    Returns:
        None.

    Raises:
        click.BadParameter: If the input extension is missing or unsupported,
            or the configuration values are invalid.
        click.ClickException: If the input cannot be read or the output cannot
            be written.

    Examples:
        unminify -i app.min.js -o app.js --indent 2
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        file_type = detect_file_type(input_path)
    except (MissingExtensionError, UnsupportedExtensionError) as error:
        raise click.BadParameter(str(error), param_hint="'-i' / '--input'") from error

    try:
        config = build_config(
            input_path.resolve().parent, indent=indent, line_length=line_length
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    click.echo(
        f"[INFO] Formatting {input_path} as {file_type.value.upper()} "
        f"(indent: {config.indent}, line length: {config.line_length})"
    )

    try:
        content = read_source(input_path, max_file_size)
    except InputReadError as error:
        raise click.ClickException(str(error)) from error

    formatted = format_code(content, file_type, config.indent, config.line_length)
    logger.debug("Formatted %d characters into %d", len(content), len(formatted))

    try:
        write_output(output_path, formatted)
    except OutputWriteError as error:
        raise click.ClickException(str(error)) from error

    click.echo(f"[SUCCESS] Formatted output written to {output_path}")


if __name__ == "__main__":
    cli()
