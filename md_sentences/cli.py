"""
Reformats a Markdown document so that each sentence starts on its own line.
Reads a file or standard input and writes the result to stdout, or back to
the file with --in-place.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from . import __version__
from .config import ConfigError, build_config
from .constants import STDIN_PATH
from .exceptions import InputError
from .filesystem import read_document, read_stream, write_document
from .formatter import reflow

__all__ = ["cli"]

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(__version__, prog_name="md-sentence-format")
@click.option("-i", "--in-place", is_flag=True, help="Rewrite FILEPATH instead of printing")
@click.option("--check", is_flag=True, help="Exit with status 1 if the input would change")
@click.option("--max-file-size", type=int, help="Maximum file size in bytes")
@click.option("--encoding", help="Text encoding used for files")
@click.option("-v", "--verbose", is_flag=True, help="Log debug details to stderr")
@click.argument(
    "filepath",
    required=False,
    default=STDIN_PATH,
    type=click.Path(dir_okay=False, allow_dash=True),
)
def cli(
    filepath: str,
    in_place: bool = False,
    check: bool = False,
    max_file_size: int | None = None,
    encoding: str | None = None,
    verbose: bool = False,
):
    """
    Put each sentence of a Markdown document on its own line.

    Code blocks, tables, blockquotes and rules are left untouched. Reads
    standard input when FILEPATH is omitted or "-".

    Args:
        filepath: Markdown file to format, or "-" for standard input.
        in_place: Write the result back to `filepath`.
        check: Report whether formatting would change the input, without writing.
        max_file_size: Override for the maximum file size in bytes.
        encoding: Override for the file encoding.
        verbose: Enable debug logging on stderr.

    Returns:
        None.

    Raises:
        click.UsageError: If incompatible options are combined.
        click.BadParameter: If configuration values are invalid.
        click.ClickException: If the input cannot be read or the file cannot
            be rewritten.

    Examples:
        md-sentence-format README.md --in-place
        cat notes.md | md-sentence-format
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if in_place and check:
        raise click.UsageError("--in-place and --check cannot be used together")

    from_stdin = filepath == STDIN_PATH
    if in_place and from_stdin:
        raise click.UsageError("--in-place requires a file path")

    path = None if from_stdin else Path(filepath).expanduser()
    search_path = Path.cwd() if path is None else path.parent
    try:
        config = build_config(search_path, max_file_size=max_file_size, encoding=encoding)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    initial_stat = None
    try:
        if path is None:
            document = read_stream(click.get_text_stream("stdin"))
        else:
            document, initial_stat = read_document(path, config.max_file_size, config.encoding)
    except InputError as error:
        raise click.ClickException(str(error)) from error

    formatted = reflow(document)
    source = "stdin" if path is None else str(path)

    if check:
        if formatted != document:
            click.echo(f"would reformat {source}", err=True)
            sys.exit(1)
        logger.debug("%s is already formatted", source)
        return

    if in_place:
        if formatted == document:
            logger.debug("%s is already formatted", source)
            return
        try:
            write_document(path, formatted, initial_stat, config.encoding)
        except InputError as error:
            raise click.ClickException(str(error)) from error
        return

    click.echo(formatted, nl=False)


if __name__ == "__main__":
    cli()
