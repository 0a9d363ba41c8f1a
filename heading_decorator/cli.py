"""
Prints the headings of a Markdown file decorated with computed numbering.
The file itself is never modified.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .config import ConfigError, build_config
from .counter_styles import ABBREVIATIONS, COUNTER_STYLES
from .enablement import is_decoration_enabled
from .exceptions import DocumentReadError
from .filesystem import get_max_file_size, normalize_filepath, read_document, relative_document_path
from .models import DecoratorMode, Position
from .render import decorate_text

__all__ = ["cli"]

logger = logging.getLogger(__name__)

STYLE_CHOICES = sorted(COUNTER_STYLES) + sorted(ABBREVIATIONS) + ["customIdent", "string"]


@click.command()
@click.version_option()
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in DecoratorMode]),
    help="Decorator mode",
)
@click.option("--style", type=click.Choice(STYLE_CHOICES), help="Ordered numbering style")
@click.option("--delimiter", help="Ordered delimiter between numbers")
@click.option("--max-level", type=int, help="Deepest heading level that gets its own number")
@click.option(
    "--position",
    type=click.Choice([position.value for position in Position]),
    help="Where to place labels on heading lines",
)
@click.option(
    "--ignore-single/--no-ignore-single",
    default=None,
    help="Leave a lone top heading level unnumbered",
)
@click.option(
    "--based-on-existing/--no-based-on-existing",
    default=None,
    help="Ignore top levels based on the existing headings",
)
@click.option("--full", is_flag=True, help="Print the whole document, not just headings")
@click.option("--force", is_flag=True, help="Ignore front-matter switches and blocklists")
@click.option("-v", "--verbose", is_flag=True, help="Log debugging details to stderr")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False))
def cli(
    filepath: str,
    mode: str | None = None,
    style: str | None = None,
    delimiter: str | None = None,
    max_level: int | None = None,
    position: str | None = None,
    ignore_single: bool | None = None,
    based_on_existing: bool | None = None,
    full: bool = False,
    force: bool = False,
    verbose: bool = False,
):
    """
    Entry point for printing decorated Markdown headings.

    Args:
        filepath: Path to the Markdown file to decorate.
        mode: Override for the decorator mode.
        style: Override for the ordered numbering style.
        delimiter: Override for the ordered delimiter.
        max_level: Override for the deepest numbered heading level.
        position: Override for the label position.
        ignore_single: Override for the single-top-level heuristic.
        based_on_existing: Override for the existing-structure heuristic.
        full: Print the whole document instead of only heading lines.
        force: Decorate even when front matter or blocklists disable it.
        verbose: Emit debug logging on stderr.

    Raises:
        click.BadParameter: If the path or configuration is invalid.
        click.ClickException: If the file cannot be read or is too large.

    Examples:
        heading-decorator README.md --mode splice --position before-inside
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    base_dir = Path.cwd().resolve()
    try:
        path = normalize_filepath(filepath, base_dir)
    except ValueError as error:
        raise click.BadParameter(str(error)) from error

    try:
        config = build_config(
            path.parent,
            decorator_mode=mode,
            ordered_style_type=style,
            ordered_delimiter=delimiter,
            max_rec_level=max_level,
            position=position,
            ordered_ignore_single=ignore_single,
            ordered_based_on_existing=based_on_existing,
        )
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        text = read_document(path, max_file_size)
    except DocumentReadError as error:
        raise click.ClickException(str(error)) from error

    enabled = force or is_decoration_enabled(
        relative_document_path(path, base_dir),
        text,
        config.metadata_keyword,
        config.folder_blocklist,
        config.file_regex_blocklist,
    )
    if not enabled:
        click.echo(f"Decoration is disabled for {path.name}", err=True)
        if full:
            click.echo(text, nl=False)
        return

    logger.debug("Decorating %s in %s mode", path, config.settings.mode.value)
    click.echo(decorate_text(text, config.settings, headings_only=not full), nl=False)


if __name__ == "__main__":
    cli()
