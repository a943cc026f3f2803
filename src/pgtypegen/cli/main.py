"""pgtypegen CLI."""

import click

from pgtypegen import __version__
from pgtypegen.cli.tags import tags_command
from pgtypegen.cli.write import write_command
from pgtypegen.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="pgtypegen")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """pgtypegen - typed interfaces for sql`...` queries."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(write_command, name="write")
cli.add_command(tags_command, name="tags")


if __name__ == "__main__":
    cli()
