"""pgtypegen tags command - preview tag assignment without writing."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from pgtypegen.cli.utils import load_cli_config, load_queries
from pgtypegen.core.errors import TypegenError
from pgtypegen.core.text import simplify_whitespace, truncate
from pgtypegen.queries.tags import assign_tags


@click.command()
@click.argument("queries_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Project root; relative query paths resolve against it.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def tags_command(ctx: click.Context, queries_json: Path, root: Path, as_json: bool) -> None:
    """Show the interface name each query would receive.

    QUERIES_JSON holds the analysed queries. No file is modified.
    """
    root = root.resolve()
    load_cli_config(ctx, root, None)
    try:
        tagged = assign_tags(load_queries(queries_json, root))
    except TypegenError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(json.dumps([{"file": q.file, "sql": q.sql, "tag": q.tag} for q in tagged], indent=2))
        return

    table = Table("Tag", "File", "Query")
    for q in tagged:
        table.add_row(q.tag, q.file, truncate(simplify_whitespace(q.sql), 60))
    Console().print(table)
