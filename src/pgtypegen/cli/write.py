"""pgtypegen write command - tag queries and patch source files."""

from pathlib import Path
from typing import Any

import click

from pgtypegen.cli.utils import load_cli_config, load_queries
from pgtypegen.core.errors import TypegenError
from pgtypegen.core.logging import get_log_file_path
from pgtypegen.core.progress import spinner, status
from pgtypegen.core.text import compress_path, pluralize
from pgtypegen.write.ops import write_typescript_files


def _display_path(path: str, root: Path) -> str:
    p = Path(path)
    shown = str(p.relative_to(root)) if p.is_relative_to(root) else path
    return compress_path(shown)


@click.command()
@click.argument("queries_json", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Project root; relative query paths resolve against it.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: <root>/pgtypegen.yaml).",
)
@click.option("--queries-dir", default=None, help="Companion directory for untyped sources.")
@click.option("--no-format", is_flag=True, help="Skip the external formatter.")
@click.pass_context
def write_command(
    ctx: click.Context,
    queries_json: Path,
    root: Path,
    config_path: Path | None,
    queries_dir: str | None,
    no_format: bool,
) -> None:
    """Write query interfaces and tag sql call sites.

    QUERIES_JSON holds the analysed queries (fields, suggested tags and
    call-site text for every query found in the project).
    """
    root = root.resolve()
    overrides: dict[str, Any] = {}
    if queries_dir:
        overrides["write"] = {"queries_dir": queries_dir}
    if no_format:
        overrides["formatter"] = {"command": []}
    config = load_cli_config(ctx, root, config_path, **overrides)

    try:
        queries = load_queries(queries_json, root)
        status(f"Loaded {pluralize(len(queries), 'query', 'queries')}")
        with spinner("Writing typed queries"):
            result = write_typescript_files(queries, config=config)
    except TypegenError as e:
        if log_path := get_log_file_path():
            status(f"See {log_path} for details", style="info")
        raise click.ClickException(str(e)) from e

    for delta in result.files:
        if delta.action != "unchanged":
            status(f"{delta.action} {_display_path(delta.path, root)}", indent=2)
    status(
        f"{pluralize(result.tags, 'interface')}, {pluralize(result.files_changed, 'file')} changed",
        style="success",
    )
