"""Shared CLI helpers."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Any

import click

from pgtypegen.config.loader import load_config
from pgtypegen.config.models import TypegenConfig
from pgtypegen.core.errors import QueryLoadError, TypegenError
from pgtypegen.core.logging import configure_logging
from pgtypegen.queries.models import AnalysedQuery


def load_queries(path: Path, root: Path) -> list[AnalysedQuery]:
    """Load analysed queries from a JSON file.

    Accepts either a list of query records or ``{"queries": [...]}``.
    Relative ``file`` entries resolve against *root*.

    Raises:
        QueryLoadError: The file is not valid JSON or a record is malformed.
    """
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise QueryLoadError.malformed(str(path), str(e)) from e

    if isinstance(data, dict):
        data = data.get("queries")
    if not isinstance(data, list):
        raise QueryLoadError.malformed(str(path), "expected a list of queries")

    queries: list[AnalysedQuery] = []
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise QueryLoadError.malformed(str(path), f"query #{i} is not an object")
        try:
            query = AnalysedQuery.from_dict(record)
        except (KeyError, TypeError, ValueError) as e:
            raise QueryLoadError.malformed(str(path), f"query #{i}: {e!s}") from e
        file = Path(query.file)
        if not file.is_absolute():
            query = replace(query, file=str(root / file))
        queries.append(query)
    return queries


def load_cli_config(
    ctx: click.Context,
    root: Path,
    config_path: Path | None,
    **overrides: Any,
) -> TypegenConfig:
    """Load config and apply its logging section (``--verbose`` wins)."""
    try:
        config = load_config(root, config_path=config_path, **overrides)
    except TypegenError as e:
        raise click.ClickException(str(e)) from e

    if ctx.obj and ctx.obj.get("verbose"):
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    return config
