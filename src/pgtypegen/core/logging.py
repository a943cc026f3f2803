"""Structured logging for pgtypegen.

Log records only ever go to stderr or to a file: stdout belongs to
machine-readable command output such as ``pgtypegen tags --json``.

Module-level loggers are lazy proxies, so a logger created at import time
follows whatever ``configure_logging`` installed last::

    log = get_logger(__name__)
    log.info("file_updated", path="src/index.ts")

Every event logged during a write batch carries the batch's ``run_id``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from pgtypegen.config.models import LoggingConfig, LogOutputConfig

_RUN_ID_KEY = "run_id"


def get_run_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(_RUN_ID_KEY)


def set_run_id(run_id: str | None = None) -> str:
    """Bind a run id (generated when omitted) to every subsequent event."""
    rid = run_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{_RUN_ID_KEY: rid})
    return rid


def clear_run_id() -> None:
    structlog.contextvars.unbind_contextvars(_RUN_ID_KEY)


def get_log_file_path() -> Path | None:
    """First file the root logger writes to, for "see <file>" hints after a failure."""
    for handler in logging.getLogger().handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
]


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    colors = output.destination == "stderr" and sys.stderr.isatty()
    return structlog.dev.ConsoleRenderer(colors=colors, pad_event_to=0, pad_level=False)


def _handler(output: LogOutputConfig, level: int) -> logging.Handler:
    handler: logging.Handler
    if output.destination == "stderr":
        handler = logging.StreamHandler(sys.stderr)
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setLevel(getattr(logging, output.level) if output.level else level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=_renderer(output), foreign_pre_chain=_PRE_CHAIN)
    )
    return handler


def configure_logging(config: LoggingConfig | None = None, *, level: str | None = None) -> None:
    """Route structlog events through stdlib handlers built from *config*.

    Without *config*, a single console output on stderr is used. *level*
    overrides the configured root level (``--verbose`` uses it).
    Reconfiguring closes the handlers of the previous setup.
    """
    from pgtypegen.config.models import LoggingConfig

    config = config or LoggingConfig()
    root_level = getattr(logging, (level or config.level).upper())

    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for old in root.handlers[:]:
        root.removeHandler(old)
        old.close()
    root.setLevel(root_level)
    for output in config.outputs:
        root.addHandler(_handler(output, root_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Lazy logger; ``name`` is attached to every event as ``logger``."""
    if name:
        return structlog.get_logger(name)  # type: ignore[no-any-return]
    return structlog.get_logger()  # type: ignore[no-any-return]
