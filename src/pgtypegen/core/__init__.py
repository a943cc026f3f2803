"""Core module exports."""

from pgtypegen.core.errors import (
    ConfigError,
    ConsistencyError,
    EditOverlapError,
    ErrorCode,
    FormatterError,
    InternalError,
    QueryLoadError,
    TypegenError,
    UnsupportedSourceError,
)
from pgtypegen.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)

__all__ = [
    # Errors
    "ErrorCode",
    "TypegenError",
    "ConfigError",
    "ConsistencyError",
    "EditOverlapError",
    "FormatterError",
    "InternalError",
    "QueryLoadError",
    "UnsupportedSourceError",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
]
