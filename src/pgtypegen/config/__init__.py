"""Config module exports."""

from pgtypegen.config.loader import load_config
from pgtypegen.config.models import (
    FormatterConfig,
    LoggingConfig,
    TypegenConfig,
    WriteConfig,
)

__all__ = [
    "load_config",
    "TypegenConfig",
    "LoggingConfig",
    "WriteConfig",
    "FormatterConfig",
]
