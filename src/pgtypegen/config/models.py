"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PGTYPEGEN__SECTION__KEY)
3. Repo YAML (pgtypegen.yaml)
4. Global YAML (~/.config/pgtypegen/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    PGTYPEGEN__<SECTION>__<KEY>=<VALUE>

Examples:
    PGTYPEGEN__LOGGING__LEVEL=DEBUG
    PGTYPEGEN__WRITE__QUERIES_DIR=generated
    PGTYPEGEN__FORMATTER__TIMEOUT_SEC=60
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr or absolute file path; stdout carries command output
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v == "stderr":
            return v
        if v == "stdout":
            raise ValueError("Logs cannot go to stdout, which carries command output")
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PGTYPEGEN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every scheduled edit.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class WriteConfig(BaseModel):
    """Where and how generated declarations are written.

    Env vars:
        PGTYPEGEN__WRITE__QUERIES_DIR: Companion directory for untyped sources
        PGTYPEGEN__WRITE__NAMESPACE: Name of the generated module/import
        PGTYPEGEN__WRITE__MAX_QUERY_LENGTH: Truncation limit for SQL in comments
    """

    queries_dir: str = Field(
        default="__sql__",
        description="Directory (sibling of the source file) receiving declarations "
        "for sources that are not already TypeScript.",
    )
    namespace: str = Field(
        default="queries",
        description="Name of the generated module block and of the import binding.",
    )
    typed_extensions: list[str] = Field(
        default_factory=lambda: [".ts", ".tsx", ".mts", ".cts"],
        description="Source extensions whose declarations are appended inline.",
    )
    max_query_length: int = Field(
        default=100,
        description="SQL longer than this is truncated in generated comments.",
    )

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        if not v.isidentifier():
            raise ValueError(f"Namespace must be a valid identifier, got {v!r}")
        return v

    @field_validator("max_query_length")
    @classmethod
    def validate_max_query_length(cls, v: int) -> int:
        if v < 10:
            raise ValueError(f"max_query_length must be at least 10, got {v}")
        return v


class FormatterConfig(BaseModel):
    """External formatter applied to every file before it is written.

    Env vars:
        PGTYPEGEN__FORMATTER__TIMEOUT_SEC: Formatter subprocess timeout
    """

    command: list[str] = Field(
        default_factory=lambda: ["prettier", "--stdin-filepath", "{path}"],
        description="Formatter argv; content is piped to stdin, formatted text read "
        "from stdout. '{path}' is replaced by the target file. Empty list disables "
        "formatting.",
    )
    timeout_sec: float = Field(
        default=30.0,
        description="Formatter timeout per file.",
    )


class TypegenConfig(BaseModel):
    """Root configuration for pgtypegen."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    write: WriteConfig = Field(default_factory=WriteConfig)
    formatter: FormatterConfig = Field(default_factory=FormatterConfig)
