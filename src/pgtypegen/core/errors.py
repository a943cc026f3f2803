"""pgtypegen error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Query input
- 4xxx: Tags / rendering
- 5xxx: Patch / write
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Query input (3xxx)
    QUERY_LOAD_ERROR = 3001

    # Tags / rendering (4xxx)
    INCONSISTENT_INTERFACE = 4001

    # Patch / write (5xxx)
    EDIT_OVERLAP = 5001
    UNSUPPORTED_SOURCE = 5002
    FORMATTER_FAILED = 5003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class TypegenError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(TypegenError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class QueryLoadError(TypegenError):
    """Analysed query input could not be loaded."""

    @classmethod
    def malformed(cls, source: str, reason: str) -> "QueryLoadError":
        return cls(
            code=ErrorCode.QUERY_LOAD_ERROR,
            message=f"Malformed analysed queries in {source}: {reason}",
            details={"source": source, "reason": reason},
        )


class ConsistencyError(TypegenError):
    """A tag group rendered more than one interface body.

    Indicates a defect in identifier/tag assignment, never bad user data.
    """

    @classmethod
    def inconsistent_bodies(cls, tag: str, bodies: list[str]) -> "ConsistencyError":
        return cls(
            code=ErrorCode.INCONSISTENT_INTERFACE,
            message=f"Query group {tag} produced inconsistent interface bodies",
            details={"tag": tag, "bodies": bodies},
        )


class EditOverlapError(TypegenError):
    """Two text edits scheduled for the same file overlap."""

    @classmethod
    def between(
        cls, path: str, first: tuple[int, int], second: tuple[int, int]
    ) -> "EditOverlapError":
        return cls(
            code=ErrorCode.EDIT_OVERLAP,
            message=f"Overlapping edits in {path}: {first} and {second}",
            details={"path": path, "span_a": list(first), "span_b": list(second)},
        )


class UnsupportedSourceError(TypegenError):
    """Source file cannot be parsed for call sites."""

    @classmethod
    def extension(cls, path: str) -> "UnsupportedSourceError":
        return cls(
            code=ErrorCode.UNSUPPORTED_SOURCE,
            message=f"Unsupported source file extension: {path}",
            details={"path": path},
        )


class FormatterError(TypegenError):
    """External formatter command failed."""

    @classmethod
    def failed(cls, path: str, command: list[str], reason: str) -> "FormatterError":
        return cls(
            code=ErrorCode.FORMATTER_FAILED,
            message=f"Formatter failed for {path}: {reason}",
            details={"path": path, "command": command, "reason": reason},
        )


class InternalError(TypegenError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
