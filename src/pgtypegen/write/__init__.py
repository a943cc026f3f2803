"""Output routing and the write pipeline - write_typescript_files."""

from pgtypegen.write.formatting import CommandFormatter, Formatter, identity_formatter
from pgtypegen.write.models import FileDelta, WriteResult
from pgtypegen.write.ops import write_typescript_files
from pgtypegen.write.router import default_get_queries_module

__all__ = [
    "write_typescript_files",
    "default_get_queries_module",
    "Formatter",
    "CommandFormatter",
    "identity_formatter",
    "WriteResult",
    "FileDelta",
]
