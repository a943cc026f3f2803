"""TypeScript declaration rendering."""

from pgtypegen.render.interfaces import (
    check_consistency,
    queries_module,
    query_interfaces,
    render_query_interface,
)

__all__ = [
    "check_consistency",
    "queries_module",
    "query_interfaces",
    "render_query_interface",
]
