"""pgtypegen - typed interfaces for sql`...` queries."""

from pgtypegen.queries.models import AnalysedQuery, Field
from pgtypegen.write.ops import write_typescript_files

__version__ = "0.1.0"

__all__ = ["AnalysedQuery", "Field", "write_typescript_files", "__version__"]
