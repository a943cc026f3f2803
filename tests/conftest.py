"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of pgtypegen modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("pgtypegen"):
        del sys.modules[module_name]

from pgtypegen.queries.models import AnalysedQuery, Field  # noqa: E402

QueryFactory = Callable[..., AnalysedQuery]

FOO = Field(
    name="foo",
    typescript="number",
    not_null=True,
    column="example_test.test_table.foo",
    gdesc="integer",
)
BAR = Field(
    name="bar",
    typescript="string",
    not_null=False,
    column="example_test.test_table.bar",
    gdesc="text",
    comment="Look, ma! A comment from postgres!",
)


@pytest.fixture
def make_query() -> QueryFactory:
    """Build an AnalysedQuery whose call-site text wraps its SQL in sql`...`."""

    def _make(
        sql: str = "select foo, bar from test_table",
        *,
        file: str = "src/index.ts",
        fields: Sequence[Field] = (FOO, BAR),
        tags: Sequence[str] = ("TestTable",),
        text: str | None = None,
        comment: str | None = None,
    ) -> AnalysedQuery:
        return AnalysedQuery(
            file=file,
            sql=sql,
            text=text if text is not None else f"sql`{sql}`",
            fields=tuple(fields),
            suggested_tags=tuple(tags),
            comment=comment,
        )

    return _make
