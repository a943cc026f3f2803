"""Result-shape identifiers.

Two queries may share one interface iff their identifiers are equal. The
identifier serializes every field attribute, in order, so anything that
changes the rendered interface body also changes the identifier.
"""

from __future__ import annotations

import json

from pgtypegen.queries.models import AnalysedQuery

Identifier = str


def compute_identifier(query: AnalysedQuery) -> Identifier:
    return json.dumps([f.to_dict() for f in query.fields], separators=(",", ":"))
