"""Tests for tag assignment.

Covers:
- Sharing a tag between identical result shapes
- Collision resolution by alternatives count and suffixing
- Determinism
- The individual pipeline stages
"""

from __future__ import annotations

from pgtypegen.queries.identifier import compute_identifier
from pgtypegen.queries.models import Field
from pgtypegen.queries.tags import (
    Priority,
    _Candidate,
    assign_tags,
    build_tag_map,
    expand_candidates,
    first_per_identifier,
    resolve_collisions,
    sort_by_alternatives,
    sort_by_priority,
)

ID = Field(name="id", typescript="number", not_null=True)
CONTENT = Field(name="content", typescript="string")
TITLE = Field(name="title", typescript="string")


class TestSharedTags:
    """Queries with identical fields share one tag."""

    def test_identical_fields_share_tag(self, make_query) -> None:
        """Different SQL, same result shape -> same tag."""
        a = make_query("select id, content from message", fields=[ID, CONTENT], tags=["Message"])
        b = make_query(
            "select id, content from message where id = 1", fields=[ID, CONTENT], tags=["Message"]
        )

        tagged = assign_tags([a, b])

        assert [t.tag for t in tagged] == ["Message", "Message"]

    def test_identical_fields_in_different_files_share_tag(self, make_query) -> None:
        """Assignment is global across files."""
        a = make_query(file="a.ts", fields=[ID], tags=["Message"])
        b = make_query(file="b.ts", fields=[ID], tags=["Message"])

        tagged = assign_tags([a, b])

        assert tagged[0].tag == tagged[1].tag == "Message"

    def test_result_preserves_input_order(self, make_query) -> None:
        """Tagged queries come back in input order."""
        queries = [
            make_query("q1", fields=[ID], tags=["A"]),
            make_query("q2", fields=[CONTENT], tags=["B"]),
            make_query("q3", fields=[TITLE], tags=["C"]),
        ]

        tagged = assign_tags(queries)

        assert [t.sql for t in tagged] == ["q1", "q2", "q3"]
        assert [t.tag for t in tagged] == ["A", "B", "C"]


class TestCollisions:
    """Different result shapes suggesting the same tag."""

    def test_same_alternatives_first_input_wins(self, make_query) -> None:
        """With equal alternatives, input order decides; the loser is suffixed."""
        a = make_query("select id from message", fields=[ID], tags=["Message"])
        b = make_query("select content from message", fields=[CONTENT], tags=["Message"])

        tagged = assign_tags([a, b])

        assert tagged[0].tag == "Message"
        assert tagged[1].tag == "Message_0"

    def test_fewer_alternatives_claims_name_first(self, make_query) -> None:
        """The query with fewer suggestions keeps the bare name even when listed later."""
        many = make_query(
            "select id, content from message",
            fields=[ID, CONTENT],
            tags=["Message", "Message_id_content"],
        )
        few = make_query("select id from message", fields=[ID], tags=["Message"])

        tagged = assign_tags([many, few])

        assert tagged[1].tag == "Message"
        assert tagged[0].tag == "Message_id_content"

    def test_suffix_is_rank_of_first_claimant(self, make_query) -> None:
        """When every suggestion is taken, the suffix is the winner's rank."""
        big = make_query("select * from message", fields=[ID, CONTENT], tags=["Message", "Thread"])
        thread = make_query("select title from thread", fields=[TITLE], tags=["Thread"])
        small = make_query("select id from message", fields=[ID], tags=["Message"])

        tagged = assign_tags([big, thread, small])

        # sorted by alternatives: thread:Thread(0), small:Message(1), big:Message(2), big:Thread(3)
        assert tagged[1].tag == "Thread"
        assert tagged[2].tag == "Message"
        assert tagged[0].tag == "Message_1"

    def test_two_shapes_get_distinct_tags(self, make_query) -> None:
        """Two identifiers never end up with the same tag."""
        queries = [
            make_query(f"q{i}", fields=[Field(name=f"c{i}", typescript="string")], tags=["Row"])
            for i in range(2)
        ]

        tagged = assign_tags(queries)

        assert [t.tag for t in tagged] == ["Row", "Row_0"]

    def test_single_suggestion_suffix_repeats_for_third_shape(self, make_query) -> None:
        """The suffix names the first claimant, so later losers share it."""
        queries = [
            make_query(f"q{i}", fields=[Field(name=f"c{i}", typescript="string")], tags=["Row"])
            for i in range(3)
        ]

        tagged = assign_tags(queries)

        assert [t.tag for t in tagged] == ["Row", "Row_0", "Row_0"]


class TestDeterminism:
    """Repeated runs over the same input agree."""

    def test_repeated_runs_yield_same_map(self, make_query) -> None:
        queries = [
            make_query("a", fields=[ID, CONTENT], tags=["Message", "Message_id_content"]),
            make_query("b", fields=[ID], tags=["Message"]),
            make_query("c", fields=[TITLE], tags=["Message", "Thread"]),
        ]

        first = build_tag_map(queries)
        for _ in range(5):
            assert build_tag_map(queries) == first


class TestPipelineStages:
    """The pure functions behind build_tag_map."""

    def test_expand_candidates_one_per_suggestion(self, make_query) -> None:
        q = make_query(fields=[ID], tags=["A", "B", "C"])

        candidates = expand_candidates([("id-1", q)])

        assert [c.tag for c in candidates] == ["A", "B", "C"]
        assert {c.alternatives for c in candidates} == {3}
        assert {c.identifier for c in candidates} == {"id-1"}

    def test_sort_by_alternatives_is_stable(self) -> None:
        candidates = [
            _Candidate("x", "A", 2),
            _Candidate("y", "B", 1),
            _Candidate("x", "C", 2),
        ]

        ordered = sort_by_alternatives(candidates)

        assert [c.tag for c in ordered] == ["B", "A", "C"]

    def test_resolve_collisions_marks_exact_and_collision(self) -> None:
        candidates = (
            _Candidate("x", "A", 1),
            _Candidate("y", "A", 1),
            _Candidate("x", "A", 2),
        )

        resolved = resolve_collisions(candidates)

        assert [(c.tag, c.priority) for c in resolved] == [
            ("A", Priority.EXACT),
            ("A_0", Priority.COLLISION),
            ("A", Priority.EXACT),
        ]

    def test_sort_by_priority_puts_exact_first(self) -> None:
        candidates = [
            _Candidate("y", "A_0", 1, Priority.COLLISION),
            _Candidate("y", "B", 2),
        ]

        assert [c.tag for c in sort_by_priority(candidates)] == ["B", "A_0"]

    def test_first_per_identifier_keeps_first(self) -> None:
        candidates = [
            _Candidate("x", "A", 1),
            _Candidate("x", "B", 1),
            _Candidate("y", "C", 1),
        ]

        assert first_per_identifier(candidates) == {"x": "A", "y": "C"}

    def test_build_tag_map_keys_are_identifiers(self, make_query) -> None:
        q = make_query(fields=[ID], tags=["A"])

        assert build_tag_map([q]) == {compute_identifier(q): "A"}
