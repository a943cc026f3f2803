"""Tests for structured errors."""

from __future__ import annotations

import pytest

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


class TestTypegenError:
    def test_str_includes_code_and_name(self) -> None:
        err = UnsupportedSourceError.extension("src/a.py")

        assert str(err) == "[5002] UNSUPPORTED_SOURCE: Unsupported source file extension: src/a.py"

    def test_to_dict(self) -> None:
        err = ConsistencyError.inconsistent_bodies("Row", ["{}", "{ a }"])

        assert err.to_dict() == {
            "code": 4001,
            "error": "INCONSISTENT_INTERFACE",
            "message": "Query group Row produced inconsistent interface bodies",
            "details": {"tag": "Row", "bodies": ["{}", "{ a }"]},
        }

    def test_is_raisable_and_catchable_as_base(self) -> None:
        with pytest.raises(TypegenError):
            raise QueryLoadError.malformed("q.json", "bad")

    def test_frozen(self) -> None:
        err = InternalError.unexpected("boom", tag="X")

        with pytest.raises(AttributeError):
            err.message = "changed"  # type: ignore[misc]


class TestConstructors:
    """Each classmethod picks its own error code."""

    @pytest.mark.parametrize(
        ("err", "code"),
        [
            (ConfigError.parse_error("a.yaml", "bad"), ErrorCode.CONFIG_PARSE_ERROR),
            (ConfigError.invalid_value("write.namespace", "x-y", "bad"), ErrorCode.CONFIG_INVALID_VALUE),
            (ConfigError.file_not_found("a.yaml"), ErrorCode.CONFIG_FILE_NOT_FOUND),
            (QueryLoadError.malformed("q.json", "bad"), ErrorCode.QUERY_LOAD_ERROR),
            (EditOverlapError.between("a.ts", (0, 3), (2, 4)), ErrorCode.EDIT_OVERLAP),
            (FormatterError.failed("a.ts", ["prettier"], "bad"), ErrorCode.FORMATTER_FAILED),
            (InternalError.unexpected("bad"), ErrorCode.INTERNAL_ERROR),
        ],
    )
    def test_codes(self, err: TypegenError, code: ErrorCode) -> None:
        assert err.code == code
        assert err.error_name == code.name

    def test_overlap_details(self) -> None:
        err = EditOverlapError.between("a.ts", (0, 3), (2, 4))

        assert err.details == {"path": "a.ts", "span_a": [0, 3], "span_b": [2, 4]}
