import pytest

from policy_assist.core.types import (
    CanonicalRecord,
    Equal,
    Failure,
    Inserted,
    Provenance,
    Success,
)

pytestmark = pytest.mark.unit


class TestCanonicalRecord:
    def test_all_fields_optional(self):
        record = CanonicalRecord()
        assert record.present_fields() == ()
        assert record.to_dict() == {}

    def test_rejects_non_string_values(self):
        with pytest.raises(TypeError, match="problem"):
            CanonicalRecord(problem=3)  # type: ignore[arg-type]

    def test_from_mapping_ignores_unknown_and_non_strings(self):
        record = CanonicalRecord.from_mapping(
            {"title": "T", "problem": 1, "extra": "x", "summary": "S"}
        )
        assert record == CanonicalRecord(title="T", summary="S")

    def test_to_dict_with_none(self):
        data = CanonicalRecord(title="T").to_dict(include_none=True)
        assert data == {
            "title": "T",
            "problem": None,
            "method": None,
            "effect": None,
            "summary": None,
        }

    def test_merged_over_keeps_defaults_for_absent_fields(self):
        revised = CanonicalRecord(problem="new")
        defaults = CanonicalRecord(problem="old", method="kept")
        assert revised.merged_over(defaults) == CanonicalRecord(
            problem="new", method="kept"
        )

    def test_empty_string_counts_as_present(self):
        merged = CanonicalRecord(method="").merged_over(CanonicalRecord(method="x"))
        assert merged.method == ""

    def test_frozen(self):
        with pytest.raises(AttributeError):
            CanonicalRecord().title = "x"  # type: ignore[misc]


class TestSpans:
    def test_machine_insert(self):
        span = Inserted.from_machine("abc")
        assert span.is_machine
        assert span.original_text == "abc"

    def test_user_insert(self):
        span = Inserted("abc", Provenance.USER, "ab")
        assert not span.is_machine

    def test_spans_compare_by_value(self):
        assert Equal("a") == Equal("a")
        assert Inserted.from_machine("a") != Inserted("a", Provenance.USER, "a")


def test_result_variants():
    ok = Success(1)
    err = Failure(ValueError("boom"))
    assert ok.value == 1
    assert isinstance(err.error, ValueError)
