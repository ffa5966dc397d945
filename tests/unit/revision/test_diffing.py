import pytest

from policy_assist.core.types import Equal, Inserted, Provenance
from policy_assist.revision import AnnotatedText, compute_diff

PAIRS = [
    ("", ""),
    ("", "brand new text"),
    ("old text", ""),
    ("The bus comes once a day.", "The bus comes only once a day, at 7am."),
    ("We need bikes", "We urgently need shared bikes near the station"),
    ("identical", "identical"),
]


@pytest.mark.unit
@pytest.mark.parametrize(("baseline", "revised"), PAIRS)
def test_spans_reconstruct_revised_text(baseline, revised):
    spans = compute_diff(baseline, revised)
    assert "".join(span.text for span in spans) == revised


@pytest.mark.unit
def test_only_equal_and_inserted_spans_are_kept():
    spans = compute_diff("remove this word please", "remove word please")
    assert all(isinstance(span, Equal | Inserted) for span in spans)
    assert not any(isinstance(span, Inserted) for span in spans)
    assert "".join(span.text for span in spans) == "remove word please"


@pytest.mark.unit
def test_adjacent_equal_spans_are_merged():
    spans = compute_diff("remove this word please", "remove word please")
    for left, right in zip(spans, spans[1:], strict=False):
        assert not (isinstance(left, Equal) and isinstance(right, Equal))


@pytest.mark.unit
def test_inserted_spans_start_as_machine():
    spans = compute_diff("We need bikes", "We need shared bikes")
    inserted = [span for span in spans if isinstance(span, Inserted)]
    assert inserted
    for span in inserted:
        assert span.provenance is Provenance.MACHINE
        assert span.original_text == span.text


@pytest.mark.unit
def test_identical_text_has_no_insertions():
    spans = compute_diff("same", "same")
    assert spans == (Equal("same"),)


@pytest.mark.unit
class TestAnnotatedText:
    def _buffer(self) -> AnnotatedText:
        return AnnotatedText(
            (Equal("We need "), Inserted.from_machine("foo"), Equal(" now"))
        )

    def test_edit_flips_provenance_to_user(self):
        buffer = self._buffer()
        span = buffer.edit(1, "foobar")
        assert isinstance(span, Inserted)
        assert span.provenance is Provenance.USER
        assert buffer.text == "We need foobar now"

    def test_user_provenance_is_permanent(self):
        buffer = self._buffer()
        buffer.edit(1, "foobar")
        span = buffer.edit(1, "foo")
        assert isinstance(span, Inserted)
        assert span.text == span.original_text
        assert span.provenance is Provenance.USER
        assert buffer.reconcile() == 0
        assert buffer.user_spans() == (span,)
        assert buffer.machine_spans() == ()

    def test_unchanged_insert_stays_machine(self):
        buffer = self._buffer()
        buffer.edit(0, "We really need ")
        assert len(buffer.machine_spans()) == 1
        assert buffer.text == "We really need foo now"

    def test_edit_out_of_range(self):
        with pytest.raises(IndexError):
            self._buffer().edit(5, "x")

    def test_confirm_flattens_and_is_idempotent(self):
        buffer = self._buffer()
        buffer.edit(1, "foobar")
        once = buffer.confirm()
        spans_once = buffer.spans
        twice = buffer.confirm()
        assert once == twice == "We need foobar now"
        assert buffer.spans == spans_once == (Equal("We need foobar now"),)

    def test_confirm_empty_buffer(self):
        buffer = AnnotatedText.plain("")
        assert buffer.confirm() == ""
        assert buffer.spans == ()

    def test_from_revision(self):
        buffer = AnnotatedText.from_revision("a cat", "a black cat")
        assert buffer.text == "a black cat"
        assert buffer.machine_spans()
