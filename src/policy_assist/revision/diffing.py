"""Diff a baseline against a machine revision and track span provenance.

`compute_diff` keeps only what the revised text contains: unchanged spans and
inserted spans. Deleted baseline text is dropped because the buffer renders the
revision, not a two-sided comparison. `AnnotatedText` is the live buffer the
user keeps editing; an inserted span becomes user-owned the moment its content
stops matching what the machine inserted, and never goes back.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
import logging

from diff_match_patch import diff_match_patch

from policy_assist.core.types import DiffSpan, Equal, Inserted, Provenance

log = logging.getLogger(__name__)

DIFF_DELETE = -1
DIFF_EQUAL = 0
DIFF_INSERT = 1


def compute_diff(baseline: str, revised: str) -> tuple[DiffSpan, ...]:
    """Return the spans of ``revised`` annotated against ``baseline``.

    Uses diff-match-patch with semantic cleanup so single-character
    fragments merge into readable spans. Concatenating the span texts
    reproduces ``revised`` exactly.
    """
    dmp = diff_match_patch()
    diffs = dmp.diff_main(baseline, revised)
    dmp.diff_cleanupSemantic(diffs)

    spans: list[DiffSpan] = []
    for op, text in diffs:
        if not text or op == DIFF_DELETE:
            continue
        if op == DIFF_EQUAL:
            span: DiffSpan = Equal(text)
        else:
            span = Inserted.from_machine(text)
        spans.append(span)
    return tuple(_coalesce(spans))


def _coalesce(spans: Iterable[DiffSpan]) -> Iterator[DiffSpan]:
    # Dropping a delete can leave two equal spans side by side
    pending: DiffSpan | None = None
    for span in spans:
        if isinstance(pending, Equal) and isinstance(span, Equal):
            pending = Equal(pending.text + span.text)
            continue
        if pending is not None:
            yield pending
        pending = span
    if pending is not None:
        yield pending


class AnnotatedText:
    """Editable sequence of diff spans.

    Spans are immutable; edits replace the span at an index and then
    reconcile provenance across the buffer.
    """

    def __init__(self, spans: Iterable[DiffSpan] = ()) -> None:
        self._spans: tuple[DiffSpan, ...] = tuple(spans)

    @classmethod
    def plain(cls, text: str) -> AnnotatedText:
        return cls((Equal(text),) if text else ())

    @classmethod
    def from_revision(cls, baseline: str, revised: str) -> AnnotatedText:
        return cls(compute_diff(baseline, revised))

    @property
    def spans(self) -> tuple[DiffSpan, ...]:
        return self._spans

    @property
    def text(self) -> str:
        return "".join(span.text for span in self._spans)

    def __len__(self) -> int:
        return len(self._spans)

    def __repr__(self) -> str:
        return f"AnnotatedText({self._spans!r})"

    def machine_spans(self) -> tuple[Inserted, ...]:
        return tuple(
            span
            for span in self._spans
            if isinstance(span, Inserted) and span.provenance is Provenance.MACHINE
        )

    def user_spans(self) -> tuple[Inserted, ...]:
        return tuple(
            span
            for span in self._spans
            if isinstance(span, Inserted) and span.provenance is Provenance.USER
        )

    def edit(self, index: int, new_text: str) -> DiffSpan:
        """Replace the live text of the span at ``index`` and reconcile.

        Returns the span now stored at ``index``.

        Raises:
            IndexError: If ``index`` does not address a span.
        """
        span = self._spans[index]
        match span:
            case Equal():
                updated: DiffSpan = Equal(new_text)
            case Inserted():
                updated = Inserted(
                    text=new_text,
                    provenance=span.provenance,
                    original_text=span.original_text,
                )
        spans = list(self._spans)
        spans[index] = updated
        self._spans = tuple(spans)
        self.reconcile()
        return self._spans[index]

    def reconcile(self) -> int:
        """Flip diverged machine spans to user provenance.

        Returns the number of spans flipped by this call.
        """
        flipped = 0
        spans: list[DiffSpan] = []
        for span in self._spans:
            if (
                isinstance(span, Inserted)
                and span.provenance is Provenance.MACHINE
                and span.text != span.original_text
            ):
                span = Inserted(
                    text=span.text,
                    provenance=Provenance.USER,
                    original_text=span.original_text,
                )
                flipped += 1
            spans.append(span)
        if flipped:
            log.debug("Reclassified %d machine span(s) as user edits", flipped)
            self._spans = tuple(spans)
        return flipped

    def confirm(self) -> str:
        """Flatten every span to plain text, discarding provenance.

        Idempotent: confirming an already flat buffer changes nothing.
        """
        text = self.text
        self._spans = (Equal(text),) if text else ()
        return text
