import pytest

from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.processor.exceptions import InvalidTransitionError
from receipt_parser.processor.models import (
    PersistenceOutcome,
    ProcessingStage,
    ProcessingState,
    UploadItem,
)

_FORWARD = [
    ProcessingStage.EXTRACTING,
    ProcessingStage.STRUCTURING,
    ProcessingStage.EXTRACTED,
    ProcessingStage.PERSISTING,
]


def _make_state() -> ProcessingState:
    item = UploadItem.from_bytes(b"img", "image/png", filename="a.png")
    return ProcessingState.for_item(1, item)


class TestInitialState:
    def test_starts_pending(self) -> None:
        state = _make_state()
        assert state.id == "1-a.png"
        assert state.stage is ProcessingStage.PENDING
        assert state.persistence_outcome is PersistenceOutcome.PENDING
        assert state.extracted_record is None
        assert not state.is_terminal

    def test_same_file_gets_distinct_ids(self) -> None:
        item = UploadItem.from_bytes(b"img", "image/png", filename="a.png")
        assert ProcessingState.for_item(1, item).id != ProcessingState.for_item(2, item).id


class TestAdvance:
    def test_walks_full_sequence_to_success(self) -> None:
        state = _make_state()
        for stage in _FORWARD:
            state.advance(stage)
            assert state.persistence_outcome is PersistenceOutcome.PENDING
        state.advance(ProcessingStage.SUCCESS)
        assert state.status_label == "Saved successfully!"
        assert state.persistence_outcome is PersistenceOutcome.SUCCESS
        assert state.is_terminal

    def test_sets_status_labels(self) -> None:
        state = _make_state()
        state.advance(ProcessingStage.EXTRACTING)
        assert state.status_label == "Processing OCR..."
        state.advance(ProcessingStage.STRUCTURING)
        assert state.status_label == "Structuring data..."
        state.advance(ProcessingStage.EXTRACTED)
        assert state.status_label == "Data extracted"
        state.advance(ProcessingStage.PERSISTING)
        assert state.status_label == "Saving to Notion..."

    def test_rejects_regression(self) -> None:
        state = _make_state()
        state.advance(ProcessingStage.EXTRACTING)
        state.advance(ProcessingStage.STRUCTURING)
        with pytest.raises(InvalidTransitionError):
            state.advance(ProcessingStage.EXTRACTING)

    def test_success_only_from_persisting(self) -> None:
        state = _make_state()
        state.advance(ProcessingStage.EXTRACTING)
        with pytest.raises(InvalidTransitionError):
            state.advance(ProcessingStage.SUCCESS)

    def test_failed_requires_fail(self) -> None:
        with pytest.raises(InvalidTransitionError, match="fail"):
            _make_state().advance(ProcessingStage.FAILED)

    def test_terminal_state_cannot_advance(self) -> None:
        state = _make_state()
        state.fail("boom")
        with pytest.raises(InvalidTransitionError, match="terminal"):
            state.advance(ProcessingStage.EXTRACTING)


class TestFail:
    @pytest.mark.parametrize("steps", range(len(_FORWARD) + 1))
    def test_fail_from_any_non_terminal_stage(self, steps: int) -> None:
        state = _make_state()
        for stage in _FORWARD[:steps]:
            state.advance(stage)
        state.fail("boom")
        assert state.stage is ProcessingStage.FAILED
        assert state.status_label == "Failed"
        assert state.persistence_outcome is PersistenceOutcome.FAILED
        assert state.error_message == "boom"

    def test_keeps_extracted_record(self, record: ExtractedRecord) -> None:
        state = _make_state()
        for stage in _FORWARD:
            state.advance(stage)
        state.extracted_record = record
        state.fail("[400] bad database")
        assert state.extracted_record == record

    def test_cannot_fail_twice(self) -> None:
        state = _make_state()
        state.fail("first")
        with pytest.raises(InvalidTransitionError):
            state.fail("second")


class TestSnapshot:
    def test_snapshot_is_detached(self) -> None:
        state = _make_state()
        copy = state.snapshot()
        state.advance(ProcessingStage.EXTRACTING)
        assert copy.stage is ProcessingStage.PENDING
        assert copy == _make_state()
