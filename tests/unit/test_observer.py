from unittest.mock import MagicMock, patch

from receipt_parser.processor.models import ProcessingStage, ProcessingState, UploadItem
from receipt_parser.processor.observer import CompositeObserver, LoggingObserver, StateBoard


def _state(seq: int, stage: ProcessingStage | None = None) -> ProcessingState:
    item = UploadItem.from_bytes(b"img", "image/png", filename=f"r{seq}.png")
    state = ProcessingState.for_item(seq, item)
    if stage is not None:
        state.advance(stage)
    return state


class TestStateBoard:
    def test_repeated_id_replaces(self) -> None:
        board = StateBoard()
        board.on_state_change([_state(1), _state(2)])
        board.on_state_change([_state(1, ProcessingStage.EXTRACTING), _state(2)])
        assert len(board.states) == 2
        assert board.states[0].stage is ProcessingStage.EXTRACTING

    def test_keeps_insertion_order(self) -> None:
        board = StateBoard()
        board.on_state_change([_state(1), _state(2), _state(3)])
        assert [s.id for s in board.states] == ["1-r1.png", "2-r2.png", "3-r3.png"]

    def test_batch_complete_flag(self) -> None:
        board = StateBoard()
        failed = _state(1)
        failed.fail("boom")
        board.on_batch_complete([failed])
        assert board.is_complete
        assert board.states == [failed]


class TestLoggingObserver:
    def test_logs_each_label_change_once(self) -> None:
        observer = LoggingObserver()
        with patch("receipt_parser.processor.observer.Log") as mock_log:
            observer.on_state_change([_state(1)])
            observer.on_state_change([_state(1)])
            observer.on_state_change([_state(1, ProcessingStage.EXTRACTING)])
        assert mock_log.info.call_count == 2

    def test_logs_failures_as_warning(self) -> None:
        observer = LoggingObserver()
        state = _state(1)
        state.fail("Could not extract any text.")
        with patch("receipt_parser.processor.observer.Log") as mock_log:
            observer.on_state_change([state])
        assert "Could not extract any text." in mock_log.warning.call_args.args[0]


class TestCompositeObserver:
    def test_fans_out_in_order(self) -> None:
        first, second = MagicMock(), MagicMock()
        composite = CompositeObserver([first, second])
        snapshot = [_state(1)]
        composite.on_state_change(snapshot)
        composite.on_batch_complete(snapshot)
        first.on_state_change.assert_called_once_with(snapshot)
        second.on_batch_complete.assert_called_once_with(snapshot)
