"""State publishing boundary between the orchestrator and any renderer."""

from abc import ABC, abstractmethod

from receipt_parser.logging.logger import Log
from receipt_parser.processor.models import PersistenceOutcome, ProcessingState


class StateObserver(ABC):
    """Receives the full list of state snapshots after every mutation."""

    @abstractmethod
    def on_state_change(self, snapshot: list[ProcessingState]) -> None:
        """Render or record the latest snapshot. Must not mutate orchestrator state."""

    def on_batch_complete(self, snapshot: list[ProcessingState]) -> None:
        """Called once after the last item reached a terminal state."""


class StateBoard(StateObserver):
    """Keeps the latest state per id; a repeated id replaces, never appends."""

    def __init__(self) -> None:
        self._states: dict[str, ProcessingState] = {}
        self.is_complete = False

    @property
    def states(self) -> list[ProcessingState]:
        return list(self._states.values())

    def on_state_change(self, snapshot: list[ProcessingState]) -> None:
        for state in snapshot:
            self._states[state.id] = state

    def on_batch_complete(self, snapshot: list[ProcessingState]) -> None:
        self.on_state_change(snapshot)
        self.is_complete = True


class LoggingObserver(StateObserver):
    """Logs each status label change once."""

    def __init__(self) -> None:
        self._last_labels: dict[str, str] = {}

    def on_state_change(self, snapshot: list[ProcessingState]) -> None:
        for state in snapshot:
            if self._last_labels.get(state.id) == state.status_label:
                continue
            self._last_labels[state.id] = state.status_label
            if state.persistence_outcome is PersistenceOutcome.FAILED:
                Log.warning(f"Receipt {state.id}: {state.status_label} ({state.error_message})")
            else:
                Log.info(f"Receipt {state.id}: {state.status_label}")

    def on_batch_complete(self, snapshot: list[ProcessingState]) -> None:
        succeeded = sum(
            1 for s in snapshot if s.persistence_outcome is PersistenceOutcome.SUCCESS
        )
        Log.info(f"Batch complete: {succeeded}/{len(snapshot)} receipts saved")


class CompositeObserver(StateObserver):
    """Fans snapshots out to several observers in order."""

    def __init__(self, observers: list[StateObserver]) -> None:
        self._observers = observers

    def on_state_change(self, snapshot: list[ProcessingState]) -> None:
        for observer in self._observers:
            observer.on_state_change(snapshot)

    def on_batch_complete(self, snapshot: list[ProcessingState]) -> None:
        for observer in self._observers:
            observer.on_batch_complete(snapshot)
