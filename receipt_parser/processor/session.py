from collections.abc import Sequence

from receipt_parser.persistence.models import Credentials
from receipt_parser.processor.exceptions import BatchInFlightError
from receipt_parser.processor.models import ProcessingState, UploadItem
from receipt_parser.processor.observer import StateObserver
from receipt_parser.processor.orchestrator import ReceiptOrchestrator


class BatchSession(StateObserver):
    """Caller-side session: credentials, selected items, latest states, in-flight flag.

    Forwards every snapshot to an optional downstream observer (a renderer).
    """

    def __init__(
        self,
        credentials: Credentials,
        items: Sequence[UploadItem] = (),
        observer: StateObserver | None = None,
    ) -> None:
        self.credentials = credentials
        self.items: list[UploadItem] = list(items)
        self.states: list[ProcessingState] = []
        self.is_processing = False
        self._observer = observer

    def select_items(self, items: Sequence[UploadItem]) -> None:
        """Replace the batch and discard results of the previous one."""
        if self.is_processing:
            raise BatchInFlightError("Cannot change the batch while it is being processed")
        self.items = list(items)
        self.states = []

    def run(self, orchestrator: ReceiptOrchestrator) -> list[ProcessingState]:
        """Process the selected items; refuses to start while a batch is in flight."""
        if self.is_processing:
            raise BatchInFlightError("A batch is already being processed")
        self.is_processing = True
        self.states = []
        try:
            orchestrator.process_batch(self.items, self.credentials, observer=self)
        finally:
            self.is_processing = False
        return self.states

    def on_state_change(self, snapshot: list[ProcessingState]) -> None:
        self.states = snapshot
        if self._observer is not None:
            self._observer.on_state_change(snapshot)

    def on_batch_complete(self, snapshot: list[ProcessingState]) -> None:
        self.states = snapshot
        if self._observer is not None:
            self._observer.on_batch_complete(snapshot)
