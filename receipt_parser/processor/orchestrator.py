from collections.abc import Sequence

from receipt_parser.config.settings import Settings
from receipt_parser.extraction.exceptions import ExtractionError, StructuringError
from receipt_parser.extraction.factory import ExtractorFactory
from receipt_parser.logging.logger import Log
from receipt_parser.persistence.base import BaseRecordStore
from receipt_parser.persistence.exceptions import PersistenceError
from receipt_parser.persistence.factory import RecordStoreFactory
from receipt_parser.persistence.models import Credentials
from receipt_parser.processor.exceptions import BatchValidationError
from receipt_parser.processor.models import PersistenceOutcome, ProcessingState, UploadItem
from receipt_parser.processor.observer import StateBoard, StateObserver
from receipt_parser.processor.pipeline import PipelineContext, PipelineStep
from receipt_parser.processor.steps import ExtractTextStep, PersistStep, StructureStep

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."

_PIPELINE_ERRORS = (ExtractionError, StructuringError, PersistenceError)


class ReceiptOrchestrator:
    """Drives a batch of receipts through the pipeline, one item at a time.

    Pipeline per item: extract text -> structure -> persist.
    A failure is confined to its item; the batch always runs to the end.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process_batch(
        self,
        items: Sequence[UploadItem],
        credentials: Credentials,
        observer: StateObserver | None = None,
    ) -> None:
        """Process every item in input order and publish each state change.

        Raises:
            BatchValidationError: before any state is created, if ``items`` is
                                  empty or the credentials are incomplete.
        """
        self._validate(items, credentials)
        if observer is None:
            observer = StateBoard()

        states = [ProcessingState.for_item(seq, item) for seq, item in enumerate(items, start=1)]
        Log.info(f"Processing batch of {len(states)} receipts")
        self._publish(states, observer)

        for item, state in zip(items, states):
            self._process_item(item, state, credentials, states, observer)

        succeeded = sum(
            1 for s in states if s.persistence_outcome is PersistenceOutcome.SUCCESS
        )
        Log.info(f"Batch finished: {succeeded} succeeded, {len(states) - succeeded} failed")
        observer.on_batch_complete([s.snapshot() for s in states])

    def _process_item(
        self,
        item: UploadItem,
        state: ProcessingState,
        credentials: Credentials,
        states: list[ProcessingState],
        observer: StateObserver,
    ) -> None:
        context = PipelineContext(item=item, credentials=credentials)
        for step in self._steps:
            state.advance(step.stage)
            self._publish(states, observer)
            try:
                context = step.run(context)
            except _PIPELINE_ERRORS as exc:
                Log.error(f"Receipt {state.id} failed at {step.stage.value}: {exc}")
                state.fail(str(exc))
                self._publish(states, observer)
                return
            except Exception as exc:
                Log.exception(
                    f"Receipt {state.id} failed at {step.stage.value} "
                    f"with unexpected {type(exc).__name__}"
                )
                state.fail(f"{UNKNOWN_ERROR_MESSAGE} {exc}".strip())
                self._publish(states, observer)
                return

            if context.record is not None:
                state.extracted_record = context.record
            if context.stored_id is not None:
                state.stored_id = context.stored_id
            if step.completed_stage is not None:
                state.advance(step.completed_stage)
                self._publish(states, observer)

    @staticmethod
    def _validate(items: Sequence[UploadItem], credentials: Credentials) -> None:
        if not items:
            raise BatchValidationError("Please upload at least one receipt image.")
        if not credentials.is_complete():
            raise BatchValidationError("Please provide the Notion API key and database id.")

    @staticmethod
    def _publish(states: list[ProcessingState], observer: StateObserver) -> None:
        observer.on_state_change([s.snapshot() for s in states])


def build_orchestrator(
    settings: Settings,
    record_store: BaseRecordStore | None = None,
) -> ReceiptOrchestrator:
    """Build a ReceiptOrchestrator with the configured adapters.

    The caller owns ``record_store`` and is responsible for closing it.
    """
    extractor = ExtractorFactory.create(settings)
    if record_store is None:
        record_store = RecordStoreFactory.create(settings)
    return ReceiptOrchestrator(
        steps=[
            ExtractTextStep(extractor=extractor),
            StructureStep(extractor=extractor),
            PersistStep(record_store=record_store),
        ]
    )
