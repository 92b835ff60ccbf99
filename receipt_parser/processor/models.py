import dataclasses
import hashlib
from dataclasses import dataclass, field
from enum import Enum

from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.processor.exceptions import InvalidTransitionError


@dataclass(frozen=True)
class UploadItem:
    """An uploaded receipt image plus its locally generated preview handle."""

    content: bytes = field(repr=False)
    mime_type: str
    filename: str
    preview_handle: str

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        mime_type: str,
        filename: str = "receipt",
    ) -> "UploadItem":
        digest = hashlib.sha256(content).hexdigest()[:12]
        return cls(
            content=content,
            mime_type=mime_type,
            filename=filename,
            preview_handle=f"preview://{digest}",
        )


class ProcessingStage(str, Enum):
    PENDING = "pending"
    EXTRACTING = "extracting"
    STRUCTURING = "structuring"
    EXTRACTED = "extracted"
    PERSISTING = "persisting"
    SUCCESS = "success"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return _STAGE_LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return self in (ProcessingStage.SUCCESS, ProcessingStage.FAILED)


_STAGE_LABELS = {
    ProcessingStage.PENDING: "Waiting...",
    ProcessingStage.EXTRACTING: "Processing OCR...",
    ProcessingStage.STRUCTURING: "Structuring data...",
    ProcessingStage.EXTRACTED: "Data extracted",
    ProcessingStage.PERSISTING: "Saving to Notion...",
    ProcessingStage.SUCCESS: "Saved successfully!",
    ProcessingStage.FAILED: "Failed",
}

# Forward order of the non-failure stages; FAILED is reachable from any of them.
_STAGE_SEQUENCE = [
    ProcessingStage.PENDING,
    ProcessingStage.EXTRACTING,
    ProcessingStage.STRUCTURING,
    ProcessingStage.EXTRACTED,
    ProcessingStage.PERSISTING,
    ProcessingStage.SUCCESS,
]


class PersistenceOutcome(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class ProcessingState:
    """Per-item status record, mutated only by the orchestrator."""

    id: str
    filename: str
    preview_handle: str
    stage: ProcessingStage = ProcessingStage.PENDING
    status_label: str = ProcessingStage.PENDING.label
    extracted_record: ExtractedRecord | None = None
    persistence_outcome: PersistenceOutcome = PersistenceOutcome.PENDING
    error_message: str | None = None
    stored_id: str | None = None

    @classmethod
    def for_item(cls, sequence: int, item: UploadItem) -> "ProcessingState":
        """Create the initial state; ``sequence`` keeps ids unique within a batch."""
        return cls(
            id=f"{sequence}-{item.filename}",
            filename=item.filename,
            preview_handle=item.preview_handle,
        )

    @property
    def is_terminal(self) -> bool:
        return self.persistence_outcome is not PersistenceOutcome.PENDING

    def advance(self, stage: ProcessingStage) -> None:
        """Move to the next stage of the sequence.

        Raises:
            InvalidTransitionError: if the state is terminal or ``stage`` is
                                    not the immediate successor.
        """
        if self.is_terminal:
            raise InvalidTransitionError(
                f"State {self.id} is terminal ({self.stage.value}); cannot move to {stage.value}"
            )
        if stage is ProcessingStage.FAILED:
            raise InvalidTransitionError("Use fail() to mark a state as failed")
        expected = _STAGE_SEQUENCE[_STAGE_SEQUENCE.index(self.stage) + 1]
        if stage is not expected:
            raise InvalidTransitionError(
                f"State {self.id} cannot move from {self.stage.value} to {stage.value}"
            )
        self.stage = stage
        self.status_label = stage.label
        if stage is ProcessingStage.SUCCESS:
            self.persistence_outcome = PersistenceOutcome.SUCCESS

    def fail(self, message: str) -> None:
        """Move to the terminal failed stage; any extracted record is kept."""
        if self.is_terminal:
            raise InvalidTransitionError(
                f"State {self.id} is terminal ({self.stage.value}); cannot fail"
            )
        self.stage = ProcessingStage.FAILED
        self.status_label = ProcessingStage.FAILED.label
        self.persistence_outcome = PersistenceOutcome.FAILED
        self.error_message = message

    def snapshot(self) -> "ProcessingState":
        """Return a detached copy for observers."""
        return dataclasses.replace(self)
