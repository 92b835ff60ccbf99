from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.persistence.models import Credentials
from receipt_parser.processor.models import ProcessingStage, UploadItem


@dataclass(slots=True)
class PipelineContext:
    item: UploadItem
    credentials: Credentials
    text: str = ""
    record: ExtractedRecord | None = None
    stored_id: str | None = None


class PipelineStep(ABC):
    """One remote call of the per-item pipeline.

    ``stage`` is entered before the step runs; ``completed_stage``, when set,
    is entered after it succeeds.
    """

    stage: ClassVar[ProcessingStage]
    completed_stage: ClassVar[ProcessingStage | None] = None

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
