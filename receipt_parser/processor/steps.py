from receipt_parser.extraction.base import BaseExtractor
from receipt_parser.logging.logger import Log
from receipt_parser.persistence.base import BaseRecordStore
from receipt_parser.processor.models import ProcessingStage
from receipt_parser.processor.pipeline import PipelineContext, PipelineStep


class ExtractTextStep(PipelineStep):
    stage = ProcessingStage.EXTRACTING

    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.text = self._extractor.extract_text(
            context.item.content,
            context.item.mime_type,
        )
        return context


class StructureStep(PipelineStep):
    stage = ProcessingStage.STRUCTURING
    completed_stage = ProcessingStage.EXTRACTED

    def __init__(self, extractor: BaseExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.record = self._extractor.structure(context.text)
        return context


class PersistStep(PipelineStep):
    stage = ProcessingStage.PERSISTING
    completed_stage = ProcessingStage.SUCCESS

    def __init__(self, record_store: BaseRecordStore) -> None:
        self._record_store = record_store

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise ValueError("PipelineContext.record must be set before persist")
        context.stored_id = self._record_store.save(context.record, context.credentials)
        Log.info(f"Saved {context.item.filename} as {context.stored_id}")
        return context
