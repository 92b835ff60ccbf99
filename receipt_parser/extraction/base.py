from abc import ABC, abstractmethod

from receipt_parser.extraction.models import ExtractedRecord


class BaseExtractor(ABC):
    """Contract for all receipt extraction adapters."""

    @abstractmethod
    def extract_text(self, image: bytes, mime_type: str) -> str:
        """Transcribe all visible text from a receipt image.

        Args:
            image: Raw image file content.
            mime_type: Image MIME type, e.g. ``image/jpeg``.

        Returns:
            The transcription as plain text, never empty.

        Raises:
            ExtractionError: if the call fails or yields no usable text.
        """

    @abstractmethod
    def structure(self, text: str) -> ExtractedRecord:
        """Convert transcribed receipt text into an ExtractedRecord.

        Raises:
            StructuringError: if the call fails or the response does not
                              match the expense schema.
        """
