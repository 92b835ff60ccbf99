class ExtractionError(Exception):
    """Raised when no usable text can be transcribed from a receipt image."""


class StructuringError(Exception):
    """Raised when transcribed text cannot be turned into an ExtractedRecord."""


class StructuringValidationError(StructuringError):
    """Raised when the structured response violates the record schema."""


class ModelServiceError(Exception):
    """Raised by provider adapters when the AI service call fails or returns nothing."""


class PromptTemplateError(Exception):
    """Raised when a bundled prompt template or schema cannot be loaded."""
