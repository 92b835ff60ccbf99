class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class BatchValidationError(ProcessorError):
    """Raised when a batch cannot start: no items or incomplete credentials."""


class BatchInFlightError(ProcessorError):
    """Raised when a batch is started while another one is still running."""


class InvalidTransitionError(ProcessorError):
    """Raised when a processing state is moved backwards or out of a terminal stage."""


class UnsupportedFileTypeError(ProcessorError):
    """Raised when an uploaded file is not an image."""
