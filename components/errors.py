"""
Exception types raised by the clip extraction pipeline.

Every error derives from ValueError so callers that only know about
ValueError (the upload validator, the Flask routes) keep handling them.
"""


class ExtractionError(ValueError):
    """Base class for failures that abort a whole extraction run."""

    label = 'Extraction failed'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class DocumentParseError(ExtractionError):
    """The project file is not well-formed (or not safe) XML."""

    label = 'Invalid project XML'


class NoTimelineError(ExtractionError):
    """The document holds no timeline/sequence container."""

    label = 'No timeline found'


class ExtractionBusyError(ExtractionError):
    """Another extraction run is still in progress."""

    label = 'Extraction busy'


class ConfigurationError(ValueError):
    """Invalid frame rate, unit scale or time unit."""


class UploadValidationError(ValueError):
    """The uploaded file was rejected before processing."""
