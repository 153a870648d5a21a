"""Error taxonomy for the biodata pipeline.

ValidationError is answered with a 400. Every PipelineError is terminal
for its request and is reported as a 500 carrying the exception message.
"""


class BiodataError(Exception):
    """Base class for all biodata service errors."""


class ValidationError(BiodataError):
    """Raised when the request is missing one of the required values."""


class PipelineError(BiodataError):
    """Raised when a pipeline stage fails.

    Attributes:
        stage: Name of the stage that failed, set by the pipeline.
    """

    stage: str | None = None


class FetchError(PipelineError):
    """Raised when the template cannot be downloaded."""


class ArchiveError(PipelineError):
    """Raised when the template is not a readable ZIP container."""


class XmlParseError(PipelineError):
    """Raised when a slide entry is not well-formed XML."""


class ConversionAPIError(PipelineError):
    """Raised when the conversion provider answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConversionResponseError(PipelineError):
    """Raised when the conversion result is malformed or empty."""
