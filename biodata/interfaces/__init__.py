"""Abstract base classes and errors for the biodata pipeline."""

from biodata.interfaces.converter import BaseDocumentConverter
from biodata.interfaces.errors import (
    ArchiveError,
    BiodataError,
    ConversionAPIError,
    ConversionResponseError,
    FetchError,
    PipelineError,
    ValidationError,
    XmlParseError,
)
from biodata.interfaces.template import BaseArchivePatcher, BaseTemplateFetcher

__all__ = [
    "BaseArchivePatcher",
    "BaseDocumentConverter",
    "BaseTemplateFetcher",
    "BiodataError",
    "ValidationError",
    "PipelineError",
    "FetchError",
    "ArchiveError",
    "XmlParseError",
    "ConversionAPIError",
    "ConversionResponseError",
]
