"""Abstract base class for document converters.

The Strategy Pattern lets the conversion provider be swapped without
touching the pipeline.
"""

from abc import ABC, abstractmethod


class BaseDocumentConverter(ABC):
    """Abstract base class for document-to-image conversion strategies."""

    @abstractmethod
    async def convert(self, document: bytes) -> bytes:
        """Render a document and return the first resulting image.

        Args:
            document: Bytes of the document to convert.

        Returns:
            Raw image bytes.

        Raises:
            ConversionAPIError: If the provider rejects the request.
            ConversionResponseError: If the provider's answer holds no image.
        """
        ...

    @property
    @abstractmethod
    def output_media_type(self) -> str:
        """Return the media type of the produced image, e.g. 'image/png'."""
        ...
