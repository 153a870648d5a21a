"""ConvertAPI document converter.

Uploads a PPTX document to ConvertAPI and returns the first PNG it
renders. See https://www.convertapi.com/pptx-to-png for the endpoint.
"""

import base64
import binascii
import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from biodata.interfaces.converter import BaseDocumentConverter
from biodata.interfaces.errors import ConversionAPIError, ConversionResponseError

logger = logging.getLogger(__name__)

PPTX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
UPLOAD_FIELD = "File"
UPLOAD_FILENAME = "biodata.pptx"


class ConvertedFile(BaseModel):
    """One file descriptor of a ConvertAPI result."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    file_data: str | None = Field(default=None, alias="FileData")


class ConversionResult(BaseModel):
    """ConvertAPI response payload."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    files: list[ConvertedFile] | None = Field(default=None, alias="Files")


class ConvertApiClient(BaseDocumentConverter):
    """Converter backed by the ConvertAPI REST service.

    Example:
        ```python
        async with httpx.AsyncClient() as client:
            converter = ConvertApiClient(client, endpoint, api_key)
            png = await converter.convert(pptx_bytes)
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        endpoint: str,
        api_key: str,
    ) -> None:
        """Initialize the ConvertAPI client.

        Args:
            client: Shared async HTTP client.
            endpoint: Conversion endpoint URL.
            api_key: Bearer credential for the API.
        """
        self._client = client
        self._endpoint = endpoint
        self._api_key = api_key

    async def convert(self, document: bytes) -> bytes:
        """Upload the document and return the first rendered image.

        Args:
            document: PPTX bytes.

        Returns:
            PNG bytes decoded from the first file of the response.

        Raises:
            ConversionAPIError: On a non-success status or transport failure.
            ConversionResponseError: If the response holds no usable file.
        """
        logger.info(f"Sending {len(document)} bytes to ConvertAPI")

        files = {UPLOAD_FIELD: (UPLOAD_FILENAME, document, PPTX_MEDIA_TYPE)}
        headers = {"Authorization": f"Bearer {self._api_key}"}

        try:
            response = await self._client.post(self._endpoint, headers=headers, files=files)
        except httpx.HTTPError as e:
            raise ConversionAPIError(f"ConvertAPI request failed: {e}") from e

        if not response.is_success:
            logger.error(
                f"ConvertAPI returned {response.status_code}: {response.text[:500]}"
            )
            raise ConversionAPIError(
                f"ConvertAPI error: {response.reason_phrase}",
                status_code=response.status_code,
            )

        result = self._parse_result(response)
        image = self._decode_first_file(result)
        logger.info(f"ConvertAPI returned {len(image)} image bytes")
        return image

    @staticmethod
    def _parse_result(response: httpx.Response) -> ConversionResult:
        """Validate the JSON body against the expected result shape."""
        try:
            return ConversionResult.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise ConversionResponseError(f"Unexpected conversion response: {e}") from e

    @staticmethod
    def _decode_first_file(result: ConversionResult) -> bytes:
        if not result.files:
            raise ConversionResponseError("No files in conversion response")

        file_data = result.files[0].file_data
        if not file_data:
            raise ConversionResponseError("No file data in conversion response")

        try:
            return base64.b64decode(file_data, validate=True)
        except binascii.Error as e:
            raise ConversionResponseError(f"Invalid file data in conversion response: {e}") from e

    @property
    def output_media_type(self) -> str:
        return "image/png"
