"""HTTP template fetcher.

Downloads the PPTX template into a per-request spooled buffer that is
released as soon as the caller is done with it.
"""

import logging
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import BinaryIO

import httpx

from biodata.interfaces.errors import FetchError
from biodata.interfaces.template import BaseTemplateFetcher

logger = logging.getLogger(__name__)


class HttpTemplateFetcher(BaseTemplateFetcher):
    """Fetches the template over HTTP with a shared httpx client.

    The payload is kept in memory up to `spool_max_bytes` and spills to an
    anonymous temporary file beyond that. Either way it is private to the
    request and removed when the context exits.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        template_url: str,
        spool_max_bytes: int = 10 * 1024 * 1024,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Shared async HTTP client.
            template_url: Location of the template document.
            spool_max_bytes: In-memory threshold for the download buffer.
        """
        self._client = client
        self._template_url = template_url
        self._spool_max_bytes = spool_max_bytes

    @asynccontextmanager
    async def open(self) -> AsyncIterator[BinaryIO]:
        """Download the template and yield it as a rewound binary file.

        Yields:
            The template payload.

        Raises:
            FetchError: On a non-success status or an interrupted transfer.
        """
        logger.info(f"Downloading template from: {self._template_url}")

        with tempfile.SpooledTemporaryFile(max_size=self._spool_max_bytes) as buffer:
            try:
                async with self._client.stream("GET", self._template_url) as response:
                    if not response.is_success:
                        raise FetchError(
                            f"Failed to download template: {response.reason_phrase}"
                        )
                    async for chunk in response.aiter_bytes():
                        buffer.write(chunk)
            except httpx.HTTPError as e:
                raise FetchError(f"Failed to download template: {e}") from e

            size = buffer.tell()
            buffer.seek(0)
            logger.info(f"Template downloaded ({size} bytes)")

            yield buffer

        logger.debug("Template buffer released")
