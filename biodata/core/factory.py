"""Component Factory for strategy instantiation.

The Factory Pattern allows the application to instantiate the fetcher,
patcher and converter strategies from configuration and to hand them a
shared HTTP client.
"""

import logging

import httpx

from biodata.core.config import Settings, get_settings
from biodata.interfaces.converter import BaseDocumentConverter
from biodata.interfaces.template import BaseArchivePatcher, BaseTemplateFetcher
from biodata.services.pipeline import BiodataPipeline
from biodata.strategies.converters import ConvertApiClient
from biodata.strategies.fetchers import HttpTemplateFetcher
from biodata.strategies.template_engine import SlideArchivePatcher

logger = logging.getLogger(__name__)


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the async HTTP client shared by outbound calls.

    Args:
        settings: Application settings.

    Returns:
        A new httpx.AsyncClient. The caller is responsible for closing it.
    """
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
    )


class ComponentFactory:
    """Factory for creating pipeline components based on configuration.

    Example:
        ```python
        async with create_http_client(settings) as client:
            factory = ComponentFactory(client, settings)
            pipeline = factory.get_pipeline()
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            client: Shared async HTTP client for outbound calls.
            settings: Application settings. If None, uses global settings.
        """
        self._client = client
        self._settings = settings or get_settings()
        self._fetcher_cache: BaseTemplateFetcher | None = None
        self._patcher_cache: BaseArchivePatcher | None = None
        self._converter_cache: BaseDocumentConverter | None = None
        self._pipeline_cache: BiodataPipeline | None = None

    def get_fetcher(self) -> BaseTemplateFetcher:
        """Get the template fetcher.

        Returns:
            A BaseTemplateFetcher implementation instance.
        """
        if self._fetcher_cache is None:
            logger.info(f"Instantiating template fetcher: {self._settings.template_url}")
            self._fetcher_cache = HttpTemplateFetcher(
                client=self._client,
                template_url=self._settings.template_url,
                spool_max_bytes=self._settings.template_spool_max_bytes,
            )
        return self._fetcher_cache

    def get_patcher(self) -> BaseArchivePatcher:
        """Get the archive patcher.

        Returns:
            A BaseArchivePatcher implementation instance.
        """
        if self._patcher_cache is None:
            logger.info("Instantiating slide archive patcher")
            self._patcher_cache = SlideArchivePatcher()
        return self._patcher_cache

    def get_converter(self) -> BaseDocumentConverter:
        """Get the document converter.

        Returns:
            A BaseDocumentConverter implementation instance.
        """
        if self._converter_cache is None:
            logger.info(f"Instantiating converter: {self._settings.convert_api_url}")
            self._converter_cache = ConvertApiClient(
                client=self._client,
                endpoint=self._settings.convert_api_url,
                api_key=self._settings.convert_api_key.get_secret_value(),
            )
        return self._converter_cache

    def get_pipeline(self) -> BiodataPipeline:
        """Get the biodata pipeline wired with the configured components."""
        if self._pipeline_cache is None:
            self._pipeline_cache = BiodataPipeline(
                fetcher=self.get_fetcher(),
                patcher=self.get_patcher(),
                converter=self.get_converter(),
            )
        return self._pipeline_cache
