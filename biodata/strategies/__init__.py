"""Concrete strategy implementations."""

from biodata.strategies.converters import ConvertApiClient
from biodata.strategies.fetchers import HttpTemplateFetcher
from biodata.strategies.template_engine import PlaceholderSubstituter, SlideArchivePatcher

__all__ = [
    "ConvertApiClient",
    "HttpTemplateFetcher",
    "PlaceholderSubstituter",
    "SlideArchivePatcher",
]
