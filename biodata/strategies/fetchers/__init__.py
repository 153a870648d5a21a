"""Template fetcher strategies."""

from biodata.strategies.fetchers.http import HttpTemplateFetcher

__all__ = ["HttpTemplateFetcher"]
