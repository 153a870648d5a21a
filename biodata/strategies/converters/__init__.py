"""Document converter strategies."""

from biodata.strategies.converters.convertapi import ConvertApiClient

__all__ = ["ConvertApiClient"]
