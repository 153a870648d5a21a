"""Core configuration and factory components."""

from biodata.core.config import Settings, get_settings
from biodata.core.factory import ComponentFactory, create_http_client

__all__ = [
    "Settings",
    "get_settings",
    "ComponentFactory",
    "create_http_client",
]
