"""FastAPI routers and dependencies."""

from biodata.api.deps import get_factory, get_pipeline
from biodata.api.generate import router as generate_router

__all__ = [
    "get_factory",
    "get_pipeline",
    "generate_router",
]
