"""FastAPI dependencies for dependency injection.

Provides the pipeline built by the application's component factory.
"""

import logging

from fastapi import HTTPException, Request, status

from biodata.core.factory import ComponentFactory
from biodata.services.pipeline import BiodataPipeline

logger = logging.getLogger(__name__)


def get_factory(request: Request) -> ComponentFactory:
    """Dependency for getting the component factory created at startup.

    Args:
        request: The incoming request.

    Returns:
        The application's ComponentFactory.

    Raises:
        HTTPException: If the application has not finished starting up.
    """
    factory: ComponentFactory | None = getattr(request.app.state, "factory", None)
    if factory is None:
        logger.error("Component factory is not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return factory


def get_pipeline(request: Request) -> BiodataPipeline:
    """Dependency for getting the biodata pipeline.

    Args:
        request: The incoming request.

    Returns:
        The configured BiodataPipeline.
    """
    return get_factory(request).get_pipeline()
