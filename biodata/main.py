"""FastAPI application entry point.

Main application setup with middleware, routing, and lifecycle management.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from biodata.api.generate import router as generate_router
from biodata.api.schemas import ErrorResponse, HealthResponse
from biodata.core.config import Settings, get_settings
from biodata.core.factory import ComponentFactory, create_http_client
from biodata.core.logging_config import setup_logging
from biodata.interfaces.errors import PipelineError, ValidationError
from biodata.services.pipeline import MISSING_VALUES_MESSAGE

logger = logging.getLogger(__name__)

INTERNAL_ERROR_LABEL = "Internal server error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Owns the shared HTTP client used for template downloads and
    conversion uploads.
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info("Starting Biodata Image Service...")
    client = create_http_client(settings)
    app.state.factory = ComponentFactory(client, settings)

    yield

    # Shutdown
    logger.info("Shutting down Biodata Image Service...")
    try:
        await client.aclose()
        logger.info("HTTP client closed")
    except Exception as e:
        logger.error(f"Error closing HTTP client: {e}", exc_info=True)


def _error_response(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings. If None, loads from environment.

    Returns:
        Configured FastAPI application instance.

    Raises:
        pydantic.ValidationError: If CONVERT_API_KEY is not configured.
    """
    try:
        settings = settings or get_settings()
        setup_logging(settings.log_level, settings.log_dir)

        app = FastAPI(
            title="Biodata Image Service",
            description="Fills the biodata presentation template and renders it to PNG",
            version="0.1.0",
            lifespan=lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        # Store settings in app state
        app.state.settings = settings

        # CORS middleware
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.include_router(generate_router)
        logger.info("Registered biodata router")

        # Health check endpoint
        @app.get("/health", tags=["health"], response_model=HealthResponse)
        async def health_check() -> HealthResponse:
            """Health check endpoint for load balancers and monitoring."""
            return HealthResponse(status="ok")

        # Exception handlers
        @app.exception_handler(RequestValidationError)
        async def request_validation_handler(request: Request, exc: RequestValidationError):
            """Answer malformed bodies with a 400."""
            errors = exc.errors()
            logger.warning(f"Validation error: {errors}")
            if errors and all(err.get("type") == "missing" for err in errors):
                body = ErrorResponse(error=MISSING_VALUES_MESSAGE)
            else:
                body = ErrorResponse(
                    error="Invalid request body",
                    details=[
                        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
                        for err in errors
                    ],
                )
            return _error_response(status.HTTP_400_BAD_REQUEST, body)

        @app.exception_handler(ValidationError)
        async def missing_values_handler(request: Request, exc: ValidationError):
            """Answer requests missing a required value with a 400."""
            logger.warning(f"Rejected request: {exc}")
            return _error_response(
                status.HTTP_400_BAD_REQUEST, ErrorResponse(error=str(exc))
            )

        @app.exception_handler(PipelineError)
        async def pipeline_error_handler(request: Request, exc: PipelineError):
            """Report pipeline failures uniformly as a 500."""
            logger.error(f"Error generating biodata ({exc.stage}): {exc}", exc_info=exc)
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(error=INTERNAL_ERROR_LABEL, message=str(exc)),
            )

        @app.exception_handler(Exception)
        async def general_exception_handler(request: Request, exc: Exception):
            """Handle uncaught exceptions."""
            logger.error(f"Unhandled exception: {exc}", exc_info=True)
            return _error_response(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                ErrorResponse(error=INTERNAL_ERROR_LABEL, message=str(exc)),
            )

        # Static files last so API routes take precedence
        app.mount(
            "/",
            StaticFiles(directory=settings.public_dir, html=True),
            name="public",
        )

        logger.info("FastAPI application created successfully")
        return app

    except Exception as e:
        logger.error(f"Failed to create FastAPI app: {e}", exc_info=True)
        raise


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    settings = get_settings()
    logger.info(f"Starting uvicorn server on port {settings.port}...")
    uvicorn.run(
        "biodata.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


# Create the app instance
try:
    app = create_app()
except Exception as e:
    logger.error(f"Fatal error creating app: {e}", exc_info=True)
    raise


if __name__ == "__main__":
    run()
