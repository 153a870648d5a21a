"""API request and response schemas.

Pydantic v2 models for API serialization/deserialization.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Biodata Schemas
# =============================================================================


class BiodataRequest(BaseModel):
    """Request body for biodata generation.

    Fields are optional at the schema level so that a missing value is
    reported as "Missing required values" rather than a generic
    validation error.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "birthDate": "1990-01-01",
                "rasi": "Simha",
                "natchathiram": "Magam",
            }
        },
    )

    birth_date: str | None = Field(
        default=None, alias="birthDate", description="Replaces the BirthDate placeholder"
    )
    rasi: str | None = Field(default=None, description="Replaces the X-Rasi placeholder")
    natchathiram: str | None = Field(
        default=None, description="Replaces the X-Natchathiram placeholder"
    )


# =============================================================================
# Health Schemas
# =============================================================================


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str = "ok"


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str = Field(description="Error label")
    message: str | None = Field(default=None, description="Underlying failure message")
    details: list[Any] | None = Field(default=None, description="Validation error details")
