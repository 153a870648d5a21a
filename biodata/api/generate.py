"""Biodata generation API routes.

Fills the biodata template with the caller's birth details and returns
the rendered PNG.
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import Response

from biodata.api.deps import get_pipeline
from biodata.api.schemas import BiodataRequest, ErrorResponse
from biodata.services.pipeline import BiodataPipeline

logger = logging.getLogger(__name__)

router = APIRouter(tags=["biodata"])


@router.post(
    "/generate-biodata",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        200: {"content": {"image/png": {}}, "description": "Rendered biodata image"},
        400: {"model": ErrorResponse, "description": "Missing required values"},
        500: {"model": ErrorResponse, "description": "Template or conversion failure"},
    },
)
async def generate_biodata(
    payload: BiodataRequest,
    pipeline: BiodataPipeline = Depends(get_pipeline),
) -> Response:
    """Generate a biodata image.

    Downloads the template, fills in birth date, rasi and natchathiram,
    converts the result to PNG and returns it as an attachment.

    Args:
        payload: Birth details.
        pipeline: The biodata pipeline.

    Returns:
        The PNG image with download headers.
    """
    image = await pipeline.run(
        birth_date=payload.birth_date,
        rasi=payload.rasi,
        natchathiram=payload.natchathiram,
    )

    logger.info(f"Biodata generated ({len(image.content)} bytes)")
    return Response(
        content=image.content,
        media_type=image.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{image.filename}"',
            "Content-Length": str(len(image.content)),
        },
    )
