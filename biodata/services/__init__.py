"""Application services."""

from biodata.services.pipeline import (
    BiodataImage,
    BiodataPipeline,
    PipelineStage,
    build_replacements,
)

__all__ = [
    "BiodataImage",
    "BiodataPipeline",
    "PipelineStage",
    "build_replacements",
]
