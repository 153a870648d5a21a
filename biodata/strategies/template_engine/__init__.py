"""Template engine strategies.

Implements placeholder substitution and archive patching for PPTX slides.
"""

from biodata.strategies.template_engine.models import (
    PatchedArchive,
    Replacement,
    ReplacementSet,
)
from biodata.strategies.template_engine.patcher import SlideArchivePatcher, is_slide_entry
from biodata.strategies.template_engine.substitution import (
    PlaceholderSubstituter,
    substitute_text,
)

__all__ = [
    "PatchedArchive",
    "Replacement",
    "ReplacementSet",
    "PlaceholderSubstituter",
    "SlideArchivePatcher",
    "is_slide_entry",
    "substitute_text",
]
