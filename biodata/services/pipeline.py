"""Biodata generation pipeline.

Orchestrates validating -> fetching -> patching -> converting -> responding
for one request. Any failure in the middle stages moves the run to the
terminal `failed` stage and is re-raised tagged with the stage it hit.
"""

import asyncio
import enum
import uuid
from dataclasses import dataclass

import structlog

from biodata.interfaces.converter import BaseDocumentConverter
from biodata.interfaces.errors import PipelineError, ValidationError
from biodata.interfaces.template import BaseArchivePatcher, BaseTemplateFetcher
from biodata.strategies.template_engine.models import ReplacementSet

MISSING_VALUES_MESSAGE = "Missing required values"
IMAGE_FILENAME = "biodata.png"


class PipelineStage(str, enum.Enum):
    """Stages of a biodata run."""

    VALIDATING = "validating"
    FETCHING = "fetching"
    PATCHING = "patching"
    CONVERTING = "converting"
    RESPONDING = "responding"
    FAILED = "failed"


@dataclass(frozen=True)
class BiodataImage:
    """Rendered biodata ready to be sent to the caller."""

    content: bytes
    media_type: str = "image/png"
    filename: str = IMAGE_FILENAME


@dataclass
class PipelineRun:
    """Per-request state: identifier and current stage."""

    request_id: str
    stage: PipelineStage = PipelineStage.VALIDATING


def build_replacements(
    birth_date: str | None,
    rasi: str | None,
    natchathiram: str | None,
) -> ReplacementSet:
    """Build the replacement set from the caller's values.

    Raises:
        ValidationError: If any value is missing or empty.
    """
    if not birth_date or not rasi or not natchathiram:
        raise ValidationError(MISSING_VALUES_MESSAGE)
    return ReplacementSet.for_biodata(birth_date, rasi, natchathiram)


class BiodataPipeline:
    """Turns three birth details into a rendered biodata image.

    The archive patching step is CPU-bound, so it runs in a worker thread
    and the event loop keeps serving other requests meanwhile.
    """

    def __init__(
        self,
        fetcher: BaseTemplateFetcher,
        patcher: BaseArchivePatcher,
        converter: BaseDocumentConverter,
    ) -> None:
        self._fetcher = fetcher
        self._patcher = patcher
        self._converter = converter

    async def run(
        self,
        birth_date: str | None,
        rasi: str | None,
        natchathiram: str | None,
    ) -> BiodataImage:
        """Generate the biodata image.

        Args:
            birth_date: Value for the BirthDate placeholder.
            rasi: Value for the X-Rasi placeholder.
            natchathiram: Value for the X-Natchathiram placeholder.

        Returns:
            The rendered image.

        Raises:
            ValidationError: If any value is missing.
            PipelineError: If fetching, patching or converting fails.
        """
        run = PipelineRun(request_id=uuid.uuid4().hex)
        log = structlog.get_logger(__name__).bind(request_id=run.request_id)

        log.info("pipeline_stage", stage=run.stage.value)
        try:
            replacements = build_replacements(birth_date, rasi, natchathiram)
        except ValidationError:
            run.stage = PipelineStage.FAILED
            log.warning("pipeline_rejected", reason=MISSING_VALUES_MESSAGE)
            raise

        try:
            self._advance(run, PipelineStage.FETCHING, log)
            async with self._fetcher.open() as template:
                self._advance(run, PipelineStage.PATCHING, log)
                patched = await asyncio.to_thread(self._patcher.patch, template, replacements)

            self._advance(run, PipelineStage.CONVERTING, log)
            image = await self._converter.convert(patched.content)
        except PipelineError as e:
            e.stage = run.stage.value
            self._fail(run, e, log)
            raise
        except Exception as e:
            self._fail(run, e, log)
            raise

        self._advance(run, PipelineStage.RESPONDING, log)
        return BiodataImage(content=image, media_type=self._converter.output_media_type)

    @staticmethod
    def _advance(run: PipelineRun, stage: PipelineStage, log) -> None:
        run.stage = stage
        log.info("pipeline_stage", stage=stage.value)

    @staticmethod
    def _fail(run: PipelineRun, error: Exception, log) -> None:
        log.error(
            "pipeline_failed",
            stage=run.stage.value,
            error_type=type(error).__name__,
            error=str(error),
        )
        run.stage = PipelineStage.FAILED
