"""Slide archive patcher strategy.

Rewrites a PPTX container entry by entry, passing each slide document
through the placeholder substituter and copying every other entry as is.
"""

import io
import logging
import zipfile
import zlib
from typing import BinaryIO

from biodata.interfaces.errors import ArchiveError
from biodata.interfaces.template import BaseArchivePatcher
from biodata.strategies.template_engine.models import PatchedArchive, ReplacementSet
from biodata.strategies.template_engine.substitution import PlaceholderSubstituter

logger = logging.getLogger(__name__)

SLIDE_PREFIX = "ppt/slides/slide"
SLIDE_SUFFIX = ".xml"


def is_slide_entry(name: str) -> bool:
    """Return True for slide documents such as ``ppt/slides/slide3.xml``."""
    return name.startswith(SLIDE_PREFIX) and name.endswith(SLIDE_SUFFIX)


class SlideArchivePatcher(BaseArchivePatcher):
    """Fills placeholders in the slides of a PPTX archive.

    Each original ZipInfo is reused when writing the new archive, so entry
    order, names, timestamps and compression types stay the same.
    """

    def __init__(self, substituter: PlaceholderSubstituter | None = None) -> None:
        """Initialize the patcher.

        Args:
            substituter: Engine applied to slide entries. A default one is
                created when omitted.
        """
        self._substituter = substituter or PlaceholderSubstituter()

    def patch(
        self,
        source: bytes | BinaryIO,
        replacements: ReplacementSet,
    ) -> PatchedArchive:
        """Fill placeholders in every slide entry of the archive.

        Args:
            source: Raw archive bytes or a readable binary file.
            replacements: Tokens and values to substitute.

        Returns:
            PatchedArchive with the new bytes and the processed slide names.

        Raises:
            ArchiveError: If the archive cannot be read or rewritten.
            XmlParseError: If a slide entry is not well-formed XML.
        """
        if isinstance(source, (bytes, bytearray)):
            source = io.BytesIO(source)

        try:
            input_zip = zipfile.ZipFile(source, "r")
        except (zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            raise ArchiveError(f"Template is not a valid archive: {e}") from e

        slides: list[str] = []
        replacement_count = 0
        buffer = io.BytesIO()

        try:
            with input_zip, zipfile.ZipFile(buffer, "w") as output_zip:
                for item in input_zip.infolist():
                    data = self._read_entry(input_zip, item)

                    if is_slide_entry(item.filename):
                        logger.info(f"Processing slide: {item.filename}")
                        data, count = self._patch_slide(item.filename, data, replacements)
                        slides.append(item.filename)
                        replacement_count += count

                    output_zip.writestr(item, data)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
            raise ArchiveError(f"Failed to rewrite archive: {e}") from e

        logger.info(
            f"Patched archive: {len(slides)} slides, {replacement_count} replacements"
        )
        return PatchedArchive(
            content=buffer.getvalue(),
            slides=slides,
            replacement_count=replacement_count,
        )

    @staticmethod
    def _read_entry(archive: zipfile.ZipFile, item: zipfile.ZipInfo) -> bytes:
        """Read one entry, reporting any decoding failure as an ArchiveError."""
        try:
            return archive.read(item)
        except (
            zipfile.BadZipFile,
            zlib.error,
            EOFError,
            NotImplementedError,
            RuntimeError,
        ) as e:
            raise ArchiveError(f"Cannot read entry {item.filename}: {e}") from e

    def _patch_slide(
        self, name: str, data: bytes, replacements: ReplacementSet
    ) -> tuple[bytes, int]:
        """Run one slide document through the substituter.

        Args:
            name: Entry name, used in error messages.
            data: Raw entry content.
            replacements: Tokens and values to substitute.

        Returns:
            The new entry content and the number of replacements made.
        """
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ArchiveError(f"Slide {name} is not UTF-8 encoded: {e}") from e

        root = self._substituter.parse(data)
        count = self._substituter.substitute_tree(root, replacements)
        if count:
            logger.debug(f"Replaced {count} placeholders in {name}")
        return self._substituter.serialize(root), count
