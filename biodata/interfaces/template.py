"""Template fetching and patching interfaces.

Defines abstract base classes for getting the biodata template and
filling its placeholders.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import TYPE_CHECKING, BinaryIO

if TYPE_CHECKING:
    from biodata.strategies.template_engine.models import PatchedArchive, ReplacementSet


class BaseTemplateFetcher(ABC):
    """Abstract base class for template retrieval strategies.

    The downloaded template is a scoped resource: it only lives inside the
    context manager returned by `open`.

    Example:
        ```python
        async with fetcher.open() as template:
            patched = patcher.patch(template, replacements)
        ```
    """

    @abstractmethod
    def open(self) -> AbstractAsyncContextManager[BinaryIO]:
        """Download the template and yield it as a rewound binary file.

        Returns:
            An async context manager yielding the template payload. The
            payload is released when the context exits.

        Raises:
            FetchError: If the download fails.
        """


class BaseArchivePatcher(ABC):
    """Abstract base class for archive patching strategies.

    Rewrites a ZIP-based document so its slide text carries the
    caller-supplied values.
    """

    @abstractmethod
    def patch(
        self,
        source: bytes | BinaryIO,
        replacements: "ReplacementSet",
    ) -> "PatchedArchive":
        """Fill placeholders in every slide entry of the archive.

        Args:
            source: Raw archive bytes or a readable binary file.
            replacements: Tokens and values to substitute.

        Returns:
            The rewritten archive.

        Raises:
            ArchiveError: If the archive cannot be read or rewritten.
            XmlParseError: If a slide entry is not well-formed XML.
        """
