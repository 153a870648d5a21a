"""Template engine domain models.

Pydantic models and dataclasses shared by the substitution engine, the
archive patcher and the API layer. Kept here to avoid circular imports.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Placeholder tokens in the biodata template, in substitution order.
BIRTH_DATE_TOKEN = "BirthDate"
RASI_TOKEN = "X-Rasi"
NATCHATHIRAM_TOKEN = "X-Natchathiram"


class Replacement(BaseModel):
    """One placeholder token and the value it is replaced with."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1, description="Literal text searched in text runs")
    value: str = Field(description="Literal replacement text")


class ReplacementSet(BaseModel):
    """Ordered, immutable token -> value mapping for one request.

    Tokens are applied in the order they are listed. Tokens that are
    substrings of one another are rejected, so the result never depends
    on that order.
    """

    model_config = ConfigDict(frozen=True)

    replacements: tuple[Replacement, ...]

    @model_validator(mode="after")
    def reject_overlapping_tokens(self) -> "ReplacementSet":
        tokens = [r.token for r in self.replacements]
        if len(set(tokens)) != len(tokens):
            raise ValueError(f"Duplicate placeholder tokens: {tokens}")
        for token in tokens:
            for other in tokens:
                if token != other and token in other:
                    raise ValueError(
                        f"Placeholder token {token!r} overlaps with {other!r}"
                    )
        return self

    @classmethod
    def from_mapping(cls, mapping: dict[str, str]) -> "ReplacementSet":
        """Build a set from a dict, keeping its insertion order."""
        return cls(
            replacements=tuple(
                Replacement(token=token, value=value) for token, value in mapping.items()
            )
        )

    @classmethod
    def for_biodata(
        cls, birth_date: str, rasi: str, natchathiram: str
    ) -> "ReplacementSet":
        """Build the replacement set used by the biodata template."""
        return cls.from_mapping(
            {
                BIRTH_DATE_TOKEN: birth_date,
                RASI_TOKEN: rasi,
                NATCHATHIRAM_TOKEN: natchathiram,
            }
        )

    def items(self) -> Iterator[tuple[str, str]]:
        for replacement in self.replacements:
            yield replacement.token, replacement.value

    def __len__(self) -> int:
        return len(self.replacements)


@dataclass(frozen=True)
class PatchedArchive:
    """Result of patching a template archive.

    Attributes:
        content: Bytes of the rewritten ZIP container.
        slides: Names of the slide entries passed through substitution.
        replacement_count: Number of text runs that changed.
    """

    content: bytes
    slides: list[str] = field(default_factory=list)
    replacement_count: int = 0
