"""Pydantic models for puzzle state, claims, and bridge results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

U8_MAX = 2**8 - 1
U64_MAX = 2**64 - 1

FRAGMENT_DATA = "Interval: [C --3 semitones--> ?]"
FRAGMENT_MAX_BYTES = 200


class Pathway(str, Enum):
    """Resolution pathway tag."""

    A = "A"
    B = "B"
    C = "C"


class PathwayClassification(BaseModel):
    """Outcome of classifying an interval name."""

    model_config = ConfigDict(frozen=True)

    pathway: Pathway
    label: str
    reward: int = Field(gt=0, le=U64_MAX)


class SubmissionClaim(BaseModel):
    """Caller-supplied interpretation of the enharmonic gap.

    Evaluated once and discarded; never persisted. ``salt`` accepts zero so the
    program can reject it with InvalidProof rather than a validation error.
    """

    context: str
    interval_name: str
    resolution: str
    salt: int = Field(ge=0, le=U64_MAX)


class PuzzleState(BaseModel):
    """Shared counter record for one puzzle seed."""

    seed_id: int = Field(ge=0, le=U64_MAX)
    address: str
    difficulty: int = Field(ge=0, le=U8_MAX)
    total_bridges: int = Field(default=0, ge=0, le=U64_MAX)
    pathway_a_count: int = Field(default=0, ge=0, le=U64_MAX)
    pathway_b_count: int = Field(default=0, ge=0, le=U64_MAX)
    pathway_c_count: int = Field(default=0, ge=0, le=U64_MAX)
    is_active: bool = True
    fragment_data: str = FRAGMENT_DATA

    @field_validator("fragment_data")
    @classmethod
    def _fragment_fits(cls, value: str) -> str:
        if len(value.encode("utf-8")) > FRAGMENT_MAX_BYTES:
            raise ValueError(
                f"fragment_data exceeds {FRAGMENT_MAX_BYTES} bytes"
            )
        return value

    def count_for(self, pathway: Pathway) -> int:
        return {
            Pathway.A: self.pathway_a_count,
            Pathway.B: self.pathway_b_count,
            Pathway.C: self.pathway_c_count,
        }[pathway]

    @property
    def is_consistent(self) -> bool:
        """Whether total_bridges equals the sum of the pathway counters."""
        return self.total_bridges == (
            self.pathway_a_count + self.pathway_b_count + self.pathway_c_count
        )


class BridgeReceipt(BaseModel):
    """Result of a successful bridge call."""

    seed_id: int
    destination: str
    pathway: Pathway
    pathway_label: str
    reward: int
    coherence_score: int = Field(ge=0, le=100)
    logs: list[str] = Field(default_factory=list)
