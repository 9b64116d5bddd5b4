"""Core decision logic: models, errors, scoring and pathway classification."""

from .errors import (
    EnharmonicError,
    AlreadyExists,
    SeedNotFound,
    SeedInactive,
    InvalidProof,
    ContextualIncoherence,
    UnrecognizedInterpretation,
    MintRejected,
)
from .models import (
    U8_MAX,
    U64_MAX,
    FRAGMENT_DATA,
    FRAGMENT_MAX_BYTES,
    Pathway,
    PathwayClassification,
    SubmissionClaim,
    PuzzleState,
    BridgeReceipt,
)
from .scoring import ScoreBreakdown, score_breakdown, score_coherence
from .pathways import PATHWAY_RULES, PATHWAYS_BY_TAG, classify_interval

__all__ = [
    # Errors
    "EnharmonicError",
    "AlreadyExists",
    "SeedNotFound",
    "SeedInactive",
    "InvalidProof",
    "ContextualIncoherence",
    "UnrecognizedInterpretation",
    "MintRejected",
    # Models
    "U8_MAX",
    "U64_MAX",
    "FRAGMENT_DATA",
    "FRAGMENT_MAX_BYTES",
    "Pathway",
    "PathwayClassification",
    "SubmissionClaim",
    "PuzzleState",
    "BridgeReceipt",
    # Scoring
    "ScoreBreakdown",
    "score_breakdown",
    "score_coherence",
    # Pathways
    "PATHWAY_RULES",
    "PATHWAYS_BY_TAG",
    "classify_interval",
]
