"""Enharmonic: proof-of-interpretation rewards for the Enharmonic Gap puzzle."""

__version__ = "0.1.0"

from .core import (  # noqa: E402
    EnharmonicError,
    AlreadyExists,
    SeedNotFound,
    SeedInactive,
    InvalidProof,
    ContextualIncoherence,
    UnrecognizedInterpretation,
    MintRejected,
    Pathway,
    PathwayClassification,
    SubmissionClaim,
    PuzzleState,
    BridgeReceipt,
    score_coherence,
    classify_interval,
)
from .ledger import LedgerDB, open_ledger_db, TokenProgram, ProgramAuthority  # noqa: E402
from .program import (  # noqa: E402
    COHERENCE_THRESHOLD,
    EnharmonicProgram,
    evaluate_claim,
)

__all__ = [
    "__version__",
    "EnharmonicError",
    "AlreadyExists",
    "SeedNotFound",
    "SeedInactive",
    "InvalidProof",
    "ContextualIncoherence",
    "UnrecognizedInterpretation",
    "MintRejected",
    "Pathway",
    "PathwayClassification",
    "SubmissionClaim",
    "PuzzleState",
    "BridgeReceipt",
    "score_coherence",
    "classify_interval",
    "LedgerDB",
    "open_ledger_db",
    "TokenProgram",
    "ProgramAuthority",
    "COHERENCE_THRESHOLD",
    "EnharmonicProgram",
    "evaluate_claim",
]
