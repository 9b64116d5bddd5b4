"""The Enharmonic Gap program: initialize puzzle state and bridge claims.

Usage:
    from enharmonic import EnharmonicProgram, SubmissionClaim, open_ledger_db

    db = open_ledger_db("./storage/enharmonic.db")
    program = EnharmonicProgram(db)
    program.initialize(seed_id=65, difficulty=65)
    receipt = program.bridge(
        65,
        SubmissionClaim(
            context="B harmonic minor",
            interval_name="Augmented Second",
            resolution="Resolves upward to E",
            salt=12345,
        ),
        mint=mint_address,
        destination=token_account,
    )
"""

from __future__ import annotations

import logging

from pydantic import BaseModel

from .core.errors import (
    ContextualIncoherence,
    EnharmonicError,
    InvalidProof,
    SeedInactive,
    SeedNotFound,
)
from .core.models import (
    U64_MAX,
    BridgeReceipt,
    PathwayClassification,
    PuzzleState,
    SubmissionClaim,
)
from .core.pathways import classify_interval
from .core.scoring import ScoreBreakdown, score_breakdown, score_coherence
from .ledger.derivation import DEFAULT_PROGRAM_ID, ProgramAuthority
from .ledger.ledger_db import LedgerDB
from .ledger.token import MintAuthority, TokenProgram

logger = logging.getLogger(__name__)

COHERENCE_THRESHOLD = 70
TOKEN_SYMBOL = "MEMEk"


class ClaimEvaluation(BaseModel):
    """Dry-run result of checking a claim without touching the ledger."""

    breakdown: ScoreBreakdown
    coherence_score: int
    classification: PathwayClassification | None = None
    error: dict | None = None

    @property
    def accepted(self) -> bool:
        return self.error is None


def check_claim(claim: SubmissionClaim) -> tuple[int, PathwayClassification]:
    """Validate salt, score and classify a claim.

    Returns:
        Tuple of (coherence_score, classification)

    Raises:
        InvalidProof: If the salt is zero.
        ContextualIncoherence: If the score is below the threshold.
        UnrecognizedInterpretation: If no pathway matches.
    """
    if claim.salt <= 0:
        raise InvalidProof(salt=claim.salt)

    score = score_coherence(claim.context, claim.interval_name, claim.resolution)
    if score < COHERENCE_THRESHOLD:
        raise ContextualIncoherence(
            coherence_score=score, threshold=COHERENCE_THRESHOLD
        )

    return score, classify_interval(claim.interval_name)


def evaluate_claim(claim: SubmissionClaim) -> ClaimEvaluation:
    """Score and classify a claim, reporting the error a bridge would raise."""
    breakdown = score_breakdown(claim.context, claim.interval_name, claim.resolution)
    try:
        score, classification = check_claim(claim)
    except EnharmonicError as exc:
        return ClaimEvaluation(
            breakdown=breakdown,
            coherence_score=breakdown.total,
            error=exc.to_dict(),
        )
    return ClaimEvaluation(
        breakdown=breakdown, coherence_score=score, classification=classification
    )


def _check_seed_id(seed_id: int) -> None:
    if not 0 <= seed_id <= U64_MAX:
        raise ValueError(f"seed_id must be an unsigned 64-bit integer, got {seed_id}")


class EnharmonicProgram:
    """Program instructions bound to a ledger and a mint collaborator.

    Args:
        db: Hosting ledger
        mint_authority: Token primitive used for rewards. Defaults to a
            TokenProgram on the same ledger so mint and counters commit together.
        program_id: Program id used for address/capability derivation
    """

    def __init__(
        self,
        db: LedgerDB,
        mint_authority: MintAuthority | None = None,
        program_id: str = DEFAULT_PROGRAM_ID,
    ):
        self.db = db
        self.authority = ProgramAuthority(program_id)
        self.mint_authority = mint_authority or TokenProgram(db)

    @property
    def program_id(self) -> str:
        return self.authority.program_id

    def state_address(self, seed_id: int) -> str:
        _check_seed_id(seed_id)
        return self.authority.state_address(seed_id)

    def initialize(self, seed_id: int, difficulty: int) -> PuzzleState:
        """Create the puzzle-state record for ``seed_id``.

        Raises:
            AlreadyExists: If the seed was already initialized.
            pydantic.ValidationError: If seed_id/difficulty are out of range.
        """
        _check_seed_id(seed_id)
        state = PuzzleState(
            seed_id=seed_id,
            address=self.authority.state_address(seed_id),
            difficulty=difficulty,
        )
        self.db.insert_puzzle_state(state)
        logger.info(
            "Seed %d Initialized: The Enharmonic Gap is open.", seed_id
        )
        return state

    def get_state(self, seed_id: int) -> PuzzleState:
        _check_seed_id(seed_id)
        state = self.db.get_puzzle_state(seed_id)
        if state is None:
            raise SeedNotFound(seed_id=seed_id)
        return state

    def list_states(self) -> list[PuzzleState]:
        return self.db.list_puzzle_states()

    def bridge(
        self,
        seed_id: int,
        claim: SubmissionClaim,
        mint: str,
        destination: str,
    ) -> BridgeReceipt:
        """Bridge the enharmonic gap with a claim and reward the caller.

        Validation, scoring, classification, the mint and the counter update
        run inside one ledger transaction; any failure rolls all of it back.

        Raises:
            SeedNotFound, SeedInactive, InvalidProof, ContextualIncoherence,
            UnrecognizedInterpretation, MintRejected
        """
        _check_seed_id(seed_id)
        try:
            with self.db.transaction():
                state = self.db.get_puzzle_state(seed_id)
                if state is None:
                    raise SeedNotFound(seed_id=seed_id)
                if not state.is_active:
                    raise SeedInactive(seed_id=seed_id)

                score, classification = check_claim(claim)

                _, capability = self.authority.derive(seed_id)
                self.mint_authority.mint_to(
                    mint, destination, classification.reward, capability
                )

                self.db.increment_counters(seed_id, classification.pathway)
        except EnharmonicError as exc:
            logger.info("Bridge rejected for seed %d: %s", seed_id, exc.code)
            raise

        logs = [
            f"Gap Bridged via {classification.label}! "
            f"Reward: {classification.reward} {TOKEN_SYMBOL}",
            f"Coherence Score: {score}",
        ]
        for line in logs:
            logger.info(line)

        return BridgeReceipt(
            seed_id=seed_id,
            destination=destination,
            pathway=classification.pathway,
            pathway_label=classification.label,
            reward=classification.reward,
            coherence_score=score,
            logs=logs,
        )
