"""Error taxonomy for the Enharmonic Gap program.

Every failure aborts the whole call with no state mutation. Errors carry a
stable ``code`` so clients can tell "try better wording" apart from
system/config faults without parsing messages.
"""

from typing import Any


class EnharmonicError(Exception):
    """Base class for all program errors."""

    code = "enharmonic_error"
    default_message = "Enharmonic program error."
    # True when the caller can fix the failure by rewording the claim
    user_fixable = False

    def __init__(self, message: str | None = None, **details: Any):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON CLI output."""
        return {
            "code": self.code,
            "message": self.message,
            "user_fixable": self.user_fixable,
            "details": dict(self.details),
        }


class AlreadyExists(EnharmonicError):
    """Initializer called twice for the same seed identifier."""

    code = "already_exists"
    default_message = "Puzzle state already initialized for this seed."


class SeedNotFound(EnharmonicError):
    """No puzzle state record exists for the requested seed."""

    code = "seed_not_found"
    default_message = "No puzzle state exists for this seed."


class SeedInactive(EnharmonicError):
    code = "seed_inactive"
    default_message = "Seed is currently inactive."


class InvalidProof(EnharmonicError):
    code = "invalid_proof"
    default_message = "Proof of Incompleteness failed (invalid hash/salt)."
    user_fixable = True


class ContextualIncoherence(EnharmonicError):
    code = "contextual_incoherence"
    default_message = (
        "Harmonic coherence score too low. Context does not justify the interval."
    )
    user_fixable = True


class UnrecognizedInterpretation(EnharmonicError):
    code = "unrecognized_interpretation"
    default_message = "Unrecognized interval interpretation."
    user_fixable = True


class MintRejected(EnharmonicError):
    """The token collaborator declined the mint request."""

    code = "mint_rejected"
    default_message = "Mint request rejected."

    def __init__(self, reason: str, **details: Any):
        self.reason = reason
        super().__init__(f"Mint request rejected: {reason}", reason=reason, **details)
