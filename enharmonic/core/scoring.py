"""Harmonic coherence scoring.

Scores how well a claim's context and resolution justify the interval it
names. The rubric is a fixed, public heuristic made of three additive buckets:

1. Context/interval alignment (first matching rule wins, 0-50 points)
2. Resolution alignment (first matching rule wins, 0-30 points)
3. Effort floor (10 points when context and resolution are both non-trivial)

All keyword checks are case-insensitive substring tests. The effort floor uses
the raw UTF-8 byte length of the unmodified text.
"""

from dataclasses import dataclass

from pydantic import BaseModel

MAX_SCORE = 100
EFFORT_MIN_LENGTH = 5
EFFORT_POINTS = 10
PARTIAL_CREDIT_POINTS = 20


@dataclass(frozen=True)
class KeywordRule:
    """Awards ``points`` when both texts mention at least one of their keywords."""

    name: str
    first: tuple[str, ...]
    second: tuple[str, ...]
    points: int

    def matches(self, first_text: str, second_text: str) -> bool:
        return _mentions(first_text, self.first) and _mentions(
            second_text, self.second
        )


# (context, interval) pairs
ALIGNMENT_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "harmonic_minor_augmented",
        ("harmonic minor",),
        ("augmented",),
        40,
    ),
    KeywordRule(
        "diatonic_minor",
        ("natural minor", "major", "c minor"),
        ("minor",),
        40,
    ),
    KeywordRule(
        "janus_superposition",
        ("both", "superposition", "schrodinger"),
        ("both", "janus"),
        50,
    ),
)

# Generic partial credit for naming a known interval in any context
PARTIAL_CREDIT_KEYWORDS = ("augmented", "minor")

# (interval, resolution) pairs. "e" is the resolution target note (D# -> E).
RESOLUTION_RULES: tuple[KeywordRule, ...] = (
    KeywordRule(
        "augmented_outward",
        ("augmented",),
        ("up", "outward", "e"),
        30,
    ),
    KeywordRule(
        "minor_stable",
        ("minor",),
        ("stable", "step", "triad"),
        30,
    ),
    KeywordRule(
        "janus_shift",
        ("janus", "both"),
        ("shift", "context", "transform"),
        30,
    ),
)


class ScoreBreakdown(BaseModel):
    """Per-bucket points and the rule that fired in each bucket."""

    alignment: int = 0
    alignment_rule: str | None = None
    resolution: int = 0
    resolution_rule: str | None = None
    effort: int = 0

    @property
    def total(self) -> int:
        raw = self.alignment + self.resolution + self.effort
        return max(0, min(MAX_SCORE, raw))


def _mentions(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def score_breakdown(context: str, interval_name: str, resolution: str) -> ScoreBreakdown:
    """Evaluate every bucket of the rubric and report what fired."""
    context_lower = context.lower()
    interval_lower = interval_name.lower()
    resolution_lower = resolution.lower()

    breakdown = ScoreBreakdown()

    for rule in ALIGNMENT_RULES:
        if rule.matches(context_lower, interval_lower):
            breakdown.alignment = rule.points
            breakdown.alignment_rule = rule.name
            break
    else:
        if _mentions(interval_lower, PARTIAL_CREDIT_KEYWORDS):
            breakdown.alignment = PARTIAL_CREDIT_POINTS
            breakdown.alignment_rule = "partial_credit"

    for rule in RESOLUTION_RULES:
        if rule.matches(interval_lower, resolution_lower):
            breakdown.resolution = rule.points
            breakdown.resolution_rule = rule.name
            break

    if (
        len(context.encode("utf-8")) > EFFORT_MIN_LENGTH
        and len(resolution.encode("utf-8")) > EFFORT_MIN_LENGTH
    ):
        breakdown.effort = EFFORT_POINTS

    return breakdown


def score_coherence(context: str, interval_name: str, resolution: str) -> int:
    """Return the coherence score of a claim, clamped to [0, 100].

    Never fails; callers apply their own threshold.
    """
    return score_breakdown(context, interval_name, resolution).total
