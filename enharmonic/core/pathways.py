"""Pathway classification for interval interpretations.

Rules are evaluated in order and the first match wins:

1. "augmented"                          -> Pathway A (65)
2. "minor" without "both"               -> Pathway B (65)
3. "both" / "superposition" / "janus"   -> Pathway C (165)

"augmented" is checked first so a claim that also says "both" still routes to
Pathway A. Rule 2 excludes "both" so a superposition claim that mentions
"minor" falls through to Pathway C.
"""

from dataclasses import dataclass

from .errors import UnrecognizedInterpretation
from .models import Pathway, PathwayClassification

PATHWAY_A = PathwayClassification(
    pathway=Pathway.A, label="Pathway A: Augmented Second", reward=65
)
PATHWAY_B = PathwayClassification(
    pathway=Pathway.B, label="Pathway B: Minor Third", reward=65
)
PATHWAY_C = PathwayClassification(
    pathway=Pathway.C, label="Pathway C: Janus Mode", reward=165
)


@dataclass(frozen=True)
class PathwayRule:
    classification: PathwayClassification
    requires_any: tuple[str, ...]
    excludes: tuple[str, ...] = ()

    def matches(self, interval_lower: str) -> bool:
        if any(word in interval_lower for word in self.excludes):
            return False
        return any(word in interval_lower for word in self.requires_any)


PATHWAY_RULES: tuple[PathwayRule, ...] = (
    PathwayRule(PATHWAY_A, requires_any=("augmented",)),
    PathwayRule(PATHWAY_B, requires_any=("minor",), excludes=("both",)),
    PathwayRule(PATHWAY_C, requires_any=("both", "superposition", "janus")),
)

PATHWAYS_BY_TAG = {rule.classification.pathway: rule.classification for rule in PATHWAY_RULES}


def classify_interval(interval_name: str) -> PathwayClassification:
    """Map an interval name to its pathway.

    Raises:
        UnrecognizedInterpretation: If no rule matches.
    """
    interval_lower = interval_name.lower()
    for rule in PATHWAY_RULES:
        if rule.matches(interval_lower):
            return rule.classification
    raise UnrecognizedInterpretation(interval_name=interval_name)
