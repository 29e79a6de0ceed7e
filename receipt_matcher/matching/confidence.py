"""
Confidence levels and the rule that combines per-criterion scores.

Each of the three criteria (date, amount, payee) scores HIGH, MEDIUM or
NO_MATCH. The overall confidence is deliberately conservative:

  - HIGH   only if all three criteria are HIGH
  - NONE   if fewer than two criteria are MEDIUM or better
  - MEDIUM otherwise

So a receipt whose filename is missing one field can never be auto-matched,
even when the other two fields match exactly.
"""

import enum


class CriterionScore(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    NO_MATCH = "no_match"

    @property
    def rank(self) -> int:
        return _CRITERION_RANK[self]


class Confidence(str, enum.Enum):
    HIGH = "high"
    MEDIUM = "medium"
    NONE = "none"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]


_CRITERION_RANK = {
    CriterionScore.NO_MATCH: 0,
    CriterionScore.MEDIUM: 1,
    CriterionScore.HIGH: 2,
}

_CONFIDENCE_RANK = {
    Confidence.NONE: 0,
    Confidence.MEDIUM: 1,
    Confidence.HIGH: 2,
}


def aggregate_confidence(
    date: CriterionScore,
    amount: CriterionScore,
    payee: CriterionScore,
) -> Confidence:
    """Reduce the three criterion scores to an overall confidence."""
    scores = (date, amount, payee)

    if all(s == CriterionScore.HIGH for s in scores):
        return Confidence.HIGH

    matched = sum(1 for s in scores if s != CriterionScore.NO_MATCH)
    if matched < 2:
        return Confidence.NONE

    return Confidence.MEDIUM
