"""
Match decisions handed to the presentation layer.

A decision is one of three plain value types:

  - AutoMatch(candidate)         show a "Match" button with the transaction
  - AssignForReview(candidates)  show an "Assign" button and a review list
  - NoAction()                   no matching affordance

Exactly one HIGH candidate is required for AutoMatch. A second HIGH
candidate forces review, since attaching a receipt to the wrong transaction
is worse than asking the user once.
"""

from dataclasses import dataclass

from receipt_matcher.matching.confidence import Confidence
from receipt_matcher.matching.selector import MatchCandidate


@dataclass(frozen=True)
class AutoMatch:
    candidate: MatchCandidate

    action = "match"


@dataclass(frozen=True)
class AssignForReview:
    candidates: tuple[MatchCandidate, ...]

    action = "assign"


@dataclass(frozen=True)
class NoAction:
    action = "none"


MatchDecision = AutoMatch | AssignForReview | NoAction


def decide(candidates: list[MatchCandidate]) -> MatchDecision:
    """Turn an ordered candidate list into a decision."""
    if not candidates:
        return NoAction()

    high = [c for c in candidates if c.confidence == Confidence.HIGH]
    if len(high) == 1:
        return AutoMatch(candidate=high[0])

    return AssignForReview(candidates=tuple(candidates))
