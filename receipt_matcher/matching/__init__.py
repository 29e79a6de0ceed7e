from receipt_matcher.matching.engine import evaluate_receipt, evaluate_pending_receipts, ReceiptEvaluation
from receipt_matcher.matching.scoring import score_pair, ScoreResult
from receipt_matcher.matching.decision import AutoMatch, AssignForReview, NoAction, MatchDecision

__all__ = [
    "evaluate_receipt",
    "evaluate_pending_receipts",
    "ReceiptEvaluation",
    "score_pair",
    "ScoreResult",
    "AutoMatch",
    "AssignForReview",
    "NoAction",
    "MatchDecision",
]
