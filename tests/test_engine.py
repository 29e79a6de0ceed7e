"""Tests for the matching engine against a database."""

from datetime import date, timedelta

import pytest

from receipt_matcher.matching.decision import AssignForReview, AutoMatch, NoAction
from receipt_matcher.matching.engine import (
    evaluate_pending_receipts,
    evaluate_receipt,
    find_transactions_in_date_window,
    list_unmatched_receipts,
)

TODAY = date(2024, 2, 1)


class TestWorkedExamples:
    """End-to-end decisions for the worked examples."""

    def test_exact_match_is_auto_match(self, db, add_transaction, add_receipt) -> None:
        txn = add_transaction(date(2024, 1, 15), "Costco", "25.00")
        receipt = add_receipt("2024-01-15 Costco $25.00.pdf")

        decision = evaluate_receipt(db, receipt, today=TODAY).decision

        assert isinstance(decision, AutoMatch)
        assert decision.candidate.transaction.id == txn.id

    def test_two_weeks_apart_goes_to_review(self, db, add_transaction, add_receipt) -> None:
        txn = add_transaction(date(2024, 1, 15), "Amazon", "49.99")
        receipt = add_receipt("2024-01-01 Amazon $49.99.pdf")

        decision = evaluate_receipt(db, receipt, today=TODAY).decision

        assert isinstance(decision, AssignForReview)
        assert [c.transaction.id for c in decision.candidates] == [txn.id]

    def test_missing_amount_goes_to_review(self, db, add_transaction, add_receipt) -> None:
        add_transaction(date(2024, 1, 15), "Costco", "25.00")
        receipt = add_receipt("2024-01-15 Costco.pdf")

        decision = evaluate_receipt(db, receipt, today=TODAY).decision

        assert isinstance(decision, AssignForReview)

    def test_amount_within_tolerance_goes_to_review(self, db, add_transaction, add_receipt) -> None:
        add_transaction(date(2024, 1, 15), "Shell Gas Station", "48.00")
        receipt = add_receipt("2024-01-15 Shell $45.00.pdf")

        decision = evaluate_receipt(db, receipt, today=TODAY).decision

        assert isinstance(decision, AssignForReview)

    def test_two_exact_matches_go_to_review(self, db, add_transaction, add_receipt) -> None:
        first = add_transaction(date(2024, 1, 15), "Costco", "25.00")
        second = add_transaction(date(2024, 1, 15), "Costco", "-25.00")
        receipt = add_receipt("2024-01-15 Costco $25.00.pdf")

        decision = evaluate_receipt(db, receipt, today=TODAY).decision

        assert isinstance(decision, AssignForReview)
        assert {c.transaction.id for c in decision.candidates} == {first.id, second.id}


class TestEvaluateReceipt:
    """Tests for evaluate_receipt beyond the worked examples."""

    def test_no_date_is_no_action(self, db, add_transaction, add_receipt) -> None:
        add_transaction(date(2024, 1, 15), "Costco", "25.00")
        receipt = add_receipt("Costco $25.00.pdf")

        evaluation = evaluate_receipt(db, receipt, today=TODAY)

        assert evaluation.decision == NoAction()
        assert evaluation.parsed.payee == "Costco"

    def test_nothing_in_window_is_no_action(self, db, add_transaction, add_receipt) -> None:
        add_transaction(date(2023, 6, 1), "Costco", "25.00")
        receipt = add_receipt("2024-01-15 Costco $25.00.pdf")

        assert evaluate_receipt(db, receipt, today=TODAY).decision == NoAction()

    def test_month_day_filename_uses_reference_date(self, db, add_transaction, add_receipt) -> None:
        txn = add_transaction(date(2023, 12, 28), "Costco", "25.00")
        receipt = add_receipt("12-28 Costco $25.00.pdf")

        evaluation = evaluate_receipt(db, receipt, today=date(2024, 1, 5))

        assert evaluation.parsed.date == date(2023, 12, 28)
        assert isinstance(evaluation.decision, AutoMatch)
        assert evaluation.decision.candidate.transaction.id == txn.id

    def test_other_tenants_transactions_are_ignored(self, db, add_transaction, add_receipt) -> None:
        add_transaction(date(2024, 1, 15), "Costco", "25.00", tenant_id="tenant-b")
        receipt = add_receipt("2024-01-15 Costco $25.00.pdf", tenant_id="tenant-a")

        assert evaluate_receipt(db, receipt, today=TODAY).decision == NoAction()

    def test_attached_transactions_are_not_candidates(self, db, add_transaction, add_receipt) -> None:
        taken = add_transaction(date(2024, 1, 15), "Costco", "25.00")
        add_receipt("2024-01-15 Costco $25.00 (first).pdf", transaction=taken)
        receipt = add_receipt("2024-01-15 Costco $25.00 (second).pdf")

        assert evaluate_receipt(db, receipt, today=TODAY).decision == NoAction()


class TestFindTransactionsInDateWindow:
    """Tests for the candidate pool query."""

    @pytest.mark.parametrize(
        "offset,included",
        [(0, True), (20, True), (-21, True), (21, True), (22, False), (-22, False)],
    )
    def test_window_is_inclusive(self, db, add_transaction, offset: int, included: bool) -> None:
        center = date(2024, 1, 15)
        txn = add_transaction(center + timedelta(days=offset), "Costco", "25.00")

        pool = find_transactions_in_date_window(db, "tenant-a", center, 21)

        assert (txn in pool) is included

    def test_ordered_by_date(self, db, add_transaction) -> None:
        later = add_transaction(date(2024, 1, 20), "Costco", "25.00")
        earlier = add_transaction(date(2024, 1, 10), "Costco", "25.00")

        pool = find_transactions_in_date_window(db, "tenant-a", date(2024, 1, 15), 21)

        assert pool == [earlier, later]

    def test_attached_transactions_are_excluded(self, db, add_transaction, add_receipt) -> None:
        taken = add_transaction(date(2024, 1, 15), "Costco", "25.00")
        free = add_transaction(date(2024, 1, 16), "Costco", "25.00")
        add_receipt("2024-01-15 Costco.pdf", transaction=taken)

        pool = find_transactions_in_date_window(db, "tenant-a", date(2024, 1, 15), 21)

        assert pool == [free]


class TestPendingReceipts:
    """Tests for the inbox listing and batch evaluation."""

    def test_only_unmatched_receipts_are_listed(self, db, add_transaction, add_receipt) -> None:
        txn = add_transaction(date(2024, 1, 15), "Costco", "25.00")
        add_receipt("2024-01-15 Costco $25.00.pdf", transaction=txn)
        pending = add_receipt("2024-01-20 Walmart $10.00.pdf")
        add_receipt("2024-01-20 Walmart $10.00.pdf", tenant_id="tenant-b")

        assert list_unmatched_receipts(db, "tenant-a") == [pending]

    def test_evaluates_every_unmatched_receipt(self, db, add_transaction, add_receipt) -> None:
        add_transaction(date(2024, 1, 15), "Costco", "25.00")
        first = add_receipt("2024-01-15 Costco $25.00.pdf")
        second = add_receipt("no date here.pdf")

        evaluations = evaluate_pending_receipts(db, "tenant-a", today=TODAY)
        by_receipt = {e.receipt.id: e.decision for e in evaluations}

        assert set(by_receipt) == {first.id, second.id}
        assert isinstance(by_receipt[first.id], AutoMatch)
        assert by_receipt[second.id] == NoAction()

    def test_decisions_reflect_new_transactions(self, db, add_transaction, add_receipt) -> None:
        receipt = add_receipt("2024-01-15 Costco $25.00.pdf")
        assert evaluate_receipt(db, receipt, today=TODAY).decision == NoAction()

        add_transaction(date(2024, 1, 15), "Costco", "25.00")

        assert isinstance(evaluate_receipt(db, receipt, today=TODAY).decision, AutoMatch)
