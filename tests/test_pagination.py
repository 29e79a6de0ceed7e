"""Tests for page metadata and the paginated transaction list."""

from datetime import date, timedelta

from receipt_matcher.api.v1.schemas.pagination import ITEMS_PER_PAGE, calculate_pagination


class TestCalculatePagination:
    """Tests for calculate_pagination."""

    def test_no_items(self) -> None:
        """Test an empty result has no pages and zero item positions."""
        meta = calculate_pagination(1, 0)

        assert meta.total_pages == 0
        assert (meta.first_item, meta.last_item) == (0, 0)
        assert not meta.has_previous_page
        assert not meta.has_next_page

    def test_partial_last_page(self) -> None:
        """Test 120 items give three pages, the last holding 20."""
        meta = calculate_pagination(3, 120)

        assert meta.total_pages == 3
        assert (meta.first_item, meta.last_item) == (101, 120)
        assert meta.has_previous_page
        assert not meta.has_next_page

    def test_exact_multiple(self) -> None:
        """Test a full single page has no next page."""
        meta = calculate_pagination(1, ITEMS_PER_PAGE)

        assert meta.total_pages == 1
        assert meta.last_item == ITEMS_PER_PAGE
        assert not meta.has_next_page


class TestTransactionListPaging:
    """Tests for paging through GET /transactions."""

    def test_second_page(self, client, add_transaction) -> None:
        """Test the oldest transaction lands alone on page two."""
        start = date(2024, 1, 1)
        for offset in range(ITEMS_PER_PAGE + 1):
            add_transaction(start + timedelta(days=offset), f"Payee {offset}", "10.00")

        first = client.get("/api/v1/tenant/tenant-a/transactions").json()
        second = client.get("/api/v1/tenant/tenant-a/transactions", params={"page": 2}).json()

        assert first["total"] == ITEMS_PER_PAGE + 1
        assert len(first["transactions"]) == ITEMS_PER_PAGE
        assert first["pagination"]["has_next_page"]
        assert [t["payee"] for t in second["transactions"]] == ["Payee 0"]
        assert second["pagination"]["first_item"] == ITEMS_PER_PAGE + 1

    def test_page_must_be_positive(self, client) -> None:
        """Test page 0 is rejected."""
        response = client.get("/api/v1/tenant/tenant-a/transactions", params={"page": 0})
        assert response.status_code == 422
