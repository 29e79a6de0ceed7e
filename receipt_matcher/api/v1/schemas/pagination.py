"""Page metadata for paginated list endpoints."""

import math

from pydantic import BaseModel

ITEMS_PER_PAGE = 50


class PaginationMetadata(BaseModel):
    """Position of the current page within the full result set.

    first_item and last_item are 1-based, or 0 when there are no items.
    """
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool
    first_item: int
    last_item: int


def calculate_pagination(page_number: int, total_count: int) -> PaginationMetadata:
    """Compute page metadata for a 1-based page number."""
    total_pages = math.ceil(total_count / ITEMS_PER_PAGE)
    return PaginationMetadata(
        page_number=page_number,
        page_size=ITEMS_PER_PAGE,
        total_count=total_count,
        total_pages=total_pages,
        has_previous_page=page_number > 1,
        has_next_page=page_number < total_pages,
        first_item=(page_number - 1) * ITEMS_PER_PAGE + 1 if total_count > 0 else 0,
        last_item=min(page_number * ITEMS_PER_PAGE, total_count) if total_count > 0 else 0,
    )
