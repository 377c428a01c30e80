"""
Standardized pagination parameters for the feed and admin console.
"""

import math
from typing import Annotated

from fastapi import Query

# Offset pagination for the public feed
PaginationSkip = Annotated[int, Query(ge=0, description="Number of records to skip")]
PaginationLimit = Annotated[
    int, Query(ge=1, le=100, description="Maximum number of records to return")
]

# Page-number pagination for admin console tables (1-indexed)
PaginationPage = Annotated[int, Query(ge=1, description="Page number, starting at 1")]


def page_offset(page: int, page_size: int) -> int:
    """Convert a 1-indexed page number to a row offset."""
    return (max(page, 1) - 1) * page_size


def total_pages(total: int, page_size: int) -> int:
    """Number of pages needed to show ``total`` rows (0 when empty)."""
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)
