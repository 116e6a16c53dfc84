"""
Page-number pagination shared by list endpoints and services.
"""

import math
from typing import Annotated

from fastapi import Query

# 1-indexed page numbers
PageNumber = Annotated[int, Query(ge=1, description="Page number, starting at 1")]
PageSize = Annotated[
    int, Query(ge=1, le=100, description="Maximum number of records per page")
]


def total_pages(total: int, page_size: int) -> int:
    """
    Number of pages needed to show total records.

    Args:
        total: Total number of records
        page_size: Records per page (must be positive)

    Returns:
        ceil(total / page_size); 0 when there are no records
    """
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return math.ceil(total / page_size)


def page_offset(page: int, page_size: int) -> int:
    """
    Number of records to skip to reach a 1-indexed page.

    Pages below 1 are treated as page 1.
    """
    return (max(page, 1) - 1) * page_size
