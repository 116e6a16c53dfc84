"""
Report Query Service - filtered, vote-ranked, paginated report listings.

A listing is a read-only projection of the reports table at call time:
filters are ANDed together, rows are ranked by vote_count (highest first,
ties kept in newest-first listing order), then cut into 1-indexed pages.
Asking for a page past the end returns no items but still reports the total.
"""

from typing import Optional

from sqlalchemy.orm import Session

import models.schemas as schemas
from helpers.pagination import page_offset, total_pages
from models.config import settings
from models.exceptions import ValidationException
from repositories.database import store_errors
from repositories.report_repository import ReportRepository


class ReportQueryService:
    """Service for report listings."""

    @staticmethod
    def query(
        db: Session,
        report_filter: Optional[schemas.ReportFilter] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> schemas.ReportPage:
        """
        Get one page of reports matching the filter.

        Args:
            db: Database session
            report_filter: Optional category/status/ward/search filters
            page: 1-indexed page number
            page_size: Records per page (defaults to REPORTS_PAGE_SIZE)

        Returns:
            ReportPage with items, total, page, page_size and total_pages

        Raises:
            ValidationException: If page or page_size is out of range
            StoreUnavailableException: If the store could not be reached
        """
        if page_size is None:
            page_size = settings.REPORTS_PAGE_SIZE
        if page < 1:
            raise ValidationException("page must be 1 or greater")
        if page_size < 1 or page_size > settings.REPORTS_MAX_PAGE_SIZE:
            raise ValidationException(
                f"page_size must be between 1 and {settings.REPORTS_MAX_PAGE_SIZE}"
            )

        f = report_filter or schemas.ReportFilter()
        search = f.search.strip() if f.search else None
        ward = f.ward.strip() if f.ward else None

        repo = ReportRepository(db)
        items = []
        with store_errors(db, "query_reports"):
            total = repo.count_filtered(f.category, f.status, ward, search)
            pages = total_pages(total, page_size)
            if page <= pages:
                items = repo.get_filtered_by_votes(
                    category=f.category,
                    status=f.status,
                    ward=ward,
                    search=search,
                    skip=page_offset(page, page_size),
                    limit=page_size,
                )

        return schemas.ReportPage(
            items=[schemas.Report.model_validate(r) for r in items],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=pages,
        )
