"""
Report repository for database operations.
"""

from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

import repositories.db_models as db_models
from .base import BaseRepository


def escape_like(text: str) -> str:
    """
    Escape special LIKE pattern characters for safe use in SQL LIKE queries.

    Args:
        text: The text to escape

    Returns:
        Escaped text safe for use in LIKE patterns
    """
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class ReportRepository(BaseRepository[db_models.Report]):
    """Repository for Report entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize report repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.Report, db)

    def _filtered(
        self,
        category: Optional[db_models.ReportCategory] = None,
        status: Optional[db_models.ReportStatus] = None,
        ward: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Query:
        """
        Build a query with the conjunctive report filters applied.

        Each filter is skipped when None. Search matches title OR description
        as a case-insensitive substring.
        """
        query = self.db.query(db_models.Report)

        if category is not None:
            query = query.filter(db_models.Report.category == category)
        if status is not None:
            query = query.filter(db_models.Report.status == status)
        if ward is not None:
            query = query.filter(db_models.Report.ward == ward)
        if search:
            pattern = f"%{escape_like(search)}%"
            query = query.filter(
                or_(
                    db_models.Report.title.ilike(pattern, escape="\\"),
                    db_models.Report.description.ilike(pattern, escape="\\"),
                )
            )
        return query

    def count_filtered(
        self,
        category: Optional[db_models.ReportCategory] = None,
        status: Optional[db_models.ReportStatus] = None,
        ward: Optional[str] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count reports matching the filters."""
        return self._filtered(category, status, ward, search).count()

    def get_filtered_by_votes(
        self,
        category: Optional[db_models.ReportCategory] = None,
        status: Optional[db_models.ReportStatus] = None,
        ward: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 10,
    ) -> List[db_models.Report]:
        """
        Get one page of matching reports, most voted first.

        Ties on vote_count keep the listing order (newest first, then
        highest id) so pages never overlap or skip rows.

        Args:
            category: Optional category equality filter
            status: Optional status equality filter
            ward: Optional ward equality filter
            search: Optional substring searched in title and description
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            List of reports
        """
        return (
            self._filtered(category, status, ward, search)
            .order_by(
                db_models.Report.vote_count.desc(),
                db_models.Report.created_at.desc(),
                db_models.Report.id.desc(),
            )
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_by_user(self, user_id: int) -> List[db_models.Report]:
        """
        Get all reports submitted by a user, newest first.

        Args:
            user_id: Author's user ID

        Returns:
            List of reports
        """
        return (
            self.db.query(db_models.Report)
            .filter(db_models.Report.user_id == user_id)
            .order_by(db_models.Report.created_at.desc(), db_models.Report.id.desc())
            .all()
        )

    def get_recent(self, limit: int = 5) -> List[db_models.Report]:
        """Get the most recently created reports."""
        return (
            self.db.query(db_models.Report)
            .order_by(db_models.Report.created_at.desc(), db_models.Report.id.desc())
            .limit(limit)
            .all()
        )

    def increment_vote_count(self, report_id: int) -> int:
        """
        Add one to a report's vote_count in a single UPDATE statement.

        The increment is computed by the database, so concurrent voters on the
        same report never lose an update. Does not commit.

        Args:
            report_id: Report ID

        Returns:
            Number of rows updated; 0 when the report no longer exists
        """
        return self.db.query(db_models.Report).filter(
            db_models.Report.id == report_id
        ).update(
            {db_models.Report.vote_count: db_models.Report.vote_count + 1},
            synchronize_session=False,
        )

    def get_vote_count(self, report_id: int) -> int:
        """Read the stored vote_count straight from the database."""
        count = (
            self.db.query(db_models.Report.vote_count)
            .filter(db_models.Report.id == report_id)
            .scalar()
        )
        return int(count or 0)
