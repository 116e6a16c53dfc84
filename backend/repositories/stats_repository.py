"""
Stats Repository - aggregate queries for the admin dashboards.

Like the other aggregation helpers this does not extend BaseRepository: it
reads across reports, votes, users and contacts and never writes, so the
methods are stateless and static.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from repositories.db_models import (
    Report,
    ReportStatus,
    User,
    UserRole,
    Vote,
)


class StatsRepository:
    """Repository for dashboard data aggregation."""

    @staticmethod
    def count_created_between(db: Session, start: datetime, end: datetime) -> int:
        """
        Count reports with start <= created_at < end.

        Args:
            db: Database session
            start: Inclusive lower bound
            end: Exclusive upper bound

        Returns:
            Number of reports created in the window
        """
        return (
            db.query(func.count(Report.id))
            .filter(and_(Report.created_at >= start, Report.created_at < end))
            .scalar()
            or 0
        )

    @staticmethod
    def get_status_counts(db: Session) -> dict[str, int]:
        """
        Get report totals by status plus the urgent count, in one query.

        Returns dict with: total, pending, in_progress, resolved, urgent.
        """
        row = db.query(
            func.count(Report.id).label("total"),
            func.sum(case((Report.status == ReportStatus.PENDING, 1), else_=0)).label(
                "pending"
            ),
            func.sum(
                case((Report.status == ReportStatus.IN_PROGRESS, 1), else_=0)
            ).label("in_progress"),
            func.sum(case((Report.status == ReportStatus.RESOLVED, 1), else_=0)).label(
                "resolved"
            ),
            func.sum(case((Report.is_urgent == True, 1), else_=0)).label("urgent"),  # noqa: E712
        ).first()

        return {
            "total": int(row.total or 0) if row else 0,
            "pending": int(row.pending or 0) if row else 0,
            "in_progress": int(row.in_progress or 0) if row else 0,
            "resolved": int(row.resolved or 0) if row else 0,
            "urgent": int(row.urgent or 0) if row else 0,
        }

    @staticmethod
    def count_by_category(db: Session) -> list[dict[str, Any]]:
        """Count reports per category, ordered by category name."""
        rows = (
            db.query(Report.category, func.count(Report.id).label("count"))
            .group_by(Report.category)
            .order_by(Report.category)
            .all()
        )
        return [{"category": row.category, "count": int(row.count)} for row in rows]

    @staticmethod
    def count_by_ward(db: Session) -> list[dict[str, Any]]:
        """Count reports per ward, ordered by ward name."""
        rows = (
            db.query(Report.ward, func.count(Report.id).label("count"))
            .group_by(Report.ward)
            .order_by(Report.ward)
            .all()
        )
        return [{"ward": row.ward, "count": int(row.count)} for row in rows]

    @staticmethod
    def count_per_day_since(db: Session, start: datetime) -> list[dict[str, Any]]:
        """
        Count reports per calendar day from start onwards.

        Args:
            db: Database session
            start: Earliest created_at to include

        Returns:
            List of {date: "YYYY-MM-DD", count} in ascending date order
        """
        day = func.date(Report.created_at)
        rows = (
            db.query(day.label("day"), func.count(Report.id).label("count"))
            .filter(Report.created_at >= start)
            .group_by(day)
            .order_by(day)
            .all()
        )
        # SQLite returns a string, PostgreSQL a date
        return [{"date": str(row.day), "count": int(row.count)} for row in rows]

    @staticmethod
    def count_residents(db: Session) -> int:
        """Count resident accounts."""
        return (
            db.query(func.count(User.id)).filter(User.role == UserRole.RESIDENT).scalar()
            or 0
        )

    @staticmethod
    def get_user_activity(db: Session, user_id: int) -> dict[str, int]:
        """
        Get one resident's activity counters.

        Returns dict with: reports_submitted, votes_cast, issues_resolved.
        """
        report_row = (
            db.query(
                func.count(Report.id).label("submitted"),
                func.sum(
                    case((Report.status == ReportStatus.RESOLVED, 1), else_=0)
                ).label("resolved"),
            )
            .filter(Report.user_id == user_id)
            .first()
        )
        votes_cast = (
            db.query(func.count(Vote.id)).filter(Vote.user_id == user_id).scalar() or 0
        )
        return {
            "reports_submitted": int(report_row.submitted or 0) if report_row else 0,
            "votes_cast": int(votes_cast),
            "issues_resolved": int(report_row.resolved or 0) if report_row else 0,
        }
