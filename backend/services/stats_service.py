"""
Stats Service - dashboard aggregates.

The headline figure compares reports created in the trailing window
[now - 7d, now) against the window before it [now - 14d, now - 7d).
When the earlier window is empty the change is reported as 0.0 rather than
an infinite or undefined percentage.
"""

from datetime import datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from sqlalchemy.orm import Session

import models.schemas as schemas
from models.config import settings
from models.exceptions import ValidationException
from repositories.contact_repository import ContactRepository
from repositories.database import store_errors
from repositories.stats_repository import StatsRepository


def percent_change(current: int, previous: int) -> float:
    """
    Percentage change from previous to current, rounded to one decimal.

    Halves round away from zero. Returns 0.0 when previous is 0.

    Examples:
        >>> percent_change(1, 2)
        -50.0
        >>> percent_change(5, 0)
        0.0
    """
    if previous == 0:
        return 0.0
    change = Decimal(current - previous) / Decimal(previous) * 100
    return float(change.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class StatsService:
    """Service for dashboard statistics."""

    @staticmethod
    def windowed_report_stats(
        db: Session, now: Optional[datetime] = None
    ) -> schemas.ReportStats:
        """
        Get report counts with the trailing-window comparison.

        Args:
            db: Database session
            now: End of the current window (defaults to the current UTC time)

        Returns:
            ReportStats with totals, status buckets, urgent count and the
            new-report delta

        Raises:
            StoreUnavailableException: If the store could not be reached
        """
        if now is None:
            now = datetime.now(timezone.utc)
        window = timedelta(days=settings.STATS_WINDOW_DAYS)

        with store_errors(db, "windowed_report_stats"):
            current = StatsRepository.count_created_between(db, now - window, now)
            previous = StatsRepository.count_created_between(
                db, now - 2 * window, now - window
            )
            counts = StatsRepository.get_status_counts(db)

        return schemas.ReportStats(
            total=counts["total"],
            active=counts["pending"] + counts["in_progress"],
            resolved=counts["resolved"],
            new_7d=current,
            urgent_count=counts["urgent"],
            new_7d_change_pct=percent_change(current, previous),
            pending=counts["pending"],
            in_progress=counts["in_progress"],
        )

    @staticmethod
    def contact_stats(db: Session) -> schemas.ContactStats:
        """Count contact messages by status."""
        with store_errors(db, "contact_stats"):
            counts = ContactRepository(db).get_status_counts()
        return schemas.ContactStats(**counts)

    @staticmethod
    def admin_overview(db: Session) -> schemas.AdminOverview:
        """Get the headline counters for the admin landing page."""
        with store_errors(db, "admin_overview"):
            reports = StatsRepository.get_status_counts(db)
            contacts = ContactRepository(db).get_status_counts()
            residents = StatsRepository.count_residents(db)
        return schemas.AdminOverview(
            total_reports=reports["total"],
            pending_reports=reports["pending"],
            urgent_reports=reports["urgent"],
            total_residents=residents,
            new_contacts=contacts["new_count"],
            total_contacts=contacts["total"],
        )

    @staticmethod
    def reports_by_category(db: Session) -> List[schemas.CategoryCount]:
        """Count reports per category, in category order."""
        with store_errors(db, "reports_by_category"):
            rows = StatsRepository.count_by_category(db)
        return [schemas.CategoryCount(**row) for row in rows]

    @staticmethod
    def reports_by_ward(db: Session) -> List[schemas.WardCount]:
        """Count reports per ward, in ward name order."""
        with store_errors(db, "reports_by_ward"):
            rows = StatsRepository.count_by_ward(db)
        return [schemas.WardCount(**row) for row in rows]

    @staticmethod
    def reports_over_time(
        db: Session, days: Optional[int] = None, now: Optional[datetime] = None
    ) -> List[schemas.DailyCount]:
        """
        Get per-day report counts for the last N days.

        Args:
            db: Database session
            days: Look-back in days (defaults to REPORTS_OVER_TIME_DEFAULT_DAYS)
            now: Reference time (defaults to the current UTC time)

        Returns:
            Daily counts in ascending date order; days without reports are omitted

        Raises:
            ValidationException: If days is not positive
        """
        if days is None:
            days = settings.REPORTS_OVER_TIME_DEFAULT_DAYS
        if days < 1:
            raise ValidationException("days must be 1 or greater")
        if now is None:
            now = datetime.now(timezone.utc)

        start_day = (now - timedelta(days=days)).date()
        start = datetime.combine(start_day, datetime.min.time())
        with store_errors(db, "reports_over_time"):
            rows = StatsRepository.count_per_day_since(db, start)
        return [schemas.DailyCount(**row) for row in rows]

    @staticmethod
    def user_stats(db: Session, user_id: int) -> schemas.UserStats:
        """Get a resident's own activity counters."""
        with store_errors(db, "user_stats"):
            activity = StatsRepository.get_user_activity(db, user_id)
        return schemas.UserStats(**activity)
