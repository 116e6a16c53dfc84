"""
Announcement Service

Resolves which announcements a ward sees. An announcement is visible to ward
W when it targets W or every ward, and it has not expired (expiry is compared
by calendar day, so an announcement expiring today is still shown).

Visible announcements are ordered pinned first, then newest first. The
ordering is recomputed on every call.
"""

from datetime import date, datetime, time, timezone
from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.sanitization import sanitize_plain_text
from models.config import settings
from models.exceptions import AnnouncementNotFoundException, ValidationException
from repositories.announcement_repository import AnnouncementRepository
from repositories.database import store_errors

PRIORITY_RANK = {
    db_models.AnnouncementPriority.PINNED: 1,
    db_models.AnnouncementPriority.NORMAL: 2,
}


def _as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes (as returned by the database) as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _to_naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC for storage; naive input is kept."""
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


def order_announcements(
    announcements: List[db_models.Announcement],
) -> List[db_models.Announcement]:
    """
    Order announcements by priority rank, then created_at descending.

    Both passes use Python's stable sort, so announcements with equal
    priority and equal created_at keep their input order.
    """
    ordered = sorted(
        announcements, key=lambda a: _as_utc(a.created_at), reverse=True
    )
    ordered.sort(key=lambda a: PRIORITY_RANK[a.priority])
    return ordered


class AnnouncementService:
    """Service for ward-targeted announcements."""

    @staticmethod
    def _start_of(today: Optional[date]) -> datetime:
        if today is None:
            today = datetime.now(timezone.utc).date()
        return datetime.combine(today, time.min)

    @staticmethod
    def list_for_ward(
        db: Session, ward: Optional[str] = None, today: Optional[date] = None
    ) -> List[db_models.Announcement]:
        """
        Get the announcements a ward should see, in display order.

        Args:
            db: Database session
            ward: Ward name; None or "all" returns only announcements
                targeted at every ward
            today: Current date (defaults to today in UTC)

        Returns:
            Ordered list of visible announcements
        """
        repo = AnnouncementRepository(db)
        with store_errors(db, "list_announcements_for_ward"):
            candidates = repo.get_unexpired(
                AnnouncementService._start_of(today),
                ward=ward or db_models.ALL_WARDS,
            )
        return order_announcements(candidates)

    @staticmethod
    def list_all(
        db: Session, today: Optional[date] = None
    ) -> List[db_models.Announcement]:
        """Get every unexpired announcement regardless of ward (admin view)."""
        repo = AnnouncementRepository(db)
        with store_errors(db, "list_announcements"):
            candidates = repo.get_unexpired(AnnouncementService._start_of(today))
        return order_announcements(candidates)

    @staticmethod
    def create_announcement(
        db: Session, announcement: schemas.AnnouncementCreate, admin_id: Optional[int]
    ) -> db_models.Announcement:
        """
        Validate and store a new announcement.

        Args:
            db: Database session
            announcement: Announcement data
            admin_id: Publishing admin's user ID

        Returns:
            Created announcement

        Raises:
            ValidationException: If the English title or message is empty,
                or the target ward is unknown
        """
        title_en = sanitize_plain_text(announcement.title_en)
        message_en = sanitize_plain_text(announcement.message_en)
        if not title_en or not message_en:
            raise ValidationException("English title and message are required")

        target_ward = (announcement.target_ward or "").strip() or db_models.ALL_WARDS
        if (
            target_ward != db_models.ALL_WARDS
            and settings.WARDS
            and target_ward not in settings.WARDS
        ):
            raise ValidationException(f"Unknown ward: {target_ward}")

        repo = AnnouncementRepository(db)
        db_announcement = db_models.Announcement(
            admin_id=admin_id,
            title_en=title_en,
            title_sw=sanitize_plain_text(announcement.title_sw),
            message_en=message_en,
            message_sw=sanitize_plain_text(announcement.message_sw),
            category=announcement.category,
            priority=announcement.priority,
            target_ward=target_ward,
            expires_at=_to_naive_utc(announcement.expires_at),
        )
        with store_errors(db, "create_announcement"):
            db_announcement = repo.create(db_announcement)

        logger.info(
            f"Announcement {db_announcement.id} published for ward '{target_ward}' "
            f"(priority={db_announcement.priority.value})"
        )
        return db_announcement

    @staticmethod
    def delete_announcement(db: Session, announcement_id: int) -> None:
        """
        Delete an announcement.

        Raises:
            AnnouncementNotFoundException: If announcement not found
        """
        repo = AnnouncementRepository(db)
        announcement = repo.get_by_id(announcement_id)
        if not announcement:
            raise AnnouncementNotFoundException(announcement_id)

        with store_errors(db, "delete_announcement"):
            repo.delete(announcement)

        logger.info(f"Announcement {announcement_id} deleted")
