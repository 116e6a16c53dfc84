"""
Announcement repository for database operations.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class AnnouncementRepository(BaseRepository[db_models.Announcement]):
    """Repository for Announcement entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize announcement repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.Announcement, db)

    def get_unexpired(
        self, not_expired_before: datetime, ward: Optional[str] = None
    ) -> List[db_models.Announcement]:
        """
        Get announcements that have not expired, in insertion order.

        Args:
            not_expired_before: Start of the current day; announcements whose
                expires_at falls before it are excluded
            ward: When given, keep only announcements targeted at this ward
                or at every ward

        Returns:
            List of announcements ordered by id
        """
        query = self.db.query(db_models.Announcement).filter(
            or_(
                db_models.Announcement.expires_at.is_(None),
                db_models.Announcement.expires_at >= not_expired_before,
            )
        )
        if ward is not None:
            query = query.filter(
                db_models.Announcement.target_ward.in_([db_models.ALL_WARDS, ward])
            )
        return query.order_by(db_models.Announcement.id.asc()).all()
