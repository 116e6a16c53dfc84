"""
Contact repository for database operations.
"""

from typing import List

from sqlalchemy import case, func
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class ContactRepository(BaseRepository[db_models.Contact]):
    """Repository for Contact entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize contact repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.Contact, db)

    def get_all_for_triage(self) -> List[db_models.Contact]:
        """
        Get every contact, unhandled first.

        Ordered new, read, replied; newest first within each status.
        """
        status_rank = case(
            (db_models.Contact.status == db_models.ContactStatus.NEW, 1),
            (db_models.Contact.status == db_models.ContactStatus.READ, 2),
            else_=3,
        )
        return (
            self.db.query(db_models.Contact)
            .order_by(
                status_rank,
                db_models.Contact.created_at.desc(),
                db_models.Contact.id.desc(),
            )
            .all()
        )

    def get_by_user(self, user_id: int) -> List[db_models.Contact]:
        """Get a user's contact messages, newest first."""
        return (
            self.db.query(db_models.Contact)
            .filter(db_models.Contact.user_id == user_id)
            .order_by(db_models.Contact.created_at.desc(), db_models.Contact.id.desc())
            .all()
        )

    def get_status_counts(self) -> dict[str, int]:
        """
        Count contacts grouped by status in a single query.

        Returns:
            Dict with total, new_count, read_count, replied_count
        """
        row = self.db.query(
            func.count(db_models.Contact.id).label("total"),
            func.sum(
                case((db_models.Contact.status == db_models.ContactStatus.NEW, 1), else_=0)
            ).label("new_count"),
            func.sum(
                case((db_models.Contact.status == db_models.ContactStatus.READ, 1), else_=0)
            ).label("read_count"),
            func.sum(
                case(
                    (db_models.Contact.status == db_models.ContactStatus.REPLIED, 1),
                    else_=0,
                )
            ).label("replied_count"),
        ).first()

        if row is None:
            return {"total": 0, "new_count": 0, "read_count": 0, "replied_count": 0}

        return {
            "total": int(row.total or 0),
            "new_count": int(row.new_count or 0),
            "read_count": int(row.read_count or 0),
            "replied_count": int(row.replied_count or 0),
        }
