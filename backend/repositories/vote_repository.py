"""
Vote repository for database operations.
"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class VoteRepository(BaseRepository[db_models.Vote]):
    """Repository for Vote entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize vote repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.Vote, db)

    def get_by_report_and_user(
        self, report_id: int, user_id: int
    ) -> Optional[db_models.Vote]:
        """
        Get vote by report and user.

        Args:
            report_id: Report ID
            user_id: User ID

        Returns:
            Vote if found, None otherwise
        """
        return (
            self.db.query(db_models.Vote)
            .filter(
                db_models.Vote.report_id == report_id,
                db_models.Vote.user_id == user_id,
            )
            .first()
        )

    def insert(self, report_id: int, user_id: int) -> db_models.Vote:
        """
        Stage a vote row and flush it without committing.

        The (report_id, user_id) unique constraint is checked by the database
        at flush time, so a duplicate raises IntegrityError here.

        Args:
            report_id: Report ID
            user_id: User ID

        Returns:
            The pending vote
        """
        vote = db_models.Vote(report_id=report_id, user_id=user_id)
        self.db.add(vote)
        self.db.flush()
        return vote

    def count_for_report(self, report_id: int) -> int:
        """Count distinct vote records for a report."""
        return (
            self.db.query(func.count(db_models.Vote.id))
            .filter(db_models.Vote.report_id == report_id)
            .scalar()
            or 0
        )

    def count_by_user(self, user_id: int) -> int:
        """Count votes a user has cast across all reports."""
        return (
            self.db.query(func.count(db_models.Vote.id))
            .filter(db_models.Vote.user_id == user_id)
            .scalar()
            or 0
        )
