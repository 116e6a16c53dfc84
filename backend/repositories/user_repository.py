"""
User repository for database operations.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class UserRepository(BaseRepository[db_models.User]):
    """Repository for User entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize user repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.User, db)

    def get_by_email(self, email: str) -> Optional[db_models.User]:
        """
        Get user by email.

        Args:
            email: User email

        Returns:
            User if found, None otherwise
        """
        return (
            self.db.query(db_models.User).filter(db_models.User.email == email).first()
        )

    def email_exists(self, email: str) -> bool:
        """Check if a user with this email is already registered."""
        return (
            self.db.query(db_models.User.id)
            .filter(db_models.User.email == email)
            .first()
            is not None
        )

    def get_residents(
        self,
        ward: Optional[str] = None,
        status: Optional[db_models.UserStatus] = None,
    ) -> List[db_models.User]:
        """
        Get resident accounts, newest first.

        Args:
            ward: Optional ward filter
            status: Optional account status filter

        Returns:
            List of resident users
        """
        query = self.db.query(db_models.User).filter(
            db_models.User.role == db_models.UserRole.RESIDENT
        )
        if ward is not None:
            query = query.filter(db_models.User.ward == ward)
        if status is not None:
            query = query.filter(db_models.User.status == status)
        return query.order_by(
            db_models.User.created_at.desc(), db_models.User.id.desc()
        ).all()
