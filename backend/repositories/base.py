"""
Generic repository shared by the record-set repositories.

Each subclass binds one SQLAlchemy model and one Session. Writes that span
several statements (casting a vote) use add/rollback and commit once;
single-row writes go through create/save/delete, which commit immediately.
"""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from repositories.database import Base

T = TypeVar("T", bound=Base)  # type: ignore[type-arg]


class BaseRepository(Generic[T]):
    """Primary-key lookups and single-row writes for model T."""

    def __init__(self, model: type[T], db: Session):
        self.model = model
        self.db = db

    def get_by_id(self, id: int) -> T | None:
        """Return the row with this primary key, or None."""
        return self.db.get(self.model, id)

    def exists(self, id: int) -> bool:
        """Check for the row without loading it."""
        return (
            self.db.query(self.model.id).filter(self.model.id == id).first()
            is not None
        )

    def create(self, entity: T) -> T:
        """
        Insert a new row and commit.

        Args:
            entity: Unsaved model instance

        Returns:
            The same instance, refreshed with its id and column defaults
        """
        self.db.add(entity)
        return self.save(entity)

    def save(self, entity: T) -> T:
        """Commit pending changes to entity and reload it."""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        self.db.commit()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
