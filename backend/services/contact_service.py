"""Contact service for resident messages to the ward administrators."""

from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.sanitization import sanitize_plain_text
from models.exceptions import ContactNotFoundException, ValidationException
from repositories.contact_repository import ContactRepository
from repositories.database import store_errors


class ContactService:
    """Service for contact submissions and admin triage."""

    @staticmethod
    def create_contact(
        db: Session, contact: schemas.ContactCreate, user_id: Optional[int] = None
    ) -> db_models.Contact:
        """
        Store a contact message with status "new".

        Args:
            db: Database session
            contact: Contact form data
            user_id: Author's user ID when submitted while logged in

        Returns:
            Created contact

        Raises:
            ValidationException: If name, subject or message is empty
        """
        full_name = sanitize_plain_text(contact.full_name)
        subject = sanitize_plain_text(contact.subject)
        message = sanitize_plain_text(contact.message)
        if not full_name or not subject or not message:
            raise ValidationException("Name, subject and message are required")

        repo = ContactRepository(db)
        db_contact = db_models.Contact(
            user_id=user_id,
            full_name=full_name,
            email=str(contact.email),
            phone=contact.phone.strip(),
            ward=contact.ward.strip(),
            subject=subject,
            message=message,
            status=db_models.ContactStatus.NEW,
        )
        with store_errors(db, "create_contact"):
            db_contact = repo.create(db_contact)

        logger.info(f"Contact {db_contact.id} received (subject={subject!r})")
        return db_contact

    @staticmethod
    def get_all_contacts(db: Session) -> List[db_models.Contact]:
        """Get all contacts for triage: new, then read, then replied."""
        with store_errors(db, "get_all_contacts"):
            return ContactRepository(db).get_all_for_triage()

    @staticmethod
    def get_contacts_by_user(db: Session, user_id: int) -> List[db_models.Contact]:
        """Get a resident's own contact messages, newest first."""
        with store_errors(db, "get_contacts_by_user"):
            return ContactRepository(db).get_by_user(user_id)

    @staticmethod
    def update_status(
        db: Session,
        contact_id: int,
        status: db_models.ContactStatus,
        admin_notes: str = "",
    ) -> db_models.Contact:
        """
        Set a contact's triage status and admin notes.

        Raises:
            ContactNotFoundException: If contact not found
        """
        repo = ContactRepository(db)
        contact = repo.get_by_id(contact_id)
        if not contact:
            raise ContactNotFoundException(contact_id)

        old_status = contact.status
        with store_errors(db, "update_contact_status"):
            contact.status = status
            contact.admin_notes = sanitize_plain_text(admin_notes)
            repo.save(contact)

        logger.info(f"Contact {contact_id} status {old_status.value} -> {status.value}")
        return contact
