"""Contact form router for resident messages to the ward office."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.rate_limiter import CONTACT_LIMIT, limiter
from repositories.database import get_db
from services import ContactService

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.post("", response_model=schemas.Contact, status_code=201)
@limiter.limit(CONTACT_LIMIT)
def submit_contact(
    request: Request,
    contact: schemas.ContactCreate,
    db: Session = Depends(get_db),
    current_user: Optional[db_models.User] = Depends(auth.get_current_user_optional),
) -> db_models.Contact:
    """Submit a contact message.

    No authentication required; logged-in residents get the message linked
    to their account. Rate limited to 5 submissions per hour per IP.
    """
    user_id = current_user.id if current_user else None
    return ContactService.create_contact(db, contact, user_id=user_id)


@router.get("/mine", response_model=List[schemas.Contact])
def my_contacts(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> List[db_models.Contact]:
    return ContactService.get_contacts_by_user(db, current_user.id)
