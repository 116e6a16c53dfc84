"""Public announcement feed."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import AnnouncementService

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.get("", response_model=List[schemas.Announcement])
def list_announcements(
    ward: Optional[str] = None, db: Session = Depends(get_db)
) -> List[db_models.Announcement]:
    """Get unexpired announcements for a ward, pinned first then newest."""
    return AnnouncementService.list_for_ward(db, ward=ward)
