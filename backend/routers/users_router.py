"""User profile router endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import StatsService, UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=schemas.User)
def get_my_profile(
    current_user: db_models.User = Depends(auth.get_current_user),
) -> db_models.User:
    return current_user


@router.patch("/me", response_model=schemas.User)
def update_my_profile(
    profile: schemas.UserProfileUpdate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> db_models.User:
    """Update name, email, phone, ward or estate/street of the current user."""
    return UserService.update_profile(db, current_user, profile)


@router.get("/me/stats", response_model=schemas.UserStats)
def get_my_stats(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> schemas.UserStats:
    """Get the current resident's report, vote and resolution counters."""
    return StatsService.user_stats(db, current_user.id)
