"""Authentication router endpoints."""

from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.rate_limiter import LOGIN_LIMIT, REGISTER_LIMIT, limiter
from repositories.database import get_db
from services import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=schemas.User, status_code=201)
@limiter.limit(REGISTER_LIMIT)
def register(
    request: Request, user: schemas.UserCreate, db: Session = Depends(get_db)
) -> db_models.User:
    """
    Register a new resident.

    Rate limited to 3 per minute.
    """
    return UserService.register_user(db=db, user_data=user)


@router.post("/login", response_model=schemas.Token)
@limiter.limit(LOGIN_LIMIT)
def login(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
) -> schemas.Token:
    """
    Login with email (as username) and password. Rate limited to 5 per minute.

    Domain exceptions are caught by centralized exception handlers.
    """
    return UserService.login(db, form_data.username, form_data.password)


@router.get("/me", response_model=schemas.User)
async def read_users_me(
    current_user: db_models.User = Depends(auth.get_current_user),
) -> db_models.User:
    """Get current user."""
    return current_user
