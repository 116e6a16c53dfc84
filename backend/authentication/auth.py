from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBearer,
    OAuth2PasswordBearer,
)
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from models.config import settings
from models.exceptions import (
    AuthenticationException,
    InsufficientPermissionsException,
    UserSuspendedException,
)
from repositories.database import get_db
from repositories.user_repository import UserRepository

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")
optional_oauth2_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def authenticate_user(db: Session, email: str, password: str) -> db_models.User | None:
    user = UserRepository(db).get_by_email(email)
    if not user:
        return None
    if not verify_password(password, str(user.hashed_password)):
        return None
    return user


def _user_from_token(db: Session, token: str) -> db_models.User | None:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    email_value = payload.get("sub")
    if email_value is None:
        return None
    token_data = schemas.TokenData(email=str(email_value))
    return UserRepository(db).get_by_email(str(token_data.email))


async def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> db_models.User:
    """
    Get the current authenticated user from the JWT token.

    Suspended users are still authenticated; routes that need a verified
    account call require_verified with the action being attempted.

    Raises:
        AuthenticationException: If credentials are invalid or user not found.
    """
    try:
        user = _user_from_token(db, token)
    except jwt.exceptions.InvalidTokenError:
        raise AuthenticationException("Could not validate credentials")

    if user is None:
        raise AuthenticationException("Could not validate credentials")
    return user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        optional_oauth2_scheme
    ),
    db: Session = Depends(get_db),
) -> Optional[db_models.User]:
    """
    Get current user if authenticated, otherwise return None.

    An expired token raises so the client knows to log in again; any other
    invalid token is treated as anonymous.
    """
    if credentials is None:
        return None

    try:
        return _user_from_token(db, credentials.credentials)
    except jwt.exceptions.ExpiredSignatureError:
        raise AuthenticationException("Session expired. Please log in again.")
    except jwt.exceptions.InvalidTokenError:
        return None


def require_verified(user: db_models.User, action: str) -> None:
    """
    Reject accounts that are not verified.

    Raises:
        UserSuspendedException: If the account is pending or suspended.
    """
    if user.status != db_models.UserStatus.VERIFIED:
        raise UserSuspendedException(action)


async def get_admin_user(
    current_user: db_models.User = Depends(get_current_user),
) -> db_models.User:
    """
    Require admin role.

    Raises:
        InsufficientPermissionsException: If user is not an admin.
    """
    if current_user.role != db_models.UserRole.ADMIN:
        raise InsufficientPermissionsException("Not enough permissions")
    return current_user
