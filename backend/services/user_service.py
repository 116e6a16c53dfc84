"""
User Service

Resident registration, login and account-status administration.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.sanitization import sanitize_plain_text
from models.config import settings
from models.exceptions import (
    InvalidCredentialsException,
    UserAlreadyExistsException,
    UserNotFoundException,
    ValidationException,
)
from repositories.database import store_errors
from repositories.user_repository import UserRepository

MIN_PASSWORD_LENGTH = 8


class UserService:
    """Service for resident accounts."""

    @staticmethod
    def register_user(db: Session, user_data: schemas.UserCreate) -> db_models.User:
        """
        Register a new resident.

        New residents are verified immediately.

        Args:
            db: Database session
            user_data: Registration data

        Returns:
            Created user

        Raises:
            ValidationException: If a required field is empty, the ward is
                unknown or the password is too short
            UserAlreadyExistsException: If the email is already registered
        """
        full_name = sanitize_plain_text(user_data.full_name)
        phone = user_data.phone.strip()
        ward = user_data.ward.strip()
        if not full_name or not phone or not ward or not user_data.password:
            raise ValidationException("Unable to create user. Data is incomplete.")
        if settings.WARDS and ward not in settings.WARDS:
            raise ValidationException(f"Unknown ward: {ward}")
        if len(user_data.password) < MIN_PASSWORD_LENGTH:
            raise ValidationException(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        user_repo = UserRepository(db)
        email = str(user_data.email).lower()
        if user_repo.email_exists(email):
            raise UserAlreadyExistsException("User already exists with this email.")

        new_user = db_models.User(
            full_name=full_name,
            email=email,
            phone=phone,
            ward=ward,
            estate_street=sanitize_plain_text(user_data.estate_street),
            hashed_password=auth.get_password_hash(user_data.password),
            role=db_models.UserRole.RESIDENT,
            status=db_models.UserStatus.VERIFIED,
        )
        with store_errors(db, "register_user"):
            new_user = user_repo.create(new_user)

        logger.info(f"Resident {new_user.id} registered in ward {ward}")
        return new_user

    @staticmethod
    def login(db: Session, email: str, password: str) -> schemas.Token:
        """
        Authenticate and issue an access token.

        Suspended residents can still log in; their status is returned with
        the user so the client can explain what they cannot do.

        Raises:
            InvalidCredentialsException: If email or password is wrong
        """
        user = auth.authenticate_user(db, email.lower(), password)
        if not user:
            raise InvalidCredentialsException("Incorrect email or password")

        if user.status != db_models.UserStatus.VERIFIED:
            logger.warning(f"User {user.id} logged in with status {user.status.value}")

        access_token = auth.create_access_token(data={"sub": user.email})
        return schemas.Token(
            access_token=access_token,
            token_type="bearer",
            user=schemas.User.model_validate(user),
        )

    @staticmethod
    def get_residents(
        db: Session,
        ward: Optional[str] = None,
        status: Optional[db_models.UserStatus] = None,
    ) -> List[db_models.User]:
        """Get resident accounts for the admin residents page."""
        return UserRepository(db).get_residents(ward=ward, status=status)

    @staticmethod
    def update_resident_status(
        db: Session, user_id: int, status: db_models.UserStatus
    ) -> db_models.User:
        """
        Verify, suspend or reset a resident account.

        Raises:
            UserNotFoundException: If no resident has this ID
        """
        user_repo = UserRepository(db)
        user = user_repo.get_by_id(user_id)
        if not user or user.role != db_models.UserRole.RESIDENT:
            raise UserNotFoundException(f"Resident with ID {user_id} not found")

        old_status = user.status
        with store_errors(db, "update_resident_status"):
            user.status = status
            user_repo.save(user)

        logger.info(f"Resident {user_id} status {old_status.value} -> {status.value}")
        return user

    @staticmethod
    def update_profile(
        db: Session, user: db_models.User, profile: schemas.UserProfileUpdate
    ) -> db_models.User:
        """
        Update the current user's own profile.

        Only fields present in the request change. Tokens carry the email,
        so a user who changes it has to log in again.

        Args:
            db: Database session
            user: The authenticated user
            profile: Fields to change

        Returns:
            Updated user

        Raises:
            ValidationException: If a given name, email, phone or ward is
                empty, or the ward is unknown
            UserAlreadyExistsException: If the new email belongs to another user
        """
        changes = profile.model_dump(exclude_unset=True)
        for field in ("full_name", "email", "phone", "ward"):
            if field in changes and not (changes[field] or "").strip():
                raise ValidationException(
                    "Unable to update profile. Data is incomplete."
                )

        if "full_name" in changes:
            changes["full_name"] = sanitize_plain_text(changes["full_name"])
            if not changes["full_name"]:
                raise ValidationException(
                    "Unable to update profile. Data is incomplete."
                )
        if "estate_street" in changes:
            changes["estate_street"] = sanitize_plain_text(changes["estate_street"])
        if "phone" in changes:
            changes["phone"] = changes["phone"].strip()
        if "ward" in changes:
            changes["ward"] = changes["ward"].strip()
            if (
                settings.WARDS
                and user.role == db_models.UserRole.RESIDENT
                and changes["ward"] not in settings.WARDS
            ):
                raise ValidationException(f"Unknown ward: {changes['ward']}")

        user_repo = UserRepository(db)
        with store_errors(db, "update_profile"):
            if "email" in changes:
                changes["email"] = str(changes["email"]).lower()
                if changes["email"] != user.email and user_repo.email_exists(
                    changes["email"]
                ):
                    raise UserAlreadyExistsException(
                        "User already exists with this email."
                    )

            for field, value in changes.items():
                setattr(user, field, value)
            user_repo.save(user)

        logger.info(f"User {user.id} updated profile fields: {sorted(changes)}")
        return user
