"""Initialize the database and seed the admin account.

The admin credentials come from ADMIN_EMAIL and ADMIN_PASSWORD in the
environment (or .env). Running the script twice is harmless.
"""

from loguru import logger

from authentication.auth import get_password_hash
from models.config import settings
from repositories.database import Base, SessionLocal, engine
from repositories.db_models import User, UserRole, UserStatus


def init_db() -> bool:
    """Create tables and the admin user if missing.

    Returns:
        True if an admin account was created
    """
    Base.metadata.create_all(bind=engine)

    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        logger.warning("ADMIN_EMAIL/ADMIN_PASSWORD not set; skipping admin seed")
        return False

    db = SessionLocal()
    try:
        email = settings.ADMIN_EMAIL.lower()
        if db.query(User).filter(User.email == email).first():
            logger.info(f"Admin user {email} already exists")
            return False

        admin = User(
            full_name="Ward Administrator",
            email=email,
            phone="",
            ward=settings.ADMIN_WARD,
            estate_street="",
            hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
            role=UserRole.ADMIN,
            status=UserStatus.VERIFIED,
        )
        db.add(admin)
        db.commit()
        logger.info(f"Admin user created: {email}")
        return True
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
