"""Tests for the database bootstrap script."""

import init_db
import repositories.db_models as db_models
from conftest import TestingSessionLocal, engine
from models.config import settings


class TestInitDb:
    def test_seeds_admin_once(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "engine", engine)
        monkeypatch.setattr(init_db, "SessionLocal", TestingSessionLocal)

        assert init_db.init_db() is True
        assert init_db.init_db() is False

        admins = (
            db_session.query(db_models.User)
            .filter(db_models.User.role == db_models.UserRole.ADMIN)
            .all()
        )
        assert len(admins) == 1
        assert admins[0].email == settings.ADMIN_EMAIL.lower()

    def test_skips_without_credentials(self, db_session, monkeypatch):
        monkeypatch.setattr(init_db, "engine", engine)
        monkeypatch.setattr(init_db, "SessionLocal", TestingSessionLocal)
        monkeypatch.setattr(settings, "ADMIN_PASSWORD", None)

        assert init_db.init_db() is False
        assert db_session.query(db_models.User).count() == 0
