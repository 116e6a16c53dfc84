"""Tests for AnnouncementService and announcement ordering."""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import (
    AnnouncementNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from repositories.announcement_repository import AnnouncementRepository
from services.announcement_service import AnnouncementService, order_announcements

PINNED = db_models.AnnouncementPriority.PINNED
NORMAL = db_models.AnnouncementPriority.NORMAL
BASE = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)


def _titles(announcements) -> list[str]:
    return [a.title_en for a in announcements]


class TestOrdering:
    """Pinned first, then newest first."""

    def test_pinned_before_normal_regardless_of_age(
        self, db_session, make_announcement
    ):
        make_announcement("Old pinned", priority=PINNED, created_at=BASE)
        make_announcement(
            "New normal", priority=NORMAL, created_at=BASE + timedelta(days=3)
        )
        make_announcement(
            "Newer pinned", priority=PINNED, created_at=BASE + timedelta(days=1)
        )

        result = AnnouncementService.list_for_ward(
            db_session,
            ward="Lindi",
            today=date(2026, 3, 5),
        )
        assert _titles(result) == ["Newer pinned", "Old pinned", "New normal"]

    def test_ties_keep_insertion_order(self, db_session, make_announcement):
        """Equal priority and created_at keep the order the store returned."""
        make_announcement("First", created_at=BASE)
        make_announcement("Second", created_at=BASE)

        result = AnnouncementService.list_for_ward(
            db_session, ward="Lindi", today=date(2026, 3, 5)
        )
        assert _titles(result) == ["First", "Second"]

    def test_order_announcements_empty(self):
        assert order_announcements([]) == []


class TestVisibility:
    """Ward targeting and expiry."""

    def test_ward_sees_own_and_all(self, db_session, make_announcement):
        make_announcement("Everyone", target_ward=db_models.ALL_WARDS)
        make_announcement("Lindi only", target_ward="Lindi")
        make_announcement("Makina only", target_ward="Makina")

        result = AnnouncementService.list_for_ward(db_session, ward="Lindi")
        assert sorted(_titles(result)) == ["Everyone", "Lindi only"]

    def test_no_ward_sees_only_all(self, db_session, make_announcement):
        make_announcement("Everyone", target_ward=db_models.ALL_WARDS)
        make_announcement("Lindi only", target_ward="Lindi")

        result = AnnouncementService.list_for_ward(db_session, ward=None)
        assert _titles(result) == ["Everyone"]

    def test_expiring_today_is_visible(self, db_session, make_announcement):
        """Expiry compares by calendar day."""
        make_announcement(
            "Ends this morning",
            expires_at=datetime(2026, 3, 5, 0, 30, tzinfo=timezone.utc),
        )
        result = AnnouncementService.list_for_ward(
            db_session, ward="Lindi", today=date(2026, 3, 5)
        )
        assert _titles(result) == ["Ends this morning"]

    def test_expired_yesterday_is_hidden(self, db_session, make_announcement):
        make_announcement(
            "Ended yesterday",
            expires_at=datetime(2026, 3, 4, 23, 59, tzinfo=timezone.utc),
        )
        result = AnnouncementService.list_for_ward(
            db_session, ward="Lindi", today=date(2026, 3, 5)
        )
        assert result == []

    def test_no_expiry_never_expires(self, db_session, make_announcement):
        make_announcement("Standing notice", expires_at=None)
        result = AnnouncementService.list_for_ward(
            db_session, ward="Lindi", today=date(2030, 1, 1)
        )
        assert _titles(result) == ["Standing notice"]

    def test_list_all_ignores_ward(self, db_session, make_announcement):
        make_announcement("Lindi only", target_ward="Lindi")
        make_announcement("Makina only", target_ward="Makina")

        assert len(AnnouncementService.list_all(db_session)) == 2


class TestCreateAndDelete:
    """Test cases for publishing and removing announcements."""

    def test_create_announcement_defaults(self, db_session, admin_user):
        announcement = AnnouncementService.create_announcement(
            db_session,
            schemas.AnnouncementCreate(
                title_en="Water rationing", message_en="Taps off on Tuesday."
            ),
            admin_user.id,
        )
        assert announcement.priority == NORMAL
        assert announcement.category == db_models.AnnouncementCategory.INFORMATION
        assert announcement.target_ward == db_models.ALL_WARDS
        assert announcement.admin_id == admin_user.id

    def test_create_announcement_blank_ward_means_all(self, db_session, admin_user):
        announcement = AnnouncementService.create_announcement(
            db_session,
            schemas.AnnouncementCreate(
                title_en="Clean-up day", message_en="Saturday 8am.", target_ward=" "
            ),
            admin_user.id,
        )
        assert announcement.target_ward == db_models.ALL_WARDS

    def test_create_announcement_requires_english_text(self, db_session, admin_user):
        with pytest.raises(ValidationException):
            AnnouncementService.create_announcement(
                db_session,
                schemas.AnnouncementCreate(title_en="", message_en="Body"),
                admin_user.id,
            )

    def test_create_announcement_unknown_ward(self, db_session, admin_user):
        with pytest.raises(ValidationException):
            AnnouncementService.create_announcement(
                db_session,
                schemas.AnnouncementCreate(
                    title_en="Title", message_en="Body", target_ward="Atlantis"
                ),
                admin_user.id,
            )

    def test_delete_announcement(self, db_session, make_announcement):
        announcement = make_announcement("Short-lived")
        AnnouncementService.delete_announcement(db_session, announcement.id)
        assert db_session.query(db_models.Announcement).count() == 0

    def test_delete_missing_announcement(self, db_session):
        with pytest.raises(AnnouncementNotFoundException):
            AnnouncementService.delete_announcement(db_session, 99999)

    def test_offset_expiry_is_stored_as_utc(self, db_session, admin_user):
        """01:00 on the 10th in UTC+3 is still the 9th in UTC."""
        nairobi = timezone(timedelta(hours=3))
        announcement = AnnouncementService.create_announcement(
            db_session,
            schemas.AnnouncementCreate(
                title_en="Water rationing",
                message_en="Taps off overnight.",
                expires_at=datetime(2026, 3, 10, 1, 0, tzinfo=nairobi),
            ),
            admin_user.id,
        )

        assert announcement.expires_at.replace(tzinfo=None) == datetime(
            2026, 3, 9, 22, 0
        )
        assert _titles(
            AnnouncementService.list_for_ward(db_session, today=date(2026, 3, 9))
        ) == ["Water rationing"]
        assert AnnouncementService.list_for_ward(db_session, today=date(2026, 3, 10)) == []


class TestStoreFailures:
    def test_list_for_ward_failure_is_unavailable(self, db_session):
        failure = OperationalError("SELECT announcements", {}, Exception("database is locked"))
        with patch.object(AnnouncementRepository, "get_unexpired", side_effect=failure):
            with pytest.raises(StoreUnavailableException) as exc_info:
                AnnouncementService.list_for_ward(db_session, "Lindi")

        assert exc_info.value.operation == "list_announcements_for_ward"
