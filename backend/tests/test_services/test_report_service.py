"""Tests for ReportService."""

from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

import models.schemas as schemas
import repositories.db_models as db_models
from models.exceptions import (
    ReportNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from repositories.report_repository import ReportRepository
from services.report_service import ReportService
from services.vote_service import VoteService


def _report_data(**overrides) -> schemas.ReportCreate:
    data = {
        "title": "Open drain on main road",
        "description": "The drain next to the chief's camp is uncovered.",
        "category": db_models.ReportCategory.ENVIRONMENT,
        "ward": "Lindi",
    }
    data.update(overrides)
    return schemas.ReportCreate(**data)


class TestCreateReport:
    """Test cases for report creation."""

    def test_create_report_defaults(self, db_session, test_user):
        """A new report is pending, not urgent and has no votes."""
        report = ReportService.create_report(db_session, _report_data(), test_user.id)

        assert report.id is not None
        assert report.user_id == test_user.id
        assert report.status == db_models.ReportStatus.PENDING
        assert report.is_urgent is False
        assert report.vote_count == 0
        assert report.created_at is not None

    def test_create_report_assigns_distinct_ids(self, db_session, test_user):
        first = ReportService.create_report(db_session, _report_data(), test_user.id)
        second = ReportService.create_report(db_session, _report_data(), test_user.id)
        assert first.id != second.id

    def test_create_report_strips_html(self, db_session, test_user):
        """Tags are stripped from title and description."""
        report = ReportService.create_report(
            db_session,
            _report_data(title="<script>x</script>Open drain", description="<b>Deep</b>"),
            test_user.id,
        )
        assert "<" not in report.title
        assert report.description == "Deep"

    @pytest.mark.parametrize("field", ["title", "description", "ward"])
    def test_create_report_requires_field(self, db_session, test_user, field):
        """Empty required fields are rejected and nothing is stored."""
        with pytest.raises(ValidationException) as exc_info:
            ReportService.create_report(
                db_session, _report_data(**{field: "   "}), test_user.id
            )

        assert field in exc_info.value.message
        assert db_session.query(db_models.Report).count() == 0

    def test_create_report_unknown_ward(self, db_session, test_user):
        with pytest.raises(ValidationException):
            ReportService.create_report(
                db_session, _report_data(ward="Atlantis"), test_user.id
            )

    def test_create_report_drops_unsafe_image_path(self, db_session, test_user):
        report = ReportService.create_report(
            db_session, _report_data(image_path="javascript:alert(1)"), test_user.id
        )
        assert report.image_path == ""


class TestReportLifecycle:
    """Test cases for status and urgent flag changes."""

    def test_set_status_in_progress(self, db_session, test_report):
        report = ReportService.set_status(
            db_session, test_report.id, db_models.ReportStatus.IN_PROGRESS
        )
        assert report.status == db_models.ReportStatus.IN_PROGRESS

    def test_resolved_report_can_be_reopened(self, db_session, test_report):
        """Transitions are not restricted."""
        ReportService.set_status(
            db_session, test_report.id, db_models.ReportStatus.RESOLVED
        )
        report = ReportService.set_status(
            db_session, test_report.id, db_models.ReportStatus.PENDING
        )
        assert report.status == db_models.ReportStatus.PENDING

    def test_set_status_missing_report(self, db_session):
        with pytest.raises(ReportNotFoundException):
            ReportService.set_status(db_session, 99999, db_models.ReportStatus.RESOLVED)

    def test_set_urgent_independent_of_status(self, db_session, test_report):
        """Urgent can be set on a resolved report and status is untouched."""
        ReportService.set_status(
            db_session, test_report.id, db_models.ReportStatus.RESOLVED
        )
        report = ReportService.set_urgent(db_session, test_report.id, True)

        assert report.is_urgent is True
        assert report.status == db_models.ReportStatus.RESOLVED

    def test_set_urgent_missing_report(self, db_session):
        with pytest.raises(ReportNotFoundException):
            ReportService.set_urgent(db_session, 99999, True)

    def test_update_status_with_urgent(self, db_session, test_report):
        report = ReportService.update_status(
            db_session,
            test_report.id,
            db_models.ReportStatus.IN_PROGRESS,
            is_urgent=True,
        )
        assert report.status == db_models.ReportStatus.IN_PROGRESS
        assert report.is_urgent is True

    def test_update_status_failure_changes_nothing(self, db_session, test_report):
        """Status and urgent flag are written together or not at all."""
        failure = OperationalError("UPDATE reports", {}, Exception("database is locked"))
        with patch.object(ReportRepository, "save", side_effect=failure):
            with pytest.raises(StoreUnavailableException) as exc_info:
                ReportService.update_status(
                    db_session,
                    test_report.id,
                    db_models.ReportStatus.RESOLVED,
                    is_urgent=True,
                )

        assert exc_info.value.operation == "update_status"
        db_session.refresh(test_report)
        assert test_report.status == db_models.ReportStatus.PENDING
        assert test_report.is_urgent is False

    def test_update_status_without_urgent_keeps_flag(self, db_session, test_report):
        ReportService.set_urgent(db_session, test_report.id, True)
        report = ReportService.update_status(
            db_session, test_report.id, db_models.ReportStatus.IN_PROGRESS
        )
        assert report.is_urgent is True

    def test_update_status_missing_report(self, db_session):
        with pytest.raises(ReportNotFoundException):
            ReportService.update_status(
                db_session, 99999, db_models.ReportStatus.RESOLVED
            )

    def test_lifecycle_does_not_touch_votes(
        self, db_session, test_report, other_user
    ):
        """Status and urgent changes leave vote_count alone."""
        VoteService.cast_vote(db_session, test_report.id, other_user.id)
        report = ReportService.update_status(
            db_session, test_report.id, db_models.ReportStatus.RESOLVED, is_urgent=True
        )
        assert report.vote_count == 1


class TestReportQueries:
    """Test cases for report lookups and deletion."""

    def test_get_report(self, db_session, test_report):
        assert ReportService.get_report(db_session, test_report.id).id == test_report.id

    def test_get_report_missing(self, db_session):
        with pytest.raises(ReportNotFoundException):
            ReportService.get_report(db_session, 99999)

    def test_get_reports_by_user(self, db_session, make_report, test_user, other_user):
        make_report(title="Mine")
        make_report(title="Theirs", user_id=other_user.id)

        reports = ReportService.get_reports_by_user(db_session, test_user.id)
        assert [r.title for r in reports] == ["Mine"]

    def test_get_recent_reports_limit(self, db_session, make_report):
        for i in range(7):
            make_report(title=f"Report {i}")

        recent = ReportService.get_recent_reports(db_session)
        assert len(recent) == 5
        assert recent[0].title == "Report 6"

    def test_delete_report_removes_votes(self, db_session, test_report, other_user):
        VoteService.cast_vote(db_session, test_report.id, other_user.id)
        ReportService.delete_report(db_session, test_report.id)

        assert db_session.query(db_models.Report).count() == 0
        assert db_session.query(db_models.Vote).count() == 0

    def test_delete_report_missing(self, db_session):
        with pytest.raises(ReportNotFoundException):
            ReportService.delete_report(db_session, 99999)
