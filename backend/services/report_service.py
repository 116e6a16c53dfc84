"""
Report Service

Report creation and the admin-driven lifecycle: status transitions and the
urgent flag.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.sanitization import sanitize_image_path, sanitize_plain_text
from models.config import settings
from models.exceptions import ReportNotFoundException, ValidationException
from repositories.database import store_errors
from repositories.report_repository import ReportRepository


class ReportService:
    """Service for report creation and lifecycle transitions."""

    @staticmethod
    def create_report(
        db: Session, report: schemas.ReportCreate, user_id: int
    ) -> db_models.Report:
        """
        Validate and store a new report.

        The report starts as pending, not urgent, with no votes.

        Args:
            db: Database session
            report: Report data
            user_id: Author's user ID

        Returns:
            Created report

        Raises:
            ValidationException: If title, description, category or ward is
                empty, or the ward is not a known ward
        """
        title = sanitize_plain_text(report.title)
        description = sanitize_plain_text(report.description)
        ward = (report.ward or "").strip()

        missing = [
            name
            for name, value in (
                ("title", title),
                ("description", description),
                ("category", report.category),
                ("ward", ward),
            )
            if not value
        ]
        if missing:
            raise ValidationException(
                f"Missing required field(s): {', '.join(missing)}"
            )

        if settings.WARDS and ward not in settings.WARDS:
            raise ValidationException(f"Unknown ward: {ward}")

        repo = ReportRepository(db)
        db_report = db_models.Report(
            user_id=user_id,
            title=title,
            description=description,
            category=report.category,
            ward=ward,
            location_details=sanitize_plain_text(report.location_details),
            image_path=sanitize_image_path(report.image_path),
            status=db_models.ReportStatus.PENDING,
            is_urgent=False,
            vote_count=0,
        )
        with store_errors(db, "create_report"):
            db_report = repo.create(db_report)

        logger.info(
            f"Report {db_report.id} created by user {user_id} "
            f"(category={db_report.category.value}, ward={db_report.ward})"
        )
        return db_report

    @staticmethod
    def get_report(db: Session, report_id: int) -> db_models.Report:
        """
        Get a report by ID.

        Raises:
            ReportNotFoundException: If report not found
        """
        with store_errors(db, "get_report"):
            report = ReportRepository(db).get_by_id(report_id)
        if not report:
            raise ReportNotFoundException(report_id)
        return report

    @staticmethod
    def set_status(
        db: Session, report_id: int, new_status: db_models.ReportStatus
    ) -> db_models.Report:
        """
        Move a report to a new status.

        Transitions are unrestricted: admins may reopen a resolved report.
        Every transition is logged for audit.

        Args:
            db: Database session
            report_id: Report ID
            new_status: Target status

        Returns:
            Updated report

        Raises:
            ReportNotFoundException: If report not found
        """
        repo = ReportRepository(db)
        report = repo.get_by_id(report_id)
        if not report:
            raise ReportNotFoundException(report_id)

        old_status = report.status
        with store_errors(db, "set_status"):
            report.status = new_status
            repo.save(report)

        logger.info(
            f"Report {report_id} status {old_status.value} -> {new_status.value}"
        )
        return report

    @staticmethod
    def set_urgent(db: Session, report_id: int, flag: bool) -> db_models.Report:
        """
        Set or clear the urgent flag, independently of status.

        Raises:
            ReportNotFoundException: If report not found
        """
        repo = ReportRepository(db)
        report = repo.get_by_id(report_id)
        if not report:
            raise ReportNotFoundException(report_id)

        old_flag = report.is_urgent
        with store_errors(db, "set_urgent"):
            report.is_urgent = flag
            repo.save(report)

        logger.info(f"Report {report_id} urgent {old_flag} -> {flag}")
        return report

    @staticmethod
    def update_status(
        db: Session,
        report_id: int,
        new_status: db_models.ReportStatus,
        is_urgent: Optional[bool] = None,
    ) -> db_models.Report:
        """
        Admin triage update: set status and, when given, the urgent flag.

        Both fields are written in one commit, so a store failure leaves the
        report unchanged.

        Raises:
            ReportNotFoundException: If report not found
            StoreUnavailableException: If the store could not be reached
        """
        repo = ReportRepository(db)
        with store_errors(db, "update_status"):
            report = repo.get_by_id(report_id)
            if not report:
                raise ReportNotFoundException(report_id)

            old_status = report.status
            old_flag = report.is_urgent
            report.status = new_status
            if is_urgent is not None:
                report.is_urgent = is_urgent
            repo.save(report)

        logger.info(
            f"Report {report_id} status {old_status.value} -> {new_status.value}"
        )
        if is_urgent is not None:
            logger.info(f"Report {report_id} urgent {old_flag} -> {is_urgent}")
        return report

    @staticmethod
    def get_reports_by_user(db: Session, user_id: int) -> List[db_models.Report]:
        """Get a resident's own reports, newest first."""
        with store_errors(db, "get_reports_by_user"):
            return ReportRepository(db).get_by_user(user_id)

    @staticmethod
    def get_recent_reports(
        db: Session, limit: Optional[int] = None
    ) -> List[db_models.Report]:
        """Get the newest reports for the dashboard."""
        with store_errors(db, "get_recent_reports"):
            return ReportRepository(db).get_recent(
                limit or settings.RECENT_REPORTS_LIMIT
            )

    @staticmethod
    def delete_report(db: Session, report_id: int) -> None:
        """
        Delete a report and its votes.

        Raises:
            ReportNotFoundException: If report not found
        """
        repo = ReportRepository(db)
        report = repo.get_by_id(report_id)
        if not report:
            raise ReportNotFoundException(report_id)

        with store_errors(db, "delete_report"):
            repo.delete(report)

        logger.warning(f"Report {report_id} deleted")
