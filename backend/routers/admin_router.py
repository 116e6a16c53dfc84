"""Admin dashboard endpoints: report triage, announcements, contacts,
statistics and resident accounts.

Every route requires the admin role. Domain exceptions are caught by the
centralized exception handlers in main.py.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services import (
    AnnouncementService,
    ContactService,
    ReportService,
    StatsService,
    UserService,
)

router = APIRouter(
    prefix="/admin", tags=["admin"], dependencies=[Depends(auth.get_admin_user)]
)

# Maximum lookback for the reports-over-time chart
MAX_OVER_TIME_DAYS = 365


# Reports


@router.patch("/reports/{report_id}/status", response_model=schemas.Report)
def update_report_status(
    report_id: int,
    update: schemas.ReportStatusUpdate,
    db: Session = Depends(get_db),
) -> db_models.Report:
    """Set a report's status and, optionally, its urgent flag."""
    return ReportService.update_status(
        db, report_id, update.status, is_urgent=update.is_urgent
    )


@router.patch("/reports/{report_id}/urgent", response_model=schemas.Report)
def update_report_urgent(
    report_id: int,
    update: schemas.ReportUrgentUpdate,
    db: Session = Depends(get_db),
) -> db_models.Report:
    return ReportService.set_urgent(db, report_id, update.is_urgent)


@router.delete("/reports/{report_id}", status_code=204)
def delete_report(report_id: int, db: Session = Depends(get_db)) -> None:
    ReportService.delete_report(db, report_id)


# Announcements


@router.get("/announcements", response_model=List[schemas.Announcement])
def list_announcements(db: Session = Depends(get_db)) -> List[db_models.Announcement]:
    """Get every unexpired announcement, across all wards."""
    return AnnouncementService.list_all(db)


@router.post("/announcements", response_model=schemas.Announcement, status_code=201)
def create_announcement(
    announcement: schemas.AnnouncementCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_admin_user),
) -> db_models.Announcement:
    return AnnouncementService.create_announcement(db, announcement, current_user.id)


@router.delete("/announcements/{announcement_id}", status_code=204)
def delete_announcement(announcement_id: int, db: Session = Depends(get_db)) -> None:
    AnnouncementService.delete_announcement(db, announcement_id)


# Contacts


@router.get("/contacts", response_model=List[schemas.Contact])
def list_contacts(db: Session = Depends(get_db)) -> List[db_models.Contact]:
    """Get contact messages in triage order: new, read, replied."""
    return ContactService.get_all_contacts(db)


@router.patch("/contacts/{contact_id}", response_model=schemas.Contact)
def update_contact_status(
    contact_id: int,
    update: schemas.ContactStatusUpdate,
    db: Session = Depends(get_db),
) -> db_models.Contact:
    return ContactService.update_status(
        db, contact_id, update.status, admin_notes=update.admin_notes
    )


# Statistics


@router.get("/stats", response_model=schemas.AdminOverview)
def get_overview(db: Session = Depends(get_db)) -> schemas.AdminOverview:
    return StatsService.admin_overview(db)


@router.get("/stats/reports", response_model=schemas.ReportStats)
def get_report_stats(db: Session = Depends(get_db)) -> schemas.ReportStats:
    """Report counts with the week-over-week change in new reports."""
    return StatsService.windowed_report_stats(db)


@router.get("/stats/contacts", response_model=schemas.ContactStats)
def get_contact_stats(db: Session = Depends(get_db)) -> schemas.ContactStats:
    return StatsService.contact_stats(db)


@router.get("/stats/by-category", response_model=List[schemas.CategoryCount])
def get_reports_by_category(
    db: Session = Depends(get_db),
) -> List[schemas.CategoryCount]:
    return StatsService.reports_by_category(db)


@router.get("/stats/by-ward", response_model=List[schemas.WardCount])
def get_reports_by_ward(db: Session = Depends(get_db)) -> List[schemas.WardCount]:
    return StatsService.reports_by_ward(db)


@router.get("/stats/over-time", response_model=List[schemas.DailyCount])
def get_reports_over_time(
    days: Optional[int] = Query(None, ge=1, le=MAX_OVER_TIME_DAYS),
    db: Session = Depends(get_db),
) -> List[schemas.DailyCount]:
    """Per-day report counts for the last N days (default 30)."""
    return StatsService.reports_over_time(db, days=days)


# Residents


@router.get("/residents", response_model=List[schemas.User])
def list_residents(
    ward: Optional[str] = None,
    status: Optional[db_models.UserStatus] = None,
    db: Session = Depends(get_db),
) -> List[db_models.User]:
    return UserService.get_residents(db, ward=ward, status=status)


@router.patch("/residents/{user_id}/status", response_model=schemas.User)
def update_resident_status(
    user_id: int,
    update: schemas.ResidentStatusUpdate,
    db: Session = Depends(get_db),
) -> db_models.User:
    """Verify or suspend a resident account."""
    return UserService.update_resident_status(db, user_id, update.status)
