"""Report listing, submission and voting endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import PageNumber, PageSize
from models.config import settings
from repositories.database import get_db
from services import ReportQueryService, ReportService, VoteService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("", response_model=schemas.ReportPage)
def list_reports(
    page: PageNumber = 1,
    page_size: PageSize = settings.REPORTS_PAGE_SIZE,
    category: Optional[db_models.ReportCategory] = None,
    status: Optional[db_models.ReportStatus] = None,
    ward: Optional[str] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
) -> schemas.ReportPage:
    """
    List reports ranked by votes.

    Filters are combined; search matches title or description,
    case-insensitively.
    """
    report_filter = schemas.ReportFilter(
        category=category, status=status, ward=ward, search=search
    )
    return ReportQueryService.query(db, report_filter, page=page, page_size=page_size)


@router.get("/recent", response_model=List[schemas.Report])
def recent_reports(db: Session = Depends(get_db)) -> List[db_models.Report]:
    """Get the newest reports for the dashboard."""
    return ReportService.get_recent_reports(db)


@router.get("/mine", response_model=List[schemas.Report])
def my_reports(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> List[db_models.Report]:
    """Get the current resident's reports, newest first."""
    return ReportService.get_reports_by_user(db, current_user.id)


@router.post("", response_model=schemas.Report, status_code=201)
def submit_report(
    report: schemas.ReportCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> db_models.Report:
    """
    Submit a new report.

    Suspended residents are rejected with 403.
    """
    auth.require_verified(current_user, "submit reports")
    return ReportService.create_report(db, report, current_user.id)


@router.get("/{report_id}", response_model=schemas.Report)
def get_report(report_id: int, db: Session = Depends(get_db)) -> db_models.Report:
    """Get a single report."""
    return ReportService.get_report(db, report_id)


@router.post("/{report_id}/vote", response_model=schemas.VoteResult)
def vote_on_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> schemas.VoteResult:
    """
    Vote for a report.

    A repeat vote is not an error: it returns accepted=false with the
    unchanged count.
    """
    auth.require_verified(current_user, "vote on reports")
    return VoteService.cast_vote(db, report_id, current_user.id)


@router.get("/{report_id}/vote", response_model=schemas.VoteStatus)
def get_my_vote(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
) -> schemas.VoteStatus:
    """Check whether the current resident has voted for a report."""
    return schemas.VoteStatus(
        has_voted=VoteService.has_voted(db, report_id, current_user.id)
    )
