from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from repositories.db_models import (
    ALL_WARDS,
    AnnouncementCategory,
    AnnouncementPriority,
    ContactStatus,
    ReportCategory,
    ReportStatus,
    UserRole,
    UserStatus,
)


# User Schemas
class UserBase(BaseModel):
    full_name: str
    email: EmailStr
    phone: str
    ward: str
    estate_street: str = ""


class UserCreate(UserBase):
    password: str


class UserProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    full_name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    ward: Optional[str] = None
    estate_street: Optional[str] = None


class User(UserBase):
    id: int
    role: UserRole
    status: UserStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResidentStatusUpdate(BaseModel):
    status: UserStatus


# Auth Schemas
class Token(BaseModel):
    access_token: str
    token_type: str
    user: User


class TokenData(BaseModel):
    email: Optional[str] = None


# Report Schemas
class ReportCreate(BaseModel):
    """Resident-submitted report. Author is taken from the session."""

    title: str
    description: str
    category: ReportCategory
    ward: str
    location_details: str = ""
    image_path: str = ""


class Report(BaseModel):
    id: int
    user_id: int
    title: str
    description: str
    category: ReportCategory
    ward: str
    location_details: str
    image_path: str
    status: ReportStatus
    is_urgent: bool
    vote_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportFilter(BaseModel):
    """Conjunctive report filters; every field is optional."""

    category: Optional[ReportCategory] = None
    status: Optional[ReportStatus] = None
    ward: Optional[str] = None
    search: Optional[str] = None


class ReportPage(BaseModel):
    """One page of a report listing."""

    items: List[Report]
    total: int
    page: int
    page_size: int
    total_pages: int


class ReportStatusUpdate(BaseModel):
    status: ReportStatus
    is_urgent: Optional[bool] = None


class ReportUrgentUpdate(BaseModel):
    is_urgent: bool


# Vote Schemas
class VoteResult(BaseModel):
    """Outcome of casting a vote; accepted is False for a repeat vote."""

    accepted: bool
    new_count: int


class VoteStatus(BaseModel):
    has_voted: bool


# Announcement Schemas
class AnnouncementCreate(BaseModel):
    title_en: str
    title_sw: str = ""
    message_en: str
    message_sw: str = ""
    category: AnnouncementCategory = AnnouncementCategory.INFORMATION
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    target_ward: str = ALL_WARDS
    expires_at: Optional[datetime] = None


class Announcement(BaseModel):
    id: int
    admin_id: Optional[int] = None
    title_en: str
    title_sw: str
    message_en: str
    message_sw: str
    category: AnnouncementCategory
    priority: AnnouncementPriority
    target_ward: str
    expires_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# Contact Schemas
class ContactCreate(BaseModel):
    full_name: str
    email: EmailStr
    phone: str = ""
    ward: str = ""
    subject: str
    message: str


class Contact(BaseModel):
    id: int
    user_id: Optional[int] = None
    full_name: str
    email: str
    phone: str
    ward: str
    subject: str
    message: str
    status: ContactStatus
    admin_notes: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactStatusUpdate(BaseModel):
    status: ContactStatus
    admin_notes: str = ""


# Stats Schemas
class ReportStats(BaseModel):
    """Report counts for the admin dashboard, with the trailing-window delta."""

    total: int
    active: int
    resolved: int
    new_7d: int
    urgent_count: int
    new_7d_change_pct: float
    pending: int
    in_progress: int


class ContactStats(BaseModel):
    total: int
    new_count: int
    read_count: int
    replied_count: int


class AdminOverview(BaseModel):
    total_reports: int
    pending_reports: int
    urgent_reports: int
    total_residents: int
    new_contacts: int
    total_contacts: int


class CategoryCount(BaseModel):
    category: ReportCategory
    count: int


class WardCount(BaseModel):
    ward: str
    count: int


class DailyCount(BaseModel):
    date: str = Field(..., description="Calendar day, YYYY-MM-DD")
    count: int


class UserStats(BaseModel):
    reports_submitted: int
    votes_cast: int
    issues_resolved: int
