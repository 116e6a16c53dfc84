"""
Database models using SQLAlchemy 2.0 style with Mapped type hints.

Four record sets belong to the reporting core (reports, report_votes,
announcements, contacts). Users are owned by the auth layer; the core only
reads their role, ward and status.
"""

import enum
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repositories.database import Base


class UserRole(str, enum.Enum):
    RESIDENT = "resident"
    ADMIN = "admin"


class UserStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    SUSPENDED = "suspended"


class ReportCategory(str, enum.Enum):
    SECURITY = "security"
    ENVIRONMENT = "environment"
    HEALTH = "health"
    OTHER = "other"


class ReportStatus(str, enum.Enum):
    """Report workflow states, in their natural order."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class AnnouncementCategory(str, enum.Enum):
    INFORMATION = "information"
    WARNING = "warning"
    URGENT = "urgent"
    EVENT = "event"


class AnnouncementPriority(str, enum.Enum):
    PINNED = "pinned"
    NORMAL = "normal"


class ContactStatus(str, enum.Enum):
    NEW = "new"
    READ = "read"
    REPLIED = "replied"


# Announcement target_ward value that matches every ward
ALL_WARDS = "all"


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    ward: Mapped[str] = mapped_column(String(100), nullable=False)
    estate_street: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole), default=UserRole.RESIDENT, nullable=False
    )
    status: Mapped[UserStatus] = mapped_column(
        Enum(UserStatus), default=UserStatus.VERIFIED, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    # Relationships
    reports: Mapped[List["Report"]] = relationship("Report", back_populates="author")
    votes: Mapped[List["Vote"]] = relationship("Vote", back_populates="user")


class Report(Base):
    __tablename__ = "reports"
    __table_args__ = (
        Index("ix_reports_status", "status"),
        Index("ix_reports_ward", "ward"),
        Index("ix_reports_category", "category"),
        Index("ix_reports_created_at", "created_at"),
        Index("ix_reports_vote_count", "vote_count"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[ReportCategory] = mapped_column(
        Enum(ReportCategory), nullable=False
    )
    ward: Mapped[str] = mapped_column(String(100), nullable=False)
    location_details: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_path: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus), default=ReportStatus.PENDING, nullable=False
    )
    is_urgent: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Maintained only by the vote ledger
    vote_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    # Relationships
    author: Mapped["User"] = relationship("User", back_populates="reports")
    votes: Mapped[List["Vote"]] = relationship(
        "Vote", back_populates="report", cascade="all, delete-orphan"
    )


class Vote(Base):
    __tablename__ = "report_votes"
    __table_args__ = (
        UniqueConstraint("report_id", "user_id", name="uq_vote_report_user"),
        Index("ix_report_votes_user", "user_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    report_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("reports.id"), nullable=False
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    # Relationships
    report: Mapped["Report"] = relationship("Report", back_populates="votes")
    user: Mapped["User"] = relationship("User", back_populates="votes")


class Announcement(Base):
    __tablename__ = "announcements"
    __table_args__ = (
        Index("ix_announcements_target_ward", "target_ward"),
        Index("ix_announcements_expires_at", "expires_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    admin_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    title_en: Mapped[str] = mapped_column(String(200), nullable=False)
    title_sw: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    message_en: Mapped[str] = mapped_column(Text, nullable=False)
    message_sw: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[AnnouncementCategory] = mapped_column(
        Enum(AnnouncementCategory),
        default=AnnouncementCategory.INFORMATION,
        nullable=False,
    )
    priority: Mapped[AnnouncementPriority] = mapped_column(
        Enum(AnnouncementPriority),
        default=AnnouncementPriority.NORMAL,
        nullable=False,
    )
    target_ward: Mapped[str] = mapped_column(
        String(100), default=ALL_WARDS, nullable=False
    )
    expires_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    admin: Mapped[Optional["User"]] = relationship("User")


class Contact(Base):
    __tablename__ = "contacts"
    __table_args__ = (Index("ix_contacts_status", "status"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    full_name: Mapped[str] = mapped_column(String(150), nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    ward: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ContactStatus] = mapped_column(
        Enum(ContactStatus), default=ContactStatus.NEW, nullable=False
    )
    admin_notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    user: Mapped[Optional["User"]] = relationship("User")
