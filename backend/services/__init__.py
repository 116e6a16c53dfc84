"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .announcement_service import AnnouncementService
from .contact_service import ContactService
from .report_query_service import ReportQueryService
from .report_service import ReportService
from .stats_service import StatsService
from .user_service import UserService
from .vote_service import VoteService

__all__ = [
    "AnnouncementService",
    "ContactService",
    "ReportQueryService",
    "ReportService",
    "StatsService",
    "UserService",
    "VoteService",
]
