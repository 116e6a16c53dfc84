"""
Repository pattern implementation for data access layer.
"""

from .announcement_repository import AnnouncementRepository
from .base import BaseRepository
from .contact_repository import ContactRepository
from .report_repository import ReportRepository
from .stats_repository import StatsRepository
from .user_repository import UserRepository
from .vote_repository import VoteRepository

__all__ = [
    "AnnouncementRepository",
    "BaseRepository",
    "ContactRepository",
    "ReportRepository",
    "StatsRepository",
    "UserRepository",
    "VoteRepository",
]
