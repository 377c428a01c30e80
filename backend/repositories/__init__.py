"""
Repository pattern implementation for data access layer.
"""

from .base import BaseRepository
from .report_repository import ReportRepository
from .report_update_repository import ReportUpdateRepository
from .upvote_repository import UpvoteRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ReportRepository",
    "ReportUpdateRepository",
    "UpvoteRepository",
    "UserRepository",
]
