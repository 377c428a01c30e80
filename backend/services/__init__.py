"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .auth_service import AuthService
from .catalog_service import CatalogService
from .report_service import ReportService
from .update_log_service import UpdateLogService
from .upvote_service import UpvoteService
from .user_service import UserService
from .workflow_service import WorkflowService

__all__ = [
    "AuthService",
    "CatalogService",
    "ReportService",
    "UpdateLogService",
    "UpvoteService",
    "UserService",
    "WorkflowService",
]
