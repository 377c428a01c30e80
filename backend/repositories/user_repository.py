"""
User repository for database operations.
"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class UserRepository(BaseRepository[db_models.User]):
    """Repository for User entity database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.User, db)

    def get_by_email(self, email: str) -> Optional[db_models.User]:
        """
        Get user by email address (case-insensitive).

        Args:
            email: Email address

        Returns:
            User if found, None otherwise
        """
        return (
            self.db.query(db_models.User)
            .filter(func.lower(db_models.User.email) == email.lower())
            .first()
        )

    def get_by_username(self, username: str) -> Optional[db_models.User]:
        """Get user by exact username."""
        return (
            self.db.query(db_models.User)
            .filter(db_models.User.username == username)
            .first()
        )

    def search_by_role(
        self,
        role: db_models.UserRole,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[db_models.User], int]:
        """
        List users holding a role, newest first, with optional free-text search.

        Args:
            role: Role to filter on
            search: Optional term matched against username and full name
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            Tuple of (users on this page, total matching users)
        """
        query = self.db.query(db_models.User).filter(db_models.User.role == role)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(db_models.User.username).like(search_term),
                    func.lower(db_models.User.full_name).like(search_term),
                )
            )

        total = query.count()
        users = (
            query.order_by(db_models.User.created_at.desc(), db_models.User.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return users, total
