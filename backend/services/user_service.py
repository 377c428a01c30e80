"""
User Service

Handles citizen registration and the admin console's user listing.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import page_offset, total_pages
from helpers.password_validation import validate_password_complexity
from models.config import settings
from models.exceptions import UserAlreadyExistsException, ValidationException
from repositories.user_repository import UserRepository


class UserService:
    """Service for managing user accounts."""

    @staticmethod
    def register_user(db: Session, user_data: schemas.UserCreate) -> db_models.User:
        """
        Register a new citizen account.

        Args:
            db: Database session
            user_data: Registration data

        Returns:
            Created user

        Raises:
            ValidationException: If the password is too weak
            UserAlreadyExistsException: If email or username is taken
        """
        user_repo = UserRepository(db)

        is_valid, errors = validate_password_complexity(user_data.password)
        if not is_valid:
            raise ValidationException("; ".join(errors))

        if user_repo.get_by_email(user_data.email):
            raise UserAlreadyExistsException("Email already registered")
        if user_repo.get_by_username(user_data.username):
            raise UserAlreadyExistsException("Username already taken")

        new_user = db_models.User(
            email=user_data.email.lower(),
            username=user_data.username,
            full_name=user_data.full_name,
            hashed_password=auth.get_password_hash(user_data.password),
            role=db_models.UserRole.CITIZEN,
            is_active=True,
        )
        try:
            user_repo.add(new_user)
            user_repo.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration
            user_repo.rollback()
            raise UserAlreadyExistsException("Email or username already registered")

        user_repo.refresh(new_user)
        logger.info(f"User {new_user.id} registered", user_id=new_user.id)
        return new_user

    @staticmethod
    def list_citizens(
        db: Session, page: int = 1, search: Optional[str] = None
    ) -> schemas.UserListResponse:
        """
        Get one page of citizen accounts, newest first.

        Args:
            db: Database session
            page: Page number (1-indexed)
            search: Free text matched on username or full name

        Returns:
            Paginated user list
        """
        page_size = settings.ADMIN_PAGE_SIZE
        users, total = UserRepository(db).search_by_role(
            db_models.UserRole.CITIZEN,
            search=search,
            skip=page_offset(page, page_size),
            limit=page_size,
        )
        return schemas.UserListResponse(
            users=[schemas.UserList.model_validate(user) for user in users],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(total, page_size),
        )
