from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBearer,
    OAuth2PasswordBearer,
)
import jwt
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from models.config import settings
from models.exceptions import (
    AuthenticationException,
    InactiveUserException,
    InsufficientPermissionsException,
)
from repositories.database import get_db
from repositories.user_repository import UserRepository

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login")
optional_oauth2_scheme = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=15)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def authenticate_user(db: Session, email: str, password: str) -> db_models.User | None:
    user = UserRepository(db).get_by_email(email)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def _decode_subject(token: str) -> Optional[str]:
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    subject = payload.get("sub")
    return str(subject) if subject is not None else None


async def get_current_user(
    token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)
) -> db_models.User:
    """
    Get the current authenticated user from the JWT token.

    Raises:
        AuthenticationException: If credentials are invalid or user not found.
    """
    try:
        email = _decode_subject(token)
        if email is None:
            raise AuthenticationException("Could not validate credentials")
        token_data = schemas.TokenData(email=email)
    except jwt.exceptions.InvalidTokenError:
        raise AuthenticationException("Could not validate credentials")

    user = UserRepository(db).get_by_email(str(token_data.email))
    if user is None:
        raise AuthenticationException("Could not validate credentials")
    return user


async def get_current_active_user(
    current_user: db_models.User = Depends(get_current_user),
) -> db_models.User:
    """
    Get the current user and verify the account is active.

    Raises:
        InactiveUserException: If the user account has been deactivated.
    """
    if not current_user.is_active:
        raise InactiveUserException("Account has been deactivated")
    return current_user


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(
        optional_oauth2_scheme
    ),
    db: Session = Depends(get_db),
) -> Optional[db_models.User]:
    """
    Get current user if authenticated, otherwise return None.

    If no credentials are provided, returns None (anonymous access).
    If credentials are provided but expired, raises AuthenticationException
    so the user knows to re-login (returns 401).
    If credentials are malformed or invalid, returns None.
    """
    if credentials is None:
        return None

    try:
        email = _decode_subject(credentials.credentials)
    except jwt.exceptions.ExpiredSignatureError:
        raise AuthenticationException("Session expired. Please log in again.")
    except jwt.exceptions.InvalidTokenError:
        return None

    if email is None:
        return None
    user = UserRepository(db).get_by_email(email)
    if user is None or not user.is_active:
        return None
    return user


async def get_staff_user(
    current_user: db_models.User = Depends(get_current_active_user),
) -> db_models.User:
    """
    Require a role allowed to drive the report workflow (admin or official).

    Raises:
        InsufficientPermissionsException: If user is a citizen.
    """
    if not current_user.is_staff:
        raise InsufficientPermissionsException("Official or admin permissions required")
    return current_user


async def get_admin_user(
    current_user: db_models.User = Depends(get_current_active_user),
) -> db_models.User:
    """
    Require admin permissions.

    Raises:
        InsufficientPermissionsException: If user is not an admin.
    """
    if current_user.role != db_models.UserRole.ADMIN:
        raise InsufficientPermissionsException("Not enough permissions")
    return current_user
