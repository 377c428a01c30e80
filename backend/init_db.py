"""Initialize the database schema and the first admin account."""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from authentication.auth import get_password_hash
from models.config import settings
from repositories.database import Base, SessionLocal, engine
from repositories.db_models import User, UserRole
from repositories.user_repository import UserRepository


def ensure_admin(db: Session) -> User:
    """
    Create the admin account from settings unless it already exists.

    Returns:
        The existing or newly created admin
    """
    user_repo = UserRepository(db)
    existing_admin = user_repo.get_by_email(settings.ADMIN_EMAIL)
    if existing_admin:
        return existing_admin

    admin = User(
        email=settings.ADMIN_EMAIL.lower(),
        username="admin",
        full_name="Administrator",
        hashed_password=get_password_hash(settings.ADMIN_PASSWORD),
        role=UserRole.ADMIN,
        is_active=True,
    )
    user_repo.create(admin)
    logger.info(f"Admin user created: {settings.ADMIN_EMAIL}")
    logger.warning("Change the admin password in production!")
    return admin


def init_db() -> None:
    """Create tables and seed the admin account."""
    import repositories.db_models  # noqa: F401  (registers tables on Base)

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        ensure_admin(db)
        logger.info("Database initialization complete")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database initialization failed")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
