"""
Base repository class providing common database operations.
"""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from repositories.database import Base

T = TypeVar("T", bound=Base)  # type: ignore[type-arg]


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations.

    Write helpers come in two flavours: ``add``/``flush`` stage work inside the
    caller's transaction, ``create``/``update`` commit immediately. Services
    that must pair several writes atomically use the staging helpers and
    finish with a single ``commit``.
    """

    def __init__(self, model: type[T], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get_by_id(self, id: int) -> T | None:
        """
        Get entity by ID.

        Args:
            id: Entity ID

        Returns:
            Entity if found, None otherwise
        """
        return self.db.query(self.model).filter(self.model.id == id).first()

    def add(self, entity: T) -> None:
        """Stage an entity in the session without committing."""
        self.db.add(entity)

    def create(self, entity: T) -> T:
        """
        Create new entity and commit.

        Args:
            entity: Entity to create

        Returns:
            Created entity
        """
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: T) -> T:
        """Commit pending changes on an entity and reload it."""
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def commit(self) -> None:
        """Commit the current transaction."""
        self.db.commit()

    def flush(self) -> None:
        """Flush pending changes without committing."""
        self.db.flush()

    def rollback(self) -> None:
        """Rollback the current transaction."""
        self.db.rollback()

    def refresh(self, entity: T) -> None:
        """Reload entity state from the database."""
        self.db.refresh(entity)
