"""
Base repository.

Generic lookups shared by the admin and session repositories. Writes are
flushed, never committed: the caller owns the transaction.
"""
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from adminauth.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with generic operations for one SQLAlchemy model.

    Example:
        class AdminRepository(BaseRepository[Admin]):
            def __init__(self, db: Session):
                super().__init__(Admin, db)
    """

    def __init__(self, model: Type[ModelType], db: Session) -> None:
        self.model = model
        self.db = db

    def get_by(self, **filters: Any) -> Optional[ModelType]:
        """Return the first row matching ``filters`` or None."""
        return self.db.query(self.model).filter_by(**filters).first()

    def add(self, entity: ModelType) -> ModelType:
        self.db.add(entity)
        self.db.flush()
        return entity

    def count(self, **filters: Any) -> int:
        return self.db.query(self.model).filter_by(**filters).count()
