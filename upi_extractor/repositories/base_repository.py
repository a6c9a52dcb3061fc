"""
Base Repository Module - Provides common database operations for all repositories.
"""

from abc import ABC
from typing import TypeVar, Generic, Type, Optional, Any

from sqlalchemy.orm import Session

T = TypeVar('T')


class BaseRepository(ABC, Generic[T]):
    """Abstract base repository implementing common CRUD operations."""

    def __init__(self, db_session: Session, model_class: Type[T]):
        self.db: Session = db_session
        self.model_class = model_class

    def add(self, obj: T) -> T:
        try:
            self.db.add(obj)
            self.db.commit()
            self.db.refresh(obj)
            return obj
        except Exception as e:
            self.db.rollback()
            raise e

    def add_without_commit(self, obj: T) -> T:
        self.db.add(obj)
        return obj

    def get_by_id(self, id: Any) -> Optional[T]:
        return self.db.query(self.model_class).filter_by(id=id).first()

    def flush(self) -> None:
        try:
            self.db.flush()
        except Exception as e:
            self.db.rollback()
            raise e

    def commit(self) -> None:
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            raise e

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, obj: T) -> T:
        self.db.refresh(obj)
        return obj
