"""Log Repository Module"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session, joinedload

from upi_extractor.models.models import Log
from upi_extractor.repositories.base_repository import BaseRepository


class LogRepository(BaseRepository[Log]):

    def __init__(self, db_session: Session):
        super().__init__(db_session, Log)

    def get_paginated_for_user(
        self,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        not_before: Optional[datetime] = None,
        limit: int = 10,
        offset: int = 0
    ) -> Dict[str, Any]:
        """
        Newest-first page of a user's logs.

        ``start`` is inclusive, ``end`` exclusive. ``not_before`` hides logs
        that are past retention but not yet purged.
        """
        query = self.db.query(Log).filter(Log.user_id == user_id)

        if start is not None:
            query = query.filter(Log.timestamp >= start)
        if end is not None:
            query = query.filter(Log.timestamp < end)
        if not_before is not None:
            query = query.filter(Log.timestamp >= not_before)

        total_count = query.count()
        results = (
            query.options(joinedload(Log.user))
            .order_by(Log.timestamp.desc(), Log.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

        return {
            "data": results,
            "total": total_count,
        }

    def delete_older_than(self, cutoff: datetime) -> int:
        try:
            deleted = (
                self.db.query(Log)
                .filter(Log.timestamp < cutoff)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            return deleted
        except Exception as e:
            self.db.rollback()
            raise e
