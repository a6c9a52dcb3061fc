import math
from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from upi_extractor.core.config import settings
from upi_extractor.models.scheme import LogEntry, LogPage, Pagination, ProcessingData
from upi_extractor.repositories import LogRepository
from upi_extractor.utils.exceptions import ValidationError
from upi_extractor.utils.utils import date_range_bounds, to_utc_isoformat, utc_now

UNKNOWN_USERNAME = "Unknown User"


class LogService:

    def __init__(self, db: Session):
        self.db = db
        self.log_repo = LogRepository(db)

    def list_logs(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        page: int = 1,
        limit: int = 10,
        now: Optional[datetime] = None
    ) -> LogPage:
        if start_date and end_date and start_date > end_date:
            raise ValidationError("startDate must not be after endDate", field="startDate")

        start, end = date_range_bounds(start_date, end_date)
        now = now or utc_now()
        retention_cutoff = now - timedelta(days=settings.LOG_RETENTION_DAYS)

        result = self.log_repo.get_paginated_for_user(
            user_id=user_id,
            start=start,
            end=end,
            not_before=retention_cutoff,
            limit=limit,
            offset=(page - 1) * limit
        )

        logs = [
            LogEntry(
                timestamp=to_utc_isoformat(log.timestamp),
                username=log.user.name if log.user else UNKNOWN_USERNAME,
                data=ProcessingData(**log.processing_data),
            )
            for log in result["data"]
        ]
        total = result["total"]

        return LogPage(
            logs=logs,
            pagination=Pagination(total=total, page=page, pages=math.ceil(total / limit))
        )
