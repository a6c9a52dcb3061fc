import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from upi_extractor.models.models import Log, NOT_AVAILABLE, Transaction
from upi_extractor.models.scheme import ProcessingData
from upi_extractor.repositories import LogRepository, TransactionRepository, UserRepository
from upi_extractor.utils.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class TransactionService:

    def __init__(self, db: Session):
        self.db = db
        self.transaction_repo = TransactionRepository(db)
        self.log_repo = LogRepository(db)
        self.user_repo = UserRepository(db)

    def record_extraction(self, user_id: int, data: ProcessingData) -> Transaction:
        """
        Store one Transaction and one Log and bump the user's request count.

        All three writes share a single commit; on failure none of them persist.
        """
        transaction = Transaction(
            user_id=user_id,
            date=data.date,
            utr=data.utr,
            amount_in_inr=data.amount_in_inr,
        )
        log = Log(
            user_id=user_id,
            date=data.date or NOT_AVAILABLE,
            utr=data.utr or NOT_AVAILABLE,
            amount_in_inr=data.amount_in_inr or NOT_AVAILABLE,
            is_edited=data.is_edited,
        )

        try:
            self.transaction_repo.add_without_commit(transaction)
            self.log_repo.add_without_commit(log)
            self.user_repo.increment_request_count_without_commit(user_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to save extraction for user {user_id}: {e}")
            raise DatabaseError(
                "Failed to save processing result",
                details={"user_id": user_id}
            ) from e

        return transaction
