"""Transaction Repository Module"""

from sqlalchemy.orm import Session

from upi_extractor.models.models import Transaction
from upi_extractor.repositories.base_repository import BaseRepository


class TransactionRepository(BaseRepository[Transaction]):
    """Write-once store of extraction results."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, Transaction)
