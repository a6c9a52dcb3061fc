"""
Repositories Package - Repository Pattern for data access.
"""

from upi_extractor.repositories.base_repository import BaseRepository
from upi_extractor.repositories.user_repository import UserRepository
from upi_extractor.repositories.transaction_repository import TransactionRepository
from upi_extractor.repositories.log_repository import LogRepository

__all__ = [
    'BaseRepository',
    'UserRepository',
    'TransactionRepository',
    'LogRepository',
]
