"""
Initial Setup Service

This module handles all initial data setup required for the application to work properly.
It centralizes all setup operations that should run when the application starts.
"""

import logging
from typing import Optional
from sqlalchemy.orm import Session

from upi_extractor.db_config import SessionLocal
from upi_extractor.models.models import Base, User
from upi_extractor.services.user_service import UserService
from upi_extractor.utils.exceptions import DatabaseError

logger = logging.getLogger(__name__)


class InitialSetupService:
    """
    Centralized service for handling all initial data setup.

    This service orchestrates:
    - Creating the database tables
    - Creating the default admin user when no admin exists

    Every step is idempotent, so running it on each start is safe.

    Usage:
        setup_service = InitialSetupService()
        setup_service.run_initial_setup()
    """

    def __init__(self, db: Optional[Session] = None):
        """
        Initialize the setup service.

        Args:
            db: Optional database session. If not provided, creates a new one.
        """
        self._db = db
        self._should_close_db = False

        if self._db is None:
            self._db = SessionLocal()
            self._should_close_db = True

    @property
    def db(self) -> Session:
        """Get the database session."""
        return self._db

    def run_initial_setup(self) -> Optional[User]:
        """
        Run all initial setup operations.

        Returns the admin created by this run, if any.
        """
        try:
            logger.info("Starting Initial Setup Process")

            self._setup_tables()
            admin = self._setup_default_admin()

            logger.info("Initial Setup Process Completed Successfully")
            return admin

        except Exception as e:
            logger.error(f"Error during initial setup: {str(e)}")
            self.db.rollback()
            raise e
        finally:
            if self._should_close_db:
                self.db.close()

    def _setup_tables(self) -> None:
        try:
            Base.metadata.create_all(bind=self.db.get_bind())
        except Exception as e:
            logger.error(f"✗ Error creating tables: {str(e)}")
            raise DatabaseError(
                "Failed to create database tables",
                details={"error": str(e), "step": "tables"}
            )

    def _setup_default_admin(self) -> Optional[User]:
        try:
            admin = UserService(self.db).ensure_default_admin()
        except Exception as e:
            logger.error(f"✗ Error creating default admin: {str(e)}")
            self.db.rollback()
            raise DatabaseError(
                "Failed to create default admin",
                details={"error": str(e), "step": "default_admin"}
            )

        if admin is None:
            logger.info("✓ No default admin created")
        else:
            logger.info(f"✓ Default admin '{admin.email}' ready with API key: {admin.api_key}")
        return admin


# Convenience function for easy import and use
def run_initial_setup(db: Optional[Session] = None) -> Optional[User]:
    setup_service = InitialSetupService(db)
    return setup_service.run_initial_setup()
