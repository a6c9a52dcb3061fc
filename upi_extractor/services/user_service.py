import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from upi_extractor.core.config import settings
from upi_extractor.models.models import User
from upi_extractor.repositories import UserRepository
from upi_extractor.services.email_service import EmailService
from upi_extractor.utils.exceptions import ConflictError, DatabaseError
from upi_extractor.utils.utils import generate_api_key

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session, email_service: Optional[EmailService] = None):
        self.db = db
        self.user_repo = UserRepository(db)
        self.email_service = email_service

    def create_user(self, name: str, email: str) -> User:
        """
        Create a non-admin user and email them their API key.

        The row is flushed first so uniqueness is checked, and committed
        only once the mail has been handed to the relay.
        """
        if self.user_repo.get_by_email(email):
            raise ConflictError("A user with this email already exists", details={"email": email})

        user = User(name=name, email=email, api_key=generate_api_key(), is_admin=False)

        try:
            self.user_repo.add_without_commit(user)
            self.user_repo.flush()
        except IntegrityError:
            raise ConflictError("A user with this email already exists", details={"email": email})

        try:
            self.email_service.send_api_key(name=name, email=email, api_key=user.api_key)
        except Exception:
            self.user_repo.rollback()
            raise

        try:
            self.user_repo.commit()
        except Exception as e:
            raise DatabaseError("Error creating user", details={"email": email, "error": str(e)})

        self.user_repo.refresh(user)
        logger.info(f"Created user {user.id} ({email})")
        return user

    def list_users(self) -> List[User]:
        return self.user_repo.list_non_admins()

    def ensure_default_admin(self) -> Optional[User]:
        """
        Create the bootstrap admin when no admin exists.

        Returns the new admin, or None when one was already present or the
        admin email is taken by a regular user. Existing users are never
        promoted.
        """
        if self.user_repo.admin_exists():
            return None

        admin_email = settings.admin_email
        if self.user_repo.get_by_email(admin_email):
            logger.error(
                f"Cannot create default admin: {admin_email} already belongs to a non-admin user. "
                f"Set DEFAULT_ADMIN_EMAIL to an unused address."
            )
            return None

        admin = User(
            name=settings.DEFAULT_ADMIN_NAME,
            email=admin_email,
            api_key=generate_api_key(),
            is_admin=True
        )
        return self.user_repo.add(admin)
