"""User Repository Module"""

from typing import List, Optional
from sqlalchemy.orm import Session

from upi_extractor.models.models import User
from upi_extractor.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository[User]):

    def __init__(self, db_session: Session):
        super().__init__(db_session, User)

    def get_by_api_key(self, api_key: str) -> Optional[User]:
        return self.db.query(User).filter(User.api_key == api_key).first()

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def admin_exists(self) -> bool:
        return self.db.query(User.id).filter(User.is_admin.is_(True)).first() is not None

    def list_non_admins(self) -> List[User]:
        return (
            self.db.query(User)
            .filter(User.is_admin.is_(False))
            .order_by(User.created_at.desc(), User.id.desc())
            .all()
        )

    def increment_request_count_without_commit(self, user_id: int) -> None:
        # Done in SQL so concurrent requests from the same user do not lose updates
        self.db.query(User).filter(User.id == user_id).update(
            {User.request_count: User.request_count + 1},
            synchronize_session=False
        )
