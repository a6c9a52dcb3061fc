from datetime import datetime, timedelta

from upi_extractor.models.models import Log, User
from upi_extractor.repositories import LogRepository, UserRepository


class TestUserRepository:
    def test_uses_given_session(self, db):
        repo = UserRepository(db)

        assert repo.db is db
        assert repo.model_class is User

    def test_lookups(self, db, admin_user, regular_user):
        repo = UserRepository(db)

        assert repo.get_by_api_key(regular_user.api_key).id == regular_user.id
        assert repo.get_by_api_key("key_missing") is None
        assert repo.get_by_email("asha@example.com").id == regular_user.id
        assert repo.admin_exists() is True

    def test_admin_exists_without_admins(self, db, regular_user):
        assert UserRepository(db).admin_exists() is False

    def test_list_non_admins_newest_first(self, db, admin_user, regular_user, other_user):
        users = UserRepository(db).list_non_admins()

        assert [u.id for u in users] == [other_user.id, regular_user.id]

    def test_increment_is_uncommitted_until_commit(self, db, regular_user):
        repo = UserRepository(db)

        repo.increment_request_count_without_commit(regular_user.id)
        repo.rollback()
        db.expire_all()
        assert db.get(User, regular_user.id).request_count == 0

        repo.increment_request_count_without_commit(regular_user.id)
        repo.increment_request_count_without_commit(regular_user.id)
        repo.commit()
        db.expire_all()
        assert db.get(User, regular_user.id).request_count == 2


class TestLogRepository:
    def test_delete_older_than(self, db, regular_user):
        cutoff = datetime(2024, 6, 1)
        db.add_all([
            Log(user_id=regular_user.id, timestamp=cutoff - timedelta(seconds=1)),
            Log(user_id=regular_user.id, timestamp=cutoff),
        ])
        db.commit()

        assert LogRepository(db).delete_older_than(cutoff) == 1
        assert db.query(Log).one().timestamp == cutoff

    def test_paginated_bounds(self, db, regular_user):
        base = datetime(2024, 6, 1)
        for hours in range(4):
            db.add(Log(user_id=regular_user.id, timestamp=base + timedelta(hours=hours)))
        db.commit()

        result = LogRepository(db).get_paginated_for_user(
            regular_user.id,
            start=base + timedelta(hours=1),
            end=base + timedelta(hours=3),
            limit=10,
        )

        assert result["total"] == 2
        assert [log.timestamp for log in result["data"]] == [
            base + timedelta(hours=2),
            base + timedelta(hours=1),
        ]
