import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("OPENAI_API_KEY", "test-key")

from datetime import datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from upi_extractor.db_config import SessionLocal, engine
from upi_extractor.main import app
from upi_extractor.models.models import Base, User
from upi_extractor.models.scheme import ProcessingData
from upi_extractor.routes.routes import get_image_processor
from upi_extractor.services.email_service import EmailService, get_email_service
from upi_extractor.services.rate_limit_service import RateLimiter, get_rate_limiter

ADMIN_KEY = "key_admin000000000000000000000000000"
USER_KEY = "key_user0000000000000000000000000000"
OTHER_KEY = "key_other000000000000000000000000000"


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _make_user(db, name, email, api_key, is_admin=False, created_at=None):
    user = User(name=name, email=email, api_key=api_key, is_admin=is_admin)
    if created_at is not None:
        user.created_at = created_at
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db):
    return _make_user(db, "Admin", "admin@example.com", ADMIN_KEY, is_admin=True,
                      created_at=datetime(2024, 1, 1))


@pytest.fixture
def regular_user(db):
    return _make_user(db, "Asha", "asha@example.com", USER_KEY, created_at=datetime(2024, 2, 1))


@pytest.fixture
def other_user(db):
    return _make_user(db, "Ravi", "ravi@example.com", OTHER_KEY, created_at=datetime(2024, 3, 1))


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def rate_limiter(fake_clock):
    return RateLimiter(max_requests=20, window_seconds=60, clock=fake_clock)


@pytest.fixture
def extracted_data():
    return ProcessingData(
        date="12 Mar 2024, 10:15 AM",
        utr="412345678901",
        amount_in_inr="1250.00",
        is_edited=False,
    )


@pytest.fixture
def image_processor(extracted_data):
    processor = MagicMock()
    processor.process.return_value = extracted_data
    return processor


@pytest.fixture
def email_service():
    return MagicMock(spec=EmailService)


@pytest.fixture
def client(rate_limiter, image_processor, email_service):
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    app.dependency_overrides[get_image_processor] = lambda: image_processor
    app.dependency_overrides[get_email_service] = lambda: email_service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_raw_text():
    return """Payment Successful
₹1,250.00
Paid to Sharma General Store
12 Mar 2024, 10:15 AM
UPI transaction ID
412345678901
Google transaction ID
CICAgOCQ8vXyQA
Debited from XXXXXX7781 Ref 998877665544
"""
