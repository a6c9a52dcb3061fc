

from sqlalchemy import (
    Column, Integer, String, ForeignKey, Boolean, DateTime, Index
)
from sqlalchemy.orm import DeclarativeBase, relationship

from upi_extractor.utils.utils import utc_now

# ================================================================================================
# BASE CLASSES AND MIXINS
# ================================================================================================

NOT_AVAILABLE = "N/A"


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models"""
    pass


class CreatedAtMixin:
    """Mixin class for the creation timestamp (naive UTC)"""
    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)

# ================================================================================================
# USER MANAGEMENT MODELS
# ================================================================================================

class User(Base, CreatedAtMixin):
    """API consumer identified by an API key"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    api_key = Column(String(64), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    is_admin = Column(Boolean, default=False, nullable=False)
    request_count = Column(Integer, default=0, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="user")
    logs = relationship("Log", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, is_admin={self.is_admin})>"

# ================================================================================================
# EXTRACTION RESULT MODELS
# ================================================================================================

class Transaction(Base, CreatedAtMixin):
    """Fields extracted from one submitted image. Written once, never updated."""
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(String(64), nullable=True)
    utr = Column(String(32), nullable=True)
    amount_in_inr = Column(String(64), nullable=True)

    user = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction(id={self.id}, user_id={self.user_id}, utr={self.utr})>"


class Log(Base):
    """Per-request processing log, purged after the retention window"""
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    timestamp = Column(DateTime, default=utc_now, nullable=False)

    # Embedded copy of the processing data
    date = Column(String(64), default=NOT_AVAILABLE, nullable=False)
    utr = Column(String(32), default=NOT_AVAILABLE, nullable=False)
    amount_in_inr = Column(String(64), default=NOT_AVAILABLE, nullable=False)
    is_edited = Column(Boolean, default=False, nullable=False)

    user = relationship("User", back_populates="logs")

    __table_args__ = (
        Index("ix_logs_user_id_timestamp", "user_id", "timestamp"),
    )

    @property
    def processing_data(self) -> dict:
        return {
            "date": self.date,
            "utr": self.utr,
            "amount_in_inr": self.amount_in_inr,
            "is_edited": self.is_edited,
        }

    def __repr__(self):
        return f"<Log(id={self.id}, user_id={self.user_id}, timestamp={self.timestamp})>"
