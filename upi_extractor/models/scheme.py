from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, ConfigDict, EmailStr, constr, field_serializer

from upi_extractor.utils.utils import to_utc_isoformat


# User administration models
class CreateUserRequest(BaseModel):
    """Payload for creating a new API user"""
    name: constr(strip_whitespace=True, min_length=1, max_length=255)
    email: EmailStr


class CreatedUser(BaseModel):
    id: int
    name: str
    email: str
    api_key: str


class CreateUserResponse(BaseModel):
    success: bool = True
    message: str
    user: CreatedUser


class UserSummary(BaseModel):
    """A non-admin user as listed to admins"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    api_key: str
    request_count: int
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        return to_utc_isoformat(value)


class UserListResponse(BaseModel):
    success: bool = True
    data: List[UserSummary]


# Image processing models
class ProcessingData(BaseModel):
    """Structured fields extracted from a payment screenshot"""
    date: Optional[str] = None
    utr: Optional[str] = None
    amount_in_inr: Optional[str] = None
    is_edited: bool = False


class ProcessImageResponse(BaseModel):
    success: bool = True
    data: ProcessingData


# Log query models
class LogEntry(BaseModel):
    timestamp: Optional[str]
    username: str
    data: ProcessingData


class Pagination(BaseModel):
    total: int
    page: int
    pages: int


class LogPage(BaseModel):
    logs: List[LogEntry]
    pagination: Pagination


class LogListResponse(BaseModel):
    success: bool = True
    data: LogPage
