from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.orm import Session

from upi_extractor.controller import AdminController, ImageController, LogController
from upi_extractor.db_config import get_db
from upi_extractor.middleware.auth_middleware import rate_limited_user, require_admin
from upi_extractor.models.scheme import (
    CreateUserRequest,
    CreateUserResponse,
    LogListResponse,
    ProcessImageResponse,
    UserListResponse,
)
from upi_extractor.services.email_service import EmailService, get_email_service
from upi_extractor.services.llm import LLMService, TransactionImageProcessor

router = APIRouter()


def get_image_processor() -> TransactionImageProcessor:
    return TransactionImageProcessor(LLMService())


# ----------- IMAGE ROUTES -----------
@router.post("/process-image", response_model=ProcessImageResponse)
async def process_image(
    user=Depends(rate_limited_user),
    image: Optional[UploadFile] = File(None, description="Payment screenshot (max 5MB)"),
    db: Session = Depends(get_db),
    processor: TransactionImageProcessor = Depends(get_image_processor),
):
    """
    Extract date, UTR and amount from a payment screenshot and store the result.
    """
    return await ImageController.process_image(image, user, db, processor)


# ----------- ADMIN ROUTES -----------
@router.post("/admin/users", response_model=CreateUserResponse)
async def create_user(
    payload: CreateUserRequest,
    admin=Depends(require_admin),
    db: Session = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
):
    return await AdminController.create_user(payload, db, email_service)


@router.get("/admin/users", response_model=UserListResponse)
async def list_users(admin=Depends(require_admin), db: Session = Depends(get_db)):
    return await AdminController.list_users(db)


# ----------- LOG ROUTES -----------
@router.get("/logs", response_model=LogListResponse)
async def list_logs(
    user=Depends(rate_limited_user),
    db: Session = Depends(get_db),
    start_date: Optional[date] = Query(None, alias="startDate", description="First day to include (YYYY-MM-DD)"),
    end_date: Optional[date] = Query(None, alias="endDate", description="Last day to include (YYYY-MM-DD)"),
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(10, ge=1, le=100, description="Number of records per page"),
):
    return await LogController.list_logs(user, db, start_date, end_date, page, limit)
