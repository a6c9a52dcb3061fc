import logging
from datetime import date
from typing import Optional

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from upi_extractor.core.config import settings
from upi_extractor.models.models import User
from upi_extractor.models.scheme import (
    CreateUserRequest,
    CreateUserResponse,
    CreatedUser,
    LogListResponse,
    ProcessImageResponse,
    UserListResponse,
    UserSummary,
)
from upi_extractor.services.email_service import EmailService
from upi_extractor.services.llm import ImageProcessingRequest, TransactionImageProcessor
from upi_extractor.services.llm.models import DEFAULT_IMAGE_MIME_TYPE
from upi_extractor.services.log_service import LogService
from upi_extractor.services.transaction_service import TransactionService
from upi_extractor.services.user_service import UserService
from upi_extractor.utils.exceptions import BusinessLogicError, PayloadTooLargeError

logger = logging.getLogger(__name__)

GENERIC_UPLOAD_TYPE = "application/octet-stream"


class ImageController:
    @staticmethod
    async def process_image(
        image: Optional[UploadFile],
        user: User,
        db,
        processor: TransactionImageProcessor
    ) -> ProcessImageResponse:
        if image is None or not image.filename:
            raise BusinessLogicError("No image file uploaded")

        content_type = image.content_type or GENERIC_UPLOAD_TYPE
        if not content_type.startswith("image/") and content_type != GENERIC_UPLOAD_TYPE:
            raise BusinessLogicError(f"Only image files are accepted, got {content_type}")

        max_bytes = settings.MAX_UPLOAD_BYTES
        image_bytes = await image.read(max_bytes + 1)
        if not image_bytes:
            raise BusinessLogicError("Uploaded file is empty")
        if len(image_bytes) > max_bytes:
            raise PayloadTooLargeError(max_bytes)

        mime_type = content_type if content_type.startswith("image/") else DEFAULT_IMAGE_MIME_TYPE
        request = ImageProcessingRequest(image_bytes=image_bytes, mime_type=mime_type)

        user_id = user.id
        data = await run_in_threadpool(processor.process, request)

        TransactionService(db).record_extraction(user_id, data)
        logger.info(f"Processed image for user {user_id}: utr={data.utr}")

        return ProcessImageResponse(data=data)


class AdminController:
    @staticmethod
    async def create_user(payload: CreateUserRequest, db, email_service: EmailService) -> CreateUserResponse:
        user_service = UserService(db, email_service=email_service)
        user = await run_in_threadpool(user_service.create_user, payload.name, str(payload.email))

        return CreateUserResponse(
            message="User created and email sent",
            user=CreatedUser(id=user.id, name=user.name, email=user.email, api_key=user.api_key)
        )

    @staticmethod
    async def list_users(db) -> UserListResponse:
        users = UserService(db).list_users()
        return UserListResponse(data=[UserSummary.model_validate(user) for user in users])


class LogController:
    @staticmethod
    async def list_logs(
        user: User,
        db,
        start_date: Optional[date],
        end_date: Optional[date],
        page: int,
        limit: int
    ) -> LogListResponse:
        log_page = LogService(db).list_logs(
            user_id=user.id,
            start_date=start_date,
            end_date=end_date,
            page=page,
            limit=limit
        )
        return LogListResponse(data=log_page)
