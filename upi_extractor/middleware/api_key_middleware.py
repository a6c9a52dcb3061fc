"""
API key gate for the /api routes.

Runs before routing, so the request body is never parsed for a caller
without a known key.
"""
from fastapi import Request
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from upi_extractor.db_config import SessionLocal
from upi_extractor.repositories import UserRepository
from upi_extractor.utils.exception_handlers import app_exception_handler
from upi_extractor.utils.exceptions import AuthenticationError

API_KEY_HEADER = "X-API-Key"
MISSING_KEY_MESSAGE = "Unauthorized: API key required"
INVALID_KEY_MESSAGE = "Unauthorized: Invalid API key"


class APIKeyMiddleware(BaseHTTPMiddleware):

    def __init__(self, app, prefix: str = "/api", session_factory=SessionLocal):
        super().__init__(app)
        self.prefix = prefix
        self.session_factory = session_factory

    def _is_protected(self, request: Request) -> bool:
        if request.method == "OPTIONS":
            return False
        path = request.url.path
        return path == self.prefix or path.startswith(self.prefix + "/")

    def _key_exists(self, api_key: str) -> bool:
        db = self.session_factory()
        try:
            return UserRepository(db).get_by_api_key(api_key) is not None
        finally:
            db.close()

    async def dispatch(self, request: Request, call_next):
        if not self._is_protected(request):
            return await call_next(request)

        api_key = request.headers.get(API_KEY_HEADER)
        if not api_key:
            return await app_exception_handler(request, AuthenticationError(MISSING_KEY_MESSAGE))

        if not await run_in_threadpool(self._key_exists, api_key):
            return await app_exception_handler(request, AuthenticationError(INVALID_KEY_MESSAGE))

        return await call_next(request)
