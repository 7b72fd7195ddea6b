from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from utils.helpers import format_error_response


class ApiError(Exception):
    """A request failure rendered as ``{"error": ..., "code": ...}``."""

    def __init__(self, status_code: int, error: str, code: Optional[str] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.code = code


def unauthorized() -> ApiError:
    return ApiError(401, "Unauthorized", "UNAUTHORIZED")


def invalid_id() -> ApiError:
    return ApiError(400, "Valid ID is required", "INVALID_ID")


def internal_error(exc: Exception) -> ApiError:
    return ApiError(500, f"Internal server error: {exc}")


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=format_error_response(exc.error, exc.code),
    )
