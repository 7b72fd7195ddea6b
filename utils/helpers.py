import json
from datetime import datetime, timezone
from typing import Any, Dict

from loguru import logger


def utcnow() -> datetime:
    """Naive UTC now, the form timestamps are stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def create_timestamp() -> str:
    """Create a formatted timestamp."""
    return datetime.now(timezone.utc).isoformat()


def log_api_call(
    endpoint: str, request_data: Dict[str, Any] = None, response_data: Dict[str, Any] = None
):
    """Log API calls with timestamps."""
    logger.info(f"API Call - {endpoint} - {create_timestamp()}")
    if request_data:
        logger.debug(f"Request: {json.dumps(request_data, indent=2, default=str)}")
    if response_data:
        logger.debug(f"Response: {json.dumps(response_data, indent=2, default=str)}")


def format_error_response(error: str, code: str = None) -> Dict[str, Any]:
    """Format the JSON body returned for failed requests."""
    body: Dict[str, Any] = {"error": error}
    if code:
        body["code"] = code
    return body
