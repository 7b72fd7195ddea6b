"""Declarative field rules for request payloads.

Each rule is a pydantic ``BeforeValidator`` that trims, type checks and
range checks one raw JSON value, raising ``PydanticCustomError`` with the
machine-readable code the API returns. Only the first failure is reported.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Tuple, Type

from pydantic import BaseModel, BeforeValidator, ValidationError
from pydantic_core import PydanticCustomError

from utils.errors import ApiError

# (code, message)
Rule = Tuple[str, str]

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
DATETIME_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z?$")
INTEGER_STRING = re.compile(r"^\s*[+-]?\d+\s*$")

# Largest value an INTEGER column holds
INTEGER_MAX = 2**63 - 1

OWNER_FIELDS = ("userId", "user_id")


def _fail(rule: Rule):
    code, message = rule
    raise PydanticCustomError(code, message)


def _scalar_text(value: Any) -> Any:
    """Render a JSON scalar as text; falsy scalars become None."""
    if isinstance(value, bool):
        return "true" if value else None
    if isinstance(value, (int, float)):
        if not value:
            return None
        return str(int(value)) if isinstance(value, float) and value.is_integer() else str(value)
    return value


def text(
    invalid: Rule,
    missing: Optional[Rule] = None,
    empty: Optional[Rule] = None,
    coerce: bool = False,
):
    """Trimmed string. Blank values are missing when required, else None.

    ``coerce`` accepts numbers and booleans as their text form.
    """

    def check(value: Any) -> Optional[str]:
        if coerce:
            value = _scalar_text(value)
        if value is None:
            if missing:
                _fail(missing)
            return None
        if not isinstance(value, str):
            _fail(invalid)
        value = value.strip()
        if not value:
            if empty:
                _fail(empty)
            if missing:
                _fail(missing)
            return None
        return value

    return BeforeValidator(check)


def choice(
    choices: Iterable[str],
    invalid: Rule,
    missing: Optional[Rule] = None,
    default: Optional[str] = None,
):
    allowed = tuple(choices)

    def check(value: Any) -> Optional[str]:
        if value is None or value == "":
            if default is not None:
                return default
            if missing:
                _fail(missing)
            return None
        if not isinstance(value, str) or value not in allowed:
            _fail(invalid)
        return value

    return BeforeValidator(check)


def integer(
    invalid: Rule,
    missing: Optional[Rule] = None,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    allow_strings: bool = False,
):
    def check(value: Any) -> Optional[int]:
        if value is None:
            if missing:
                _fail(missing)
            return None
        if isinstance(value, bool):
            _fail(invalid)
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        elif allow_strings and isinstance(value, str) and INTEGER_STRING.match(value):
            value = int(value)
        if not isinstance(value, int):
            _fail(invalid)
        if minimum is not None and value < minimum:
            _fail(invalid)
        if value > (INTEGER_MAX if maximum is None else maximum):
            _fail(invalid)
        return value

    return BeforeValidator(check)


def boolean(invalid: Rule, missing: Optional[Rule] = None):
    def check(value: Any) -> Optional[bool]:
        if value is None and not missing:
            return None
        if not isinstance(value, bool):
            _fail(missing if value is None else invalid)
        return value

    return BeforeValidator(check)


def calendar_date(
    invalid_format: Rule,
    missing: Optional[Rule] = None,
    invalid_date: Optional[Rule] = None,
):
    """``YYYY-MM-DD`` that names a real calendar day."""

    def check(value: Any) -> Optional[date]:
        if value is None or value == "":
            if missing:
                _fail(missing)
            return None
        if not isinstance(value, str) or not DATE_PATTERN.match(value):
            _fail(invalid_format)
        try:
            return date.fromisoformat(value)
        except ValueError:
            _fail(invalid_date or invalid_format)

    return BeforeValidator(check)


def iso_datetime(invalid: Rule, missing: Optional[Rule] = None):
    """ISO8601 date-time kept as the submitted string."""

    def check(value: Any) -> Optional[str]:
        if value is None or value == "":
            if missing:
                _fail(missing)
            return None
        if not isinstance(value, str) or not DATETIME_PATTERN.match(value):
            _fail(invalid)
        try:
            datetime.strptime(value[:19], "%Y-%m-%dT%H:%M:%S")
        except ValueError:
            _fail(invalid)
        return value

    return BeforeValidator(check)


def reject_owner_fields(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        raise ApiError(400, "Request body must be a JSON object", "INVALID_BODY")
    if any(key in body for key in OWNER_FIELDS):
        raise ApiError(400, "User ID cannot be provided in request body", "USER_ID_NOT_ALLOWED")
    return body


def first_error(exc: ValidationError) -> ApiError:
    err = exc.errors()[0]
    if err["type"].isupper():
        return ApiError(400, err["msg"], err["type"])
    field = ".".join(str(part) for part in err["loc"]) or "body"
    return ApiError(400, f"Invalid value for {field}: {err['msg']}", "INVALID_BODY")


def parse_payload(schema: Type[BaseModel], body: Any, partial: bool = False) -> Dict[str, Any]:
    """Validate a request body into column values.

    ``partial`` keeps only the fields present in the body, for updates.
    """
    reject_owner_fields(body)
    try:
        payload = schema.model_validate(body)
    except ValidationError as e:
        raise first_error(e)
    return payload.model_dump(exclude_unset=partial)
