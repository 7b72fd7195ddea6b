"""
Generic owner-scoped CRUD resource.

Every tracking endpoint (journal, mood, tasks, ...) is a ``Resource`` that
declares its model, payload schemas, ordering and list filters. The router
built from it authenticates the caller, validates the request and runs a
single query with ``user_id = <caller>`` in its WHERE clause.
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel
from sqlalchemy import delete, or_, update
from sqlalchemy.orm import Session

from models.db import get_db
from utils.auth import get_current_user_id
from utils.errors import ApiError, internal_error, invalid_id
from utils.helpers import log_api_call, to_naive_utc, utcnow
from utils.validation import DATE_PATTERN, parse_payload

# A filter turns query parameters into zero or more WHERE clauses
Filter = Callable[[Mapping[str, str]], List[Any]]


def parse_record_id(raw: Optional[str]) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise invalid_id()


def _parse_int(raw: Optional[str], default: int) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


# ---------- List filters ----------
def choice_filter(param: str, column, choices: Sequence[str], code: str, message: str) -> Filter:
    def build(params: Mapping[str, str]) -> List[Any]:
        value = params.get(param)
        if not value:
            return []
        if value not in choices:
            raise ApiError(400, message, code)
        return [column == value]

    return build


def flag_filter(param: str, column) -> Filter:
    """``?completed=true`` matches True, any other value matches False."""

    def build(params: Mapping[str, str]) -> List[Any]:
        value = params.get(param)
        if value is None:
            return []
        return [column == (value == "true")]

    return build


def search_filter(param: str, *columns) -> Filter:
    def build(params: Mapping[str, str]) -> List[Any]:
        term = (params.get(param) or "").strip()
        if not term:
            return []
        return [or_(*(column.contains(term, autoescape=True) for column in columns))]

    return build


def _parse_bound(param: str, raw: str, end: bool) -> tuple:
    try:
        if DATE_PATTERN.match(raw):
            start = datetime.combine(date.fromisoformat(raw), time.min)
            # A bare end date covers that whole day
            return (start + timedelta(days=1), True) if end else (start, False)
        return to_naive_utc(datetime.fromisoformat(raw.replace("Z", "+00:00"))), False
    except ValueError:
        raise ApiError(
            400, f"Invalid {param} format. Use YYYY-MM-DD or ISO8601", "INVALID_DATE_FORMAT"
        )


def timestamp_range(column) -> Filter:
    """``startDate``/``endDate`` over a timestamp column."""

    def build(params: Mapping[str, str]) -> List[Any]:
        clauses = []
        start = params.get("startDate")
        if start:
            bound, _ = _parse_bound("startDate", start, end=False)
            clauses.append(column >= bound)
        end = params.get("endDate")
        if end:
            bound, exclusive = _parse_bound("endDate", end, end=True)
            clauses.append(column < bound if exclusive else column <= bound)
        return clauses

    return build


def date_range(column) -> Filter:
    """``startDate``/``endDate`` over a calendar date column, strictly YYYY-MM-DD."""

    def build(params: Mapping[str, str]) -> List[Any]:
        clauses = []
        for param, compare in (("startDate", column.__ge__), ("endDate", column.__le__)):
            raw = params.get(param)
            if not raw:
                continue
            try:
                if not DATE_PATTERN.match(raw):
                    raise ValueError(raw)
                clauses.append(compare(date.fromisoformat(raw)))
            except ValueError:
                raise ApiError(400, f"Invalid {param} format. Use YYYY-MM-DD", "INVALID_DATE_FORMAT")
        return clauses

    return build


class Resource:
    """One persisted entity family exposed at ``/api/<path>``."""

    def __init__(
        self,
        *,
        path: str,
        model,
        create_schema: Type[BaseModel],
        update_schema: Type[BaseModel],
        out_schema: Type[BaseModel],
        label: str,
        not_found_message: Optional[str] = None,
        not_found_code: str = "NOT_FOUND",
        delete_key: str = "entry",
        default_limit: int = 10,
        max_limit: int = 100,
        order_by: Optional[Sequence[Any]] = None,
        filters: Sequence[Filter] = (),
        tracks_updated_at: bool = False,
        tag: Optional[str] = None,
    ):
        self.path = path
        self.model = model
        self.create_schema = create_schema
        self.update_schema = update_schema
        self.out_schema = out_schema
        self.label = label
        self.not_found_message = not_found_message or f"{label} not found"
        self.not_found_code = not_found_code
        self.delete_key = delete_key
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.order_by = list(order_by) if order_by else [model.created_at.desc(), model.id.desc()]
        self.filters = list(filters)
        self.tracks_updated_at = tracks_updated_at
        self.tag = tag or label

    # ---------- helpers ----------
    def owned(self, db: Session, user_id: str):
        return db.query(self.model).filter(self.model.user_id == user_id)

    def serialize(self, row) -> Dict[str, Any]:
        return self.out_schema.model_validate(row).model_dump(mode="json", by_alias=True)

    def not_found(self) -> ApiError:
        return ApiError(404, self.not_found_message, self.not_found_code)

    def page(self, params: Mapping[str, str]) -> tuple:
        limit = _parse_int(params.get("limit"), self.default_limit)
        limit = min(max(limit, 1), self.max_limit)
        offset = max(_parse_int(params.get("offset"), 0), 0)
        return limit, offset

    # ---------- operations ----------
    def read(self, db: Session, user_id: str, params: Mapping[str, str]):
        record_id = params.get("id")
        if record_id:
            return self.get(db, user_id, parse_record_id(record_id))
        return self.list(db, user_id, params)

    def list(self, db: Session, user_id: str, params: Mapping[str, str]) -> List[Dict[str, Any]]:
        clauses = []
        for build in self.filters:
            clauses.extend(build(params))
        limit, offset = self.page(params)
        rows = (
            self.owned(db, user_id)
            .filter(*clauses)
            .order_by(*self.order_by)
            .limit(limit)
            .offset(offset)
            .all()
        )
        return [self.serialize(r) for r in rows]

    def get(self, db: Session, user_id: str, record_id: int) -> Dict[str, Any]:
        row = self.owned(db, user_id).filter(self.model.id == record_id).first()
        if row is None:
            raise self.not_found()
        return self.serialize(row)

    def create(self, db: Session, user_id: str, body: Any) -> Dict[str, Any]:
        values = parse_payload(self.create_schema, body)
        now = utcnow()
        row = self.model(user_id=user_id, created_at=now, **values)
        if self.tracks_updated_at:
            row.updated_at = now
        db.add(row)
        db.commit()
        db.refresh(row)
        logger.info(f"Created {self.label.lower()} {row.id} for {user_id}")
        return self.serialize(row)

    def update(self, db: Session, user_id: str, record_id: int, body: Any) -> Dict[str, Any]:
        values = parse_payload(self.update_schema, body, partial=True)
        if not values:
            # Nothing to change, report the row as it stands
            return self.get(db, user_id, record_id)
        if self.tracks_updated_at:
            values["updated_at"] = utcnow()
        stmt = (
            update(self.model)
            .where(self.model.id == record_id, self.model.user_id == user_id)
            .values(**values)
            .returning(self.model)
        )
        row = db.execute(stmt).scalars().first()
        if row is None:
            db.rollback()
            raise self.not_found()
        payload = self.serialize(row)
        db.commit()
        return payload

    def delete(self, db: Session, user_id: str, params: Mapping[str, str]) -> Dict[str, Any]:
        record_id = parse_record_id(params.get("id"))
        stmt = (
            delete(self.model)
            .where(self.model.id == record_id, self.model.user_id == user_id)
            .returning(self.model)
        )
        row = db.execute(stmt).scalars().first()
        if row is None:
            db.rollback()
            raise self.not_found()
        payload = self.serialize(row)
        db.commit()
        logger.info(f"Deleted {self.label.lower()} {record_id} for {user_id}")
        return {"message": f"{self.label} deleted successfully", self.delete_key: payload}


def _fail(db: Session, action: str, resource: Resource, exc: Exception) -> ApiError:
    db.rollback()
    logger.error(f"Failed to {action} {resource.label.lower()}: {exc}")
    return internal_error(exc)


def build_router(resource: Resource) -> APIRouter:
    """GET/POST/PUT/DELETE on ``/api/<path>`` for one resource."""
    router = APIRouter(prefix="/api", tags=[resource.tag])
    endpoint = f"/api{resource.path}"

    @router.get(resource.path)
    async def read_records(
        request: Request,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ):
        params = request.query_params
        log_api_call(f"GET {endpoint}", dict(params))
        try:
            return resource.read(db, user_id, params)
        except ApiError:
            raise
        except Exception as e:
            raise _fail(db, "read", resource, e)

    @router.post(resource.path, status_code=201)
    async def create_record(
        request: Request,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ):
        log_api_call(f"POST {endpoint}")
        try:
            body = await request.json()
            return JSONResponse(status_code=201, content=resource.create(db, user_id, body))
        except ApiError as e:
            if e.status_code == 400:
                logger.warning(f"Rejected {resource.label.lower()} create: {e.code}")
            raise
        except Exception as e:
            raise _fail(db, "create", resource, e)

    @router.put(resource.path)
    async def update_record(
        request: Request,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ):
        params = request.query_params
        log_api_call(f"PUT {endpoint}", dict(params))
        try:
            record_id = parse_record_id(params.get("id"))
            body = await request.json()
            return resource.update(db, user_id, record_id, body)
        except ApiError as e:
            if e.status_code == 400:
                logger.warning(f"Rejected {resource.label.lower()} update: {e.code}")
            raise
        except Exception as e:
            raise _fail(db, "update", resource, e)

    @router.delete(resource.path)
    async def delete_records(
        request: Request,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db),
    ):
        params = request.query_params
        log_api_call(f"DELETE {endpoint}", dict(params))
        try:
            return resource.delete(db, user_id, params)
        except ApiError:
            raise
        except Exception as e:
            raise _fail(db, "delete", resource, e)

    return router
