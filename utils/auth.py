from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger
from sqlalchemy.orm import Session

from models.db import get_db
from models.user import UserSession
from utils.errors import internal_error, unauthorized
from utils.helpers import to_naive_utc, utcnow


# Missing headers are reported as 401 by get_current_user_id, not 403
security = HTTPBearer(auto_error=False)


def lookup_session(db: Session, token: str) -> Optional[UserSession]:
    """Return the live session for a bearer token, or None if unknown or expired."""
    session = db.query(UserSession).filter(UserSession.token == token).first()
    if session is None:
        return None
    if to_naive_utc(session.expires_at) <= utcnow():
        return None
    return session


def get_current_user_id(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> str:
    if not creds or creds.scheme != "Bearer" or not creds.credentials:
        logger.warning("Rejected request without a bearer token")
        raise unauthorized()

    try:
        session = lookup_session(db, creds.credentials)
    except Exception as e:
        logger.error(f"Session lookup failed: {e}")
        raise internal_error(e)
    if session is None:
        logger.warning("Rejected request with an unknown or expired session token")
        raise unauthorized()
    return session.user_id
