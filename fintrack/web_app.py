"""FastAPI application shared by the handler modules, plus request-scoped dependencies."""
from typing import Optional

from fastapi import Depends, FastAPI, Header
from sqlalchemy.orm import Session

from fintrack.engine.errors import RecordNotFound
from fintrack.models import SessionLocal
from fintrack.store import RecordStore

app = FastAPI(title="Finance Tracker", version="1.0.0")


class Unauthorized(Exception):
    """No usable owner identity on the request."""


def get_db() -> Session:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> RecordStore:
    return RecordStore(db)


def get_current_user_id(
    x_user_id: Optional[str] = Header(None),
    store: RecordStore = Depends(get_store),
) -> int:
    """The authenticated owner, as forwarded by the auth layer in ``X-User-Id``."""
    if not x_user_id:
        raise Unauthorized("missing user identity")
    try:
        user_id = int(x_user_id)
    except ValueError:
        raise Unauthorized("invalid user identity") from None
    try:
        store.get_user(user_id)
    except RecordNotFound:
        raise Unauthorized(f"unknown user {user_id}") from None
    return user_id
