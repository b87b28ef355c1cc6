import logging

from fastapi import APIRouter, Request
from sqlmodel import text

from app.backend.core.errors import InternalFailure

log = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health_app():
    return {"ok": True}


@router.get("/db")
def health_db(request: Request):
    # Migration is a deployment concern. Runtime only verifies DB connectivity.
    try:
        with request.app.state.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"ok": True}
    except Exception as exc:
        log.exception("Database health check failed")
        raise InternalFailure("Database connection failed") from exc
