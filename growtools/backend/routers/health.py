"""Liveness and readiness probes."""
import redis
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from growtools.backend.deps import get_db
from growtools.backend.services.rate_limit import get_redis

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok", "service": "growtools"}


@router.get("/ready")
def ready(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        return JSONResponse({"status": "error", "detail": f"database: {e}"}, status_code=503)

    try:
        get_redis().ping()
    except redis.RedisError as e:
        return JSONResponse({"status": "error", "detail": f"redis: {e}"}, status_code=503)

    return {"status": "ok"}
