from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from wage_engine.core.errors import storage_errors
from wage_engine.db.session import get_session

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Liveness probe")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/ready", summary="Readiness probe; checks the database")
def readiness(db: Session = Depends(get_session)) -> dict[str, str]:
    with storage_errors():
        db.execute(text("SELECT 1"))
    return {"status": "ready", "database": "ok"}
