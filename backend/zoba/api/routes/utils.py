from typing import Any

from fastapi import APIRouter
from sqlalchemy import text

from zoba.api.deps import SessionDep
from zoba.core.config import settings

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/health-check/")
def health_check(session: SessionDep) -> Any:
    """Liveness plus a round trip to the diagram store."""
    session.connection().execute(text("SELECT 1"))
    return {
        "status": "ok",
        "model": settings.MODEL_DEFAULT,
        "renderer": "remote" if settings.RENDERER_URL else "structural",
    }
