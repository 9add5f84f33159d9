"""Health check endpoint; reports whether the record store is reachable."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Annotated[Session, Depends(get_db)]) -> HealthResponse:
    """No auth required. database is "disconnected" when SELECT 1 fails."""
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected" if check_db_connected(db) else "disconnected",
    )
