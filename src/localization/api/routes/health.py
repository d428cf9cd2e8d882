from typing import Any

from fastapi import APIRouter

from localization.api.deps import SessionDep, SettingsDep
from localization.core.store import check_connection

router = APIRouter(tags=["health"])


@router.get("/health")
def health(settings: SettingsDep) -> Any:
    """Liveness check; does not touch the store."""
    return {"status": "ok", "service": settings.PROJECT_NAME}


@router.get("/ready")
def ready(session: SessionDep, settings: SettingsDep) -> Any:
    """Readiness check.

    Answers 503 through the StoreUnavailableError handler when the store
    cannot be reached.
    """
    check_connection(session)
    return {"status": "ready", "service": settings.PROJECT_NAME}
