"""
Health check endpoints for the REST API.
Reports service status and which backend serves requests.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from shared.config.settings import settings
from shared.infrastructure.session_store import SessionStore

from cafeteria_api.core.dependencies import get_persistence, get_session_store
from cafeteria_api.repositories import FallbackStore, RemoteStore

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
def health_check(persistence: FallbackStore = Depends(get_persistence)):
    """
    Basic health check endpoint.
    Does not check dependencies; ``demo_mode`` is true without a remote store.
    """
    remote_available = persistence.is_remote_available()
    return {
        "status": "healthy",
        "service": "rest-api",
        "environment": settings.environment,
        "remote_available": remote_available,
        "demo_mode": not remote_available,
    }


@router.get("/health/detailed")
def detailed_health_check(
    persistence: FallbackStore = Depends(get_persistence),
    store: SessionStore = Depends(get_session_store),
):
    """
    Verify connectivity to the remote database and readability of the local store.
    Returns 503 when a configured dependency is down.
    """
    checks: dict = {
        "service": "rest-api",
        "environment": settings.environment,
        "dependencies": {},
    }
    all_healthy = True

    remote = persistence.primary
    if isinstance(remote, RemoteStore):
        try:
            remote.ping()
            checks["dependencies"]["remote_store"] = {"status": "healthy"}
        except (SQLAlchemyError, OSError) as e:
            checks["dependencies"]["remote_store"] = {"status": "unhealthy", "error": str(e)}
            all_healthy = False
    else:
        checks["dependencies"]["remote_store"] = {"status": "not_configured"}

    try:
        store.keys()
        checks["dependencies"]["local_store"] = {"status": "healthy"}
    except OSError as e:
        checks["dependencies"]["local_store"] = {"status": "unhealthy", "error": str(e)}
        all_healthy = False

    checks["status"] = "healthy" if all_healthy else "degraded"
    if not all_healthy:
        return JSONResponse(content=checks, status_code=503)
    return checks
