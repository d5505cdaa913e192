"""
Navigation router.
Resolves which view a role lands on for a requested path.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from shared.security.auth import context_role, current_user_context
from shared.security.routing import resolve_route
from shared.utils.schemas import RouteResolution

router = APIRouter(prefix="/api/routes", tags=["navigation"])


@router.get("/resolve", response_model=RouteResolution)
def resolve(
    path: str = Query(default="/", max_length=512),
    ctx: dict[str, Any] = Depends(current_user_context),
) -> RouteResolution:
    """
    Return ``path`` if the caller's role may open it, otherwise the role's
    landing route. Never fails for an authenticated caller.
    """
    resolved = resolve_route(context_role(ctx), path)
    return RouteResolution(requested=path, path=resolved, redirected=resolved != path)
