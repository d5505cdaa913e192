"""
Admin users router.
Read-only roster of accounts.
"""

from typing import Any

from fastapi import APIRouter, Depends

from shared.config.constants import Roles
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import User

from cafeteria_api.core.dependencies import get_persistence
from cafeteria_api.repositories import PersistencePort

router = APIRouter(prefix="/users")


@router.get("", response_model=list[User])
def list_users(
    ctx: dict[str, Any] = Depends(current_user_context),
    persistence: PersistencePort = Depends(get_persistence),
) -> list[User]:
    """All accounts without credentials."""
    require_roles(ctx, [Roles.ADMIN])
    return [
        User(id=account.id, email=account.email, role=account.role, name=account.name)
        for account in persistence.list_users()
    ]
