"""
Authentication router.
Handles demo-account login and current user info.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request

from shared.config.logging import auth_logger as logger
from shared.config.logging import mask_email
from shared.config.settings import settings
from shared.security.auth import current_user_context, sign_jwt
from shared.security.password import verify_password
from shared.security.rate_limit import LOGIN_RATE_LIMIT, limiter
from shared.security.routing import landing_route
from shared.utils.exceptions import AuthenticationError
from shared.utils.schemas import LoginRequest, LoginResponse, User, UserInfo

from cafeteria_api.core.dependencies import get_persistence, user_from_context
from cafeteria_api.repositories import PersistencePort

router = APIRouter(prefix="/api/auth", tags=["auth"])


def user_info(user: User) -> UserInfo:
    return UserInfo(**user.model_dump(), landing_route=landing_route(user.role))


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(
    request: Request,
    body: LoginRequest,
    persistence: PersistencePort = Depends(get_persistence),
) -> LoginResponse:
    """
    Authenticate a demo account and return an access token.

    The access token contains:
    - sub: user ID
    - role: the account's fixed role
    - email, name: display data for clients
    """
    account = persistence.find_user_by_email(body.email)

    if account is None or not account.is_active:
        logger.warning("LOGIN_FAILED: User not found", email=mask_email(body.email))
        raise AuthenticationError("Email o contraseña incorrectos")

    if not verify_password(body.password, account.password_hash):
        logger.warning("LOGIN_FAILED: Invalid password", email=mask_email(body.email), user_id=account.id)
        raise AuthenticationError("Email o contraseña incorrectos")

    user = User(id=account.id, email=account.email, role=account.role, name=account.name)
    token = sign_jwt({"sub": user.id, "role": user.role.value, "email": user.email, "name": user.name})

    logger.info("LOGIN_SUCCESS", user_id=user.id, role=user.role.value)
    return LoginResponse(
        access_token=token,
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=user_info(user),
    )


@router.get("/me", response_model=UserInfo)
def me(ctx: dict[str, Any] = Depends(current_user_context)) -> UserInfo:
    """Current user from the access token, with the role's landing route."""
    return user_info(user_from_context(ctx))
