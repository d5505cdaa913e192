"""
Authentication and authorization utilities.
Handles JWT access tokens for the demo accounts.
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Iterable

import jwt
from fastapi import Header

from shared.config.constants import Roles
from shared.config.logging import get_logger
from shared.config.settings import (
    JWT_AUDIENCE,
    JWT_ISSUER,
    JWT_SECRET,
    settings,
)
from shared.utils.exceptions import AuthenticationError, InsufficientRoleError

logger = get_logger(__name__)


# =============================================================================
# JWT Functions
# =============================================================================


def sign_jwt(payload: dict[str, Any], ttl_seconds: int | None = None) -> str:
    """
    Sign a JWT token with the given payload.

    Args:
        payload: Claims to include in the token (sub, role, email, name).
        ttl_seconds: Token lifetime in seconds. Defaults to access token expiry.

    Returns:
        Signed JWT token string.
    """
    if ttl_seconds is None:
        ttl_seconds = settings.jwt_access_token_expire_minutes * 60

    now = int(time.time())
    data = {
        **payload,
        "iss": JWT_ISSUER,
        "aud": JWT_AUDIENCE,
        "iat": now,
        "exp": now + ttl_seconds,
        "type": "access",
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(data, JWT_SECRET, algorithm="HS256")


def verify_jwt(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token.

    Returns:
        Decoded token claims.

    Raises:
        AuthenticationError: If token is invalid, expired or lacks required claims.
    """
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=["HS256"],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("El token ha expirado")
    except jwt.InvalidTokenError as e:
        # Log the actual error, return a generic message to the client
        logger.warning("JWT validation failed", error=str(e))
        raise AuthenticationError("Token inválido")

    if "sub" not in payload:
        raise AuthenticationError("Token inválido: falta el sujeto")

    try:
        Roles(payload.get("role"))
    except ValueError:
        raise AuthenticationError("Token inválido: rol desconocido")

    return payload


def get_bearer_token(authorization: str | None) -> str:
    """
    Extract bearer token from Authorization header.

    Raises:
        AuthenticationError: If header is missing or malformed.
    """
    if not authorization:
        raise AuthenticationError("Falta el encabezado Authorization")
    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Formato de Authorization inválido. Esperado: Bearer <token>")
    return authorization.split(" ", 1)[1].strip()


def current_user_context(
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict[str, Any]:
    """
    FastAPI dependency to get the current user context from JWT.

    Usage:
        @router.get("/protected")
        def protected_endpoint(ctx = Depends(current_user_context)):
            user_id = ctx["sub"]
            role = ctx["role"]
            ...

    Returns:
        Dict with: sub (user_id), role, email, name
    """
    token = get_bearer_token(authorization)
    return verify_jwt(token)


def context_role(ctx: dict[str, Any]) -> Roles:
    return Roles(ctx["role"])


def require_roles(ctx: dict[str, Any], allowed: Iterable[Roles | str]) -> None:
    """
    Verify that the user's role is one of the allowed roles.

    Args:
        ctx: User context from current_user_context.
        allowed: Roles that are permitted.

    Raises:
        InsufficientRoleError: If the user's role is not allowed.
    """
    allowed_values = sorted(Roles(role).value for role in allowed)
    if ctx.get("role") not in allowed_values:
        raise InsufficientRoleError(allowed_values, user_id=ctx.get("sub"), role=ctx.get("role"))
