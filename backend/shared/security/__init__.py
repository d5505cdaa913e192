"""
Security module: Authentication, password hashing, rate limiting, view routing.
"""

from shared.security.auth import (
    sign_jwt,
    verify_jwt,
    get_bearer_token,
    current_user_context,
    context_role,
    require_roles,
)
from shared.security.password import hash_password, verify_password
from shared.security.rate_limit import (
    limiter,
    rate_limit_exceeded_handler,
)
from shared.security.routing import (
    landing_route,
    resolve_route,
    can_view,
)

__all__ = [
    # auth
    "sign_jwt",
    "verify_jwt",
    "get_bearer_token",
    "current_user_context",
    "context_role",
    "require_roles",
    # password
    "hash_password",
    "verify_password",
    # rate_limit
    "limiter",
    "rate_limit_exceeded_handler",
    # routing
    "landing_route",
    "resolve_route",
    "can_view",
]
