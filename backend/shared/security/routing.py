"""
Role-scoped view routing.

Maps each role to the views it may open and to its landing view. A path the
role may not open resolves to the role's landing route instead of failing.

Usage:
    from shared.security.routing import resolve_route

    resolve_route(Roles.KIOSQUERO, "/menu")  # -> "/kiosco/dashboard"
"""

from typing import Final

from shared.config.constants import Roles

LANDING_ROUTES: Final[dict[Roles, str]] = {
    Roles.CICLO_BASICO: "/menu",
    Roles.CICLO_SUPERIOR: "/menu",
    Roles.KIOSQUERO: "/kiosco/dashboard",
    Roles.ADMIN: "/admin/users",
}

_STUDENTS = frozenset({Roles.CICLO_BASICO, Roles.CICLO_SUPERIOR})

# Route prefix -> roles allowed to view it
ROUTE_TABLE: Final[dict[str, frozenset[Roles]]] = {
    "/menu": _STUDENTS,
    "/cart": _STUDENTS,
    "/checkout": _STUDENTS,
    "/order-confirmation": _STUDENTS,
    "/orders": _STUDENTS,
    "/profile": _STUDENTS,
    "/kiosco/dashboard": frozenset({Roles.KIOSQUERO}),
    "/kiosco/inventory": frozenset({Roles.KIOSQUERO}),
    "/kiosco/analytics": frozenset({Roles.KIOSQUERO}),
    "/admin/users": frozenset({Roles.ADMIN}),
    "/admin/reports": frozenset({Roles.ADMIN}),
}

# Routes that take a trailing parameter, e.g. /order-confirmation/ORD-123456
_PARAMETERIZED = frozenset({"/order-confirmation"})


def landing_route(role: Roles) -> str:
    """Default view for a role."""
    return LANDING_ROUTES[Roles(role)]


def _normalize(path: str) -> str:
    path = (path or "/").split("?", 1)[0].strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def _route_key(path: str) -> str | None:
    if path in ROUTE_TABLE and path not in _PARAMETERIZED:
        return path
    for prefix in _PARAMETERIZED:
        rest = path[len(prefix):]
        if path.startswith(prefix + "/") and rest.count("/") == 1 and len(rest) > 1:
            return prefix
    return None


def can_view(role: Roles, path: str) -> bool:
    key = _route_key(_normalize(path))
    return key is not None and Roles(role) in ROUTE_TABLE[key]


def resolve_route(role: Roles, path: str) -> str:
    """
    Resolve the view a role ends up on when requesting ``path``.

    Returns the normalized path when allowed, otherwise the landing route.
    Unknown paths (including "/") resolve to the landing route too.
    """
    normalized = _normalize(path)
    if can_view(role, normalized):
        return normalized
    return landing_route(role)
