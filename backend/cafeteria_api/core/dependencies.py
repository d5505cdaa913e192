"""
FastAPI dependencies: persistence, session store, services, current user, cart.

Tests replace ``get_session_store`` and ``get_persistence`` through
``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Any

from fastapi import Depends

from shared.config.constants import STUDENT_ROLES, StoreSlots
from shared.config.settings import settings
from shared.infrastructure.db import get_session_factory
from shared.infrastructure.session_store import JsonFileSessionStore, SessionStore
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import User

from cafeteria_api.repositories import FallbackStore, LocalStore, RemoteStore
from cafeteria_api.services.domain import AnalyticsService, Cart, OrderService, ProductService


@lru_cache
def get_session_store() -> SessionStore:
    """Process-wide local key-value store (local fallback data and carts)."""
    return JsonFileSessionStore(settings.local_store_path)


def build_persistence(session_store: SessionStore) -> FallbackStore:
    """Remote store when a database URL is configured, local store behind it."""
    session_factory = get_session_factory()
    primary = RemoteStore(session_factory) if session_factory is not None else None
    return FallbackStore(primary, LocalStore(session_store))


@lru_cache
def get_persistence() -> FallbackStore:
    return build_persistence(get_session_store())


# =============================================================================
# Services
# =============================================================================


def get_order_service(persistence: FallbackStore = Depends(get_persistence)) -> OrderService:
    return OrderService(persistence)


def get_product_service(persistence: FallbackStore = Depends(get_persistence)) -> ProductService:
    return ProductService(persistence)


def get_analytics_service(persistence: FallbackStore = Depends(get_persistence)) -> AnalyticsService:
    return AnalyticsService(persistence)


# =============================================================================
# Current user and cart
# =============================================================================


def user_from_context(ctx: dict[str, Any]) -> User:
    return User(id=str(ctx["sub"]), email=ctx.get("email", ""), role=ctx["role"], name=ctx.get("name", ""))


def current_user(ctx: dict[str, Any] = Depends(current_user_context)) -> User:
    return user_from_context(ctx)


def cart_slot(user_id: str) -> str:
    return f"{StoreSlots.CART}:{user_id}"


def get_cart(
    ctx: dict[str, Any] = Depends(current_user_context),
    store: SessionStore = Depends(get_session_store),
) -> Cart:
    """The caller's cart. Only students have one."""
    require_roles(ctx, STUDENT_ROLES)
    return Cart(store, slot=cart_slot(str(ctx["sub"]))).load()
