"""
Fallback store: remote first, local second.

Usage:
    store = FallbackStore(RemoteStore(factory), LocalStore(JsonFileSessionStore(path)))
    store.create_order(order)  # remote; on a remote error, logged and written locally

Semantics:
- ``is_remote_available()`` only reports whether a remote store is configured;
  it does not probe liveness.
- A remote error (SQLAlchemyError, OSError) is logged and the same call is
  served by the local store. There is no retry.
- Lookups that miss remotely (None, or an empty order list) also consult the
  local store, since orders placed during an outage only exist there.
- An order whose remote write fails is stored locally under a local id.
- Local-only writes are never replayed to the remote store.
"""

from datetime import date
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from shared.config.constants import OrderStatus
from shared.config.logging import persistence_logger as logger
from shared.utils.exceptions import StorageError
from shared.utils.schemas import (
    DailyAnalytics,
    InventoryMovement,
    Order,
    Product,
    UserAccount,
)

from .base import PersistencePort

T = TypeVar("T")

# Errors that mean "the remote store is unreachable or rejected the call"
REMOTE_ERRORS = (SQLAlchemyError, OSError)


def _is_missing(result: Any) -> bool:
    return result is None or result == []


class FallbackStore(PersistencePort):
    """PersistencePort that degrades from a primary to a secondary store."""

    name = "fallback"

    def __init__(self, primary: PersistencePort | None, secondary: PersistencePort):
        self._primary = primary
        self._secondary = secondary

    @property
    def primary(self) -> PersistencePort | None:
        return self._primary

    @property
    def secondary(self) -> PersistencePort:
        return self._secondary

    def is_remote_available(self) -> bool:
        """True when a primary store is configured (no liveness check)."""
        return self._primary is not None

    def _call(
        self,
        operation: str,
        call: Callable[[PersistencePort], T],
        fallback_on_missing: bool = False,
    ) -> T:
        if self._primary is not None:
            try:
                result = call(self._primary)
            except REMOTE_ERRORS as exc:
                logger.error(
                    "Remote store failed, using local store",
                    operation=operation,
                    backend=self._primary.name,
                    error=f"{type(exc).__name__}: {exc}",
                )
            else:
                if not (fallback_on_missing and _is_missing(result)):
                    return result
                logger.debug("Remote store miss, checking local store", operation=operation)

        return self._local(operation, call)

    def _local(self, operation: str, call: Callable[[PersistencePort], T]) -> T:
        try:
            return call(self._secondary)
        except OSError as exc:
            logger.error(
                "Local store failed",
                operation=operation,
                backend=self._secondary.name,
                error=str(exc),
                exc_info=True,
            )
            raise StorageError(operation) from exc

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_products(self, available_only: bool = False) -> list[Product]:
        return self._call("list_products", lambda store: store.list_products(available_only))

    def get_product(self, product_id: str) -> Product | None:
        return self._call(
            "get_product", lambda store: store.get_product(product_id), fallback_on_missing=True
        )

    def save_product(self, product: Product) -> Product:
        return self._call("save_product", lambda store: store.save_product(product))

    # =========================================================================
    # Orders
    # =========================================================================

    def generate_order_id(self) -> str:
        return self._call("generate_order_id", lambda store: store.generate_order_id())

    def create_order(self, order: Order) -> Order:
        """
        Persist an order, remote first.

        When the remote write fails the order is stored locally under a fresh
        local id: the remote id was never taken, so the remote sequence would
        hand it out again. Callers must use the returned order.
        """
        if self._primary is None:
            return self._local("create_order", lambda store: store.create_order(order))

        try:
            return self._primary.create_order(order)
        except REMOTE_ERRORS as exc:
            logger.error(
                "Remote store failed, using local store",
                operation="create_order",
                backend=self._primary.name,
                error=f"{type(exc).__name__}: {exc}",
            )

        def store_locally(store: PersistencePort) -> Order:
            local_order = order.model_copy(update={"id": store.generate_order_id()})
            return store.create_order(local_order)

        stored = self._local("create_order", store_locally)
        logger.info("Order stored locally", remote_id=order.id, order_id=stored.id)
        return stored

    def get_order(self, order_id: str) -> Order | None:
        return self._call(
            "get_order", lambda store: store.get_order(order_id), fallback_on_missing=True
        )

    def list_orders(
        self,
        user_id: str | None = None,
        scheduled_time: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        return self._call(
            "list_orders",
            lambda store: store.list_orders(
                user_id=user_id, scheduled_time=scheduled_time, status=status
            ),
            fallback_on_missing=True,
        )

    def update_order(self, order: Order) -> Order | None:
        return self._call(
            "update_order", lambda store: store.update_order(order), fallback_on_missing=True
        )

    # =========================================================================
    # Inventory
    # =========================================================================

    def record_inventory_movement(self, movement: InventoryMovement) -> InventoryMovement:
        return self._call(
            "record_inventory_movement", lambda store: store.record_inventory_movement(movement)
        )

    def list_inventory_movements(self, product_id: str | None = None) -> list[InventoryMovement]:
        return self._call(
            "list_inventory_movements", lambda store: store.list_inventory_movements(product_id)
        )

    # =========================================================================
    # Users
    # =========================================================================

    def find_user_by_email(self, email: str) -> UserAccount | None:
        return self._call(
            "find_user_by_email",
            lambda store: store.find_user_by_email(email),
            fallback_on_missing=True,
        )

    def get_user(self, user_id: str) -> UserAccount | None:
        return self._call(
            "get_user", lambda store: store.get_user(user_id), fallback_on_missing=True
        )

    def list_users(self) -> list[UserAccount]:
        return self._call("list_users", lambda store: store.list_users())

    def save_user(self, account: UserAccount) -> UserAccount:
        return self._call("save_user", lambda store: store.save_user(account))

    # =========================================================================
    # Analytics
    # =========================================================================

    def save_daily_analytics(self, summary: DailyAnalytics) -> DailyAnalytics:
        return self._call("save_daily_analytics", lambda store: store.save_daily_analytics(summary))

    def get_daily_analytics(self, day: date) -> DailyAnalytics | None:
        return self._call(
            "get_daily_analytics",
            lambda store: store.get_daily_analytics(day),
            fallback_on_missing=True,
        )
