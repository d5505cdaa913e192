"""
Local key-value store.

Implements the persistence port over a ``SessionStore``. Each collection
lives in one slot as a JSON list (or mapping), so every write replaces the
whole slot snapshot at once and an order is never stored half-written.
"""

import time
from datetime import date
from typing import Any

from shared.config.constants import OrderStatus, StoreSlots
from shared.infrastructure.session_store import SessionStore
from shared.utils.schemas import (
    DailyAnalytics,
    InventoryMovement,
    Order,
    Product,
    UserAccount,
)

from .base import PersistencePort, newest_first


def _dump(record) -> dict[str, Any]:
    return record.model_dump(mode="json")


class LocalStore(PersistencePort):
    """PersistencePort over the local session store slots."""

    name = "local"

    def __init__(self, store: SessionStore):
        self._store = store

    @property
    def store(self) -> SessionStore:
        return self._store

    def _records(self, slot: str) -> list[dict[str, Any]]:
        return list(self._store.get(slot, []))

    def _upsert(self, slot: str, record_id: str, payload: dict[str, Any]) -> bool:
        """Replace the record with ``record_id`` or append it. True if it existed."""
        records = self._records(slot)
        for index, existing in enumerate(records):
            if existing.get("id") == record_id:
                records[index] = payload
                self._store.set(slot, records)
                return True
        records.append(payload)
        self._store.set(slot, records)
        return False

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_products(self, available_only: bool = False) -> list[Product]:
        products = [Product.model_validate(raw) for raw in self._records(StoreSlots.PRODUCTS)]
        if available_only:
            products = [product for product in products if product.is_available]
        return sorted(products, key=lambda product: (product.name, product.id))

    def get_product(self, product_id: str) -> Product | None:
        for raw in self._records(StoreSlots.PRODUCTS):
            if raw.get("id") == product_id:
                return Product.model_validate(raw)
        return None

    def save_product(self, product: Product) -> Product:
        self._upsert(StoreSlots.PRODUCTS, product.id, _dump(product))
        return product

    # =========================================================================
    # Orders
    # =========================================================================

    def generate_order_id(self) -> str:
        """ORD- followed by the last 6 digits of the epoch milliseconds."""
        existing = {raw.get("id") for raw in self._records(StoreSlots.ORDERS)}
        suffix = int(time.time() * 1000) % 1_000_000
        order_id = f"ORD-{suffix:06d}"
        while order_id in existing:
            suffix = (suffix + 1) % 1_000_000
            order_id = f"ORD-{suffix:06d}"
        return order_id

    def create_order(self, order: Order) -> Order:
        orders = self._records(StoreSlots.ORDERS)
        orders.append(_dump(order))
        self._store.set(StoreSlots.ORDERS, orders)
        return order

    def get_order(self, order_id: str) -> Order | None:
        for raw in self._records(StoreSlots.ORDERS):
            if raw.get("id") == order_id:
                return Order.model_validate(raw)
        return None

    def list_orders(
        self,
        user_id: str | None = None,
        scheduled_time: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        orders = [Order.model_validate(raw) for raw in self._records(StoreSlots.ORDERS)]
        if user_id is not None:
            orders = [order for order in orders if order.user_id == user_id]
        if scheduled_time is not None:
            orders = [order for order in orders if order.scheduled_time == scheduled_time]
        if status is not None:
            orders = [order for order in orders if order.status == OrderStatus(status)]
        return newest_first(orders)

    def update_order(self, order: Order) -> Order | None:
        orders = self._records(StoreSlots.ORDERS)
        for index, raw in enumerate(orders):
            if raw.get("id") == order.id:
                orders[index] = _dump(order)
                self._store.set(StoreSlots.ORDERS, orders)
                return order
        return None

    # =========================================================================
    # Inventory
    # =========================================================================

    def record_inventory_movement(self, movement: InventoryMovement) -> InventoryMovement:
        movements = self._records(StoreSlots.INVENTORY_MOVEMENTS)
        movements.append(_dump(movement))
        self._store.set(StoreSlots.INVENTORY_MOVEMENTS, movements)
        return movement

    def list_inventory_movements(self, product_id: str | None = None) -> list[InventoryMovement]:
        movements = [
            InventoryMovement.model_validate(raw)
            for raw in self._records(StoreSlots.INVENTORY_MOVEMENTS)
        ]
        if product_id is not None:
            movements = [movement for movement in movements if movement.product_id == product_id]
        return sorted(movements, key=lambda movement: movement.created_at, reverse=True)

    # =========================================================================
    # Users
    # =========================================================================

    def find_user_by_email(self, email: str) -> UserAccount | None:
        wanted = email.strip().lower()
        for raw in self._records(StoreSlots.USERS):
            if str(raw.get("email", "")).lower() == wanted:
                return UserAccount.model_validate(raw)
        return None

    def get_user(self, user_id: str) -> UserAccount | None:
        for raw in self._records(StoreSlots.USERS):
            if raw.get("id") == user_id:
                return UserAccount.model_validate(raw)
        return None

    def list_users(self) -> list[UserAccount]:
        users = [UserAccount.model_validate(raw) for raw in self._records(StoreSlots.USERS)]
        return sorted(users, key=lambda user: user.id)

    def save_user(self, account: UserAccount) -> UserAccount:
        self._upsert(StoreSlots.USERS, account.id, _dump(account))
        return account

    # =========================================================================
    # Analytics
    # =========================================================================

    def save_daily_analytics(self, summary: DailyAnalytics) -> DailyAnalytics:
        summaries = dict(self._store.get(StoreSlots.DAILY_ANALYTICS, {}))
        summaries[summary.day.isoformat()] = _dump(summary)
        self._store.set(StoreSlots.DAILY_ANALYTICS, summaries)
        return summary

    def get_daily_analytics(self, day: date) -> DailyAnalytics | None:
        raw = self._store.get(StoreSlots.DAILY_ANALYTICS, {}).get(day.isoformat())
        return DailyAnalytics.model_validate(raw) if raw else None
