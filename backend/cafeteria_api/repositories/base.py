"""
Persistence port shared by the remote store, the local store and the
fallback combinator.

Every operation takes and returns the pydantic records from
``shared.utils.schemas`` so callers never see which backend answered.
"""

from abc import ABC, abstractmethod
from datetime import date

from shared.config.constants import OrderStatus
from shared.utils.schemas import (
    DailyAnalytics,
    InventoryMovement,
    Order,
    Product,
    UserAccount,
)


def newest_first(orders: list[Order]) -> list[Order]:
    """Sort orders by creation time, newest first (stable on ties)."""
    return sorted(orders, key=lambda order: order.created_at, reverse=True)


class PersistencePort(ABC):
    """
    Storage operations used by the services.

    Subclasses must implement every operation; ``name`` identifies the
    backend in log lines.
    """

    name: str = "port"

    # =========================================================================
    # Catalog
    # =========================================================================

    @abstractmethod
    def list_products(self, available_only: bool = False) -> list[Product]:
        """All products ordered by name; optionally only available ones."""
        ...

    @abstractmethod
    def get_product(self, product_id: str) -> Product | None:
        ...

    @abstractmethod
    def save_product(self, product: Product) -> Product:
        """Insert or update a product."""
        ...

    # =========================================================================
    # Orders
    # =========================================================================

    @abstractmethod
    def generate_order_id(self) -> str:
        """Allocate a new ``ORD-...`` identifier."""
        ...

    @abstractmethod
    def create_order(self, order: Order) -> Order:
        """Persist header and items as one unit. Returns the order as stored."""
        ...

    @abstractmethod
    def get_order(self, order_id: str) -> Order | None:
        ...

    @abstractmethod
    def list_orders(
        self,
        user_id: str | None = None,
        scheduled_time: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Orders matching every given filter, newest first."""
        ...

    @abstractmethod
    def update_order(self, order: Order) -> Order | None:
        """Persist status and timestamps of an existing order; None if unknown."""
        ...

    # =========================================================================
    # Inventory
    # =========================================================================

    @abstractmethod
    def record_inventory_movement(self, movement: InventoryMovement) -> InventoryMovement:
        ...

    @abstractmethod
    def list_inventory_movements(self, product_id: str | None = None) -> list[InventoryMovement]:
        """Movements newest first, optionally for one product."""
        ...

    # =========================================================================
    # Users
    # =========================================================================

    @abstractmethod
    def find_user_by_email(self, email: str) -> UserAccount | None:
        ...

    @abstractmethod
    def get_user(self, user_id: str) -> UserAccount | None:
        ...

    @abstractmethod
    def list_users(self) -> list[UserAccount]:
        ...

    @abstractmethod
    def save_user(self, account: UserAccount) -> UserAccount:
        ...

    # =========================================================================
    # Analytics
    # =========================================================================

    @abstractmethod
    def save_daily_analytics(self, summary: DailyAnalytics) -> DailyAnalytics:
        """Upsert the summary row for ``summary.day``."""
        ...

    @abstractmethod
    def get_daily_analytics(self, day: date) -> DailyAnalytics | None:
        ...
