"""
Centralized constants for the backend application.

Closed enumerations for roles, categories, payment methods and order
statuses, plus the order status transition table and pickup slots.

Usage:
    from shared.config.constants import Roles, OrderStatus, KIOSK_ROLES

    if role in KIOSK_ROLES:
        ...

    if status is OrderStatus.PENDING:
        ...
"""

from enum import Enum
from typing import Final


# =============================================================================
# User Roles
# =============================================================================


class Roles(str, Enum):
    """User role values (wire values of the users.role column)."""

    CICLO_BASICO = "ciclo_basico"
    CICLO_SUPERIOR = "ciclo_superior"
    KIOSQUERO = "kiosquero"
    ADMIN = "admin"


STUDENT_ROLES: Final[frozenset[Roles]] = frozenset({Roles.CICLO_BASICO, Roles.CICLO_SUPERIOR})
KIOSK_ROLES: Final[frozenset[Roles]] = frozenset({Roles.KIOSQUERO, Roles.ADMIN})


# =============================================================================
# Catalog
# =============================================================================


class Category(str, Enum):
    """Menu categories."""

    ENSALADAS = "ensaladas"
    TOSTADOS = "tostados"
    SANDWICHES = "sandwiches"
    BEBIDAS = "bebidas"
    EMPANADAS = "empanadas"


# Global condiment list offered for customizable products
CONDIMENTS: Final[tuple[str, ...]] = ("sal", "aceite", "vinagre", "limón", "orégano", "pimienta")


# =============================================================================
# Orders
# =============================================================================


class PaymentMethod(str, Enum):
    """Accepted payment methods."""

    TARJETA = "tarjeta"
    MERCADOPAGO = "mercadopago"
    EFECTIVO = "efectivo"


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "pendiente"
    PREPARING = "en_preparacion"
    READY = "listo"
    DELIVERED = "entregado"
    CANCELLED = "cancelado"

    @property
    def is_terminal(self) -> bool:
        return not ORDER_TRANSITIONS[self]


# Happy path: pendiente -> en_preparacion -> listo -> entregado
ORDER_NEXT_STATUS: Final[dict[OrderStatus, OrderStatus | None]] = {
    OrderStatus.PENDING: OrderStatus.PREPARING,
    OrderStatus.PREPARING: OrderStatus.READY,
    OrderStatus.READY: OrderStatus.DELIVERED,
    OrderStatus.DELIVERED: None,
    OrderStatus.CANCELLED: None,
}

# Valid order status transitions (from -> allowed targets)
ORDER_TRANSITIONS: Final[dict[OrderStatus, frozenset[OrderStatus]]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.PREPARING, OrderStatus.CANCELLED}),
    OrderStatus.PREPARING: frozenset({OrderStatus.READY, OrderStatus.CANCELLED}),
    OrderStatus.READY: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),  # Terminal state
    OrderStatus.CANCELLED: frozenset(),  # Terminal state
}

ACTIVE_ORDER_STATUSES: Final[frozenset[OrderStatus]] = frozenset(
    {OrderStatus.PENDING, OrderStatus.PREPARING, OrderStatus.READY}
)


# =============================================================================
# Pickup slots (break times)
# =============================================================================


BREAK_TIMES: Final[dict[Roles, tuple[str, ...]]] = {
    Roles.CICLO_BASICO: ("9:35", "11:55", "14:55"),
    Roles.CICLO_SUPERIOR: ("9:35", "11:55", "14:55", "17:15", "19:35"),
}

ALL_BREAK_TIMES: Final[tuple[str, ...]] = BREAK_TIMES[Roles.CICLO_SUPERIOR]


def pickup_times_for(role: Roles) -> tuple[str, ...]:
    """Pickup slots offered to a role. Kiosk staff see every slot."""
    if role in KIOSK_ROLES:
        return ALL_BREAK_TIMES
    return BREAK_TIMES[role]


# =============================================================================
# Inventory
# =============================================================================


class MovementType(str, Enum):
    """Inventory movement kinds."""

    SALE = "venta"
    ADJUSTMENT = "ajuste"
    RESTOCK = "reposicion"


# =============================================================================
# Validation Constants
# =============================================================================


class Limits:
    """Validation limits."""

    MIN_QUANTITY: Final[int] = 1
    MIN_PRICE: Final[int] = 0
    DEFAULT_MIN_STOCK_ALERT: Final[int] = 5
    MAX_NAME_LENGTH: Final[int] = 200
    MAX_DESCRIPTION_LENGTH: Final[int] = 2000
    MAX_NOTES_LENGTH: Final[int] = 500
    TOP_PRODUCTS: Final[int] = 5


# =============================================================================
# Local store slots
# =============================================================================


class StoreSlots:
    """Key names used in the local key-value session store."""

    CURRENT_USER: Final[str] = "currentUser"
    CART: Final[str] = "cart"
    ORDERS: Final[str] = "orders"
    PRODUCTS: Final[str] = "products"
    USERS: Final[str] = "users"
    INVENTORY_MOVEMENTS: Final[str] = "inventory_movements"
    DAILY_ANALYTICS: Final[str] = "daily_analytics"
