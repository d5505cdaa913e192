"""
SQLAlchemy ORM Models Package (remote store schema).

- base: Base class and TimestampMixin
- catalog: Product
- order: Order, OrderItem
- user: User
- inventory: InventoryLog
- analytics: AnalyticsDaily
"""

from .base import Base, TimestampMixin
from .catalog import Product
from .order import Order, OrderItem
from .user import User
from .inventory import InventoryLog
from .analytics import AnalyticsDaily

__all__ = [
    "Base",
    "TimestampMixin",
    "Product",
    "Order",
    "OrderItem",
    "User",
    "InventoryLog",
    "AnalyticsDaily",
]
