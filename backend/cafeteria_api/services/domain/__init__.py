"""
Domain Services.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    PersistencePort (remote / local / fallback)

Usage:
    from cafeteria_api.services.domain import OrderService

    service = OrderService(persistence)
    order = service.create(cart, "11:55", PaymentMethod.EFECTIVO, user)
"""

from .analytics_service import AnalyticsService, summarize
from .cart_service import Cart, validate_customization
from .order_service import OrderService
from .product_service import ProductService

__all__ = [
    "AnalyticsService",
    "summarize",
    "Cart",
    "validate_customization",
    "OrderService",
    "ProductService",
]
