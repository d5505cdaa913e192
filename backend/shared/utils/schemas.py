"""
Shared Pydantic schemas used across the application.

Domain records (Product, CartItem, Order, User...) double as the serialized
shape stored in the local key-value store, so they must round-trip through
``model_dump(mode="json")`` / ``model_validate``.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, computed_field, field_validator

from shared.config.constants import (
    Category,
    Limits,
    MovementType,
    OrderStatus,
    PaymentMethod,
    Roles,
)
from shared.utils.validators import sanitize_text, validate_image_url


# =============================================================================
# Catalog
# =============================================================================


class Product(BaseModel):
    """A menu product as stored by either backend."""

    id: str
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    category: Category
    price: int = Field(ge=Limits.MIN_PRICE)
    description: str = Field(default="", max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image_url: Optional[str] = None
    is_available: bool = True
    is_customizable: bool = False
    ingredients: list[str] = Field(default_factory=list)
    stock_quantity: int = 0
    min_stock_alert: int = Limits.DEFAULT_MIN_STOCK_ALERT

    @computed_field  # type: ignore[misc]
    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.min_stock_alert


class Customization(BaseModel):
    """Selected ingredients and condiments for a customizable product."""

    ingredients: list[str] = Field(default_factory=list)
    condiments: list[str] = Field(default_factory=list)

    @field_validator("ingredients", "condiments")
    @classmethod
    def _as_sorted_set(cls, value: list[str]) -> list[str]:
        return sorted({item.strip() for item in value if item and item.strip()})

    @property
    def is_empty(self) -> bool:
        return not self.ingredients and not self.condiments

    def key(self) -> str:
        """Canonical serialized form used for line identity."""
        return json.dumps(self.model_dump(), sort_keys=True, ensure_ascii=False)


def customization_key(customization: Customization | None) -> str:
    """Serialized customization payload; empty and missing compare equal."""
    if customization is None or customization.is_empty:
        return ""
    return customization.key()


class CartItem(BaseModel):
    """One cart line: a product snapshot, a quantity and an optional customization."""

    product: Product
    quantity: int = Field(ge=Limits.MIN_QUANTITY)
    customizations: Optional[Customization] = None

    @property
    def unit_price(self) -> int:
        return self.product.price

    @property
    def subtotal(self) -> int:
        return self.product.price * self.quantity

    def line_key(self) -> tuple[str, str]:
        return self.product.id, customization_key(self.customizations)


# =============================================================================
# Users
# =============================================================================


class User(BaseModel):
    """Public user record."""

    id: str
    email: str
    role: Roles
    name: str


class UserAccount(User):
    """User record including credentials; never returned by the API."""

    password_hash: str
    is_active: bool = True


# =============================================================================
# Orders
# =============================================================================


class OrderItem(BaseModel):
    """Order line snapshotted at submission time (unit price frozen)."""

    product_id: str
    product_name: str
    category: Optional[Category] = None
    unit_price: int = Field(ge=Limits.MIN_PRICE)
    quantity: int = Field(ge=Limits.MIN_QUANTITY)
    customizations: Optional[Customization] = None

    @property
    def subtotal(self) -> int:
        return self.unit_price * self.quantity

    @classmethod
    def from_cart_item(cls, item: CartItem) -> "OrderItem":
        customizations = item.customizations
        if customizations is not None and customizations.is_empty:
            customizations = None
        return cls(
            product_id=item.product.id,
            product_name=item.product.name,
            category=item.product.category,
            unit_price=item.product.price,
            quantity=item.quantity,
            customizations=customizations,
        )


class Order(BaseModel):
    """A placed order. total_amount is frozen at creation."""

    id: str
    user_id: str
    items: list[OrderItem]
    total_amount: int = Field(ge=0)
    scheduled_time: str
    payment_method: PaymentMethod
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime
    user_cycle: Optional[Roles] = None
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)


# =============================================================================
# Inventory & analytics
# =============================================================================


class InventoryMovement(BaseModel):
    """A stock change for one product."""

    id: str
    product_id: str
    change_type: MovementType
    previous_quantity: int
    quantity_change: int
    new_quantity: int
    reason: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime


class TimeSlotStats(BaseModel):
    orders: int = 0
    revenue: int = 0


class ProductSales(BaseModel):
    product_name: str
    quantity: int = 0
    revenue: int = 0


class DailyAnalytics(BaseModel):
    """Aggregated sales for one calendar day."""

    day: date
    total_orders: int = 0
    total_revenue: int = 0
    average_order_value: float = 0.0
    active_orders: int = 0
    orders_by_status: dict[str, int] = Field(default_factory=dict)
    orders_by_time: dict[str, TimeSlotStats] = Field(default_factory=dict)
    top_products: list[ProductSales] = Field(default_factory=list)


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class UserInfo(User):
    """User information included in auth responses."""

    landing_route: str


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


class RouteResolution(BaseModel):
    """Result of resolving a view path for a role."""

    requested: str
    path: str
    redirected: bool


# =============================================================================
# Cart Schemas
# =============================================================================


class AddToCartRequest(BaseModel):
    """Request to add a product to the caller's cart."""

    product_id: str
    quantity: int = Field(default=1, ge=Limits.MIN_QUANTITY)
    customizations: Optional[Customization] = None


class UpdateCartItemRequest(BaseModel):
    """Set the quantity of one line; zero or less removes it."""

    product_id: str
    quantity: int
    customizations: Optional[Customization] = None


class RemoveCartItemRequest(BaseModel):
    product_id: str
    customizations: Optional[Customization] = None


class CartItemOutput(BaseModel):
    product: Product
    quantity: int
    customizations: Optional[Customization] = None
    subtotal: int


class CartOutput(BaseModel):
    """Output for the full cart."""

    items: list[CartItemOutput]
    total_amount: int
    total_items: int


# =============================================================================
# Order Schemas
# =============================================================================


class CreateOrderRequest(BaseModel):
    """Checkout request: the cart itself comes from the caller's session."""

    scheduled_time: str = Field(min_length=1)
    payment_method: PaymentMethod
    notes: Optional[str] = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)

    @field_validator("notes")
    @classmethod
    def _clean_notes(cls, value: Optional[str]) -> Optional[str]:
        return sanitize_text(value)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus


class PickupTimesOutput(BaseModel):
    role: Roles
    pickup_times: list[str]


# =============================================================================
# Inventory Schemas
# =============================================================================


class ProductCreateRequest(BaseModel):
    name: str = Field(min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    category: Category
    price: int = Field(gt=0)
    description: str = Field(default="", max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image_url: Optional[str] = None
    is_available: bool = True
    is_customizable: bool = False
    ingredients: list[str] = Field(default_factory=list)
    stock_quantity: int = Field(default=0, ge=0)
    min_stock_alert: int = Field(default=Limits.DEFAULT_MIN_STOCK_ALERT, ge=0)

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: Optional[str]) -> Optional[str]:
        return validate_image_url(value)


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=Limits.MAX_NAME_LENGTH)
    category: Optional[Category] = None
    price: Optional[int] = Field(default=None, gt=0)
    description: Optional[str] = Field(default=None, max_length=Limits.MAX_DESCRIPTION_LENGTH)
    image_url: Optional[str] = None
    is_available: Optional[bool] = None
    is_customizable: Optional[bool] = None
    ingredients: Optional[list[str]] = None
    min_stock_alert: Optional[int] = Field(default=None, ge=0)

    @field_validator("image_url")
    @classmethod
    def _check_image_url(cls, value: Optional[str]) -> Optional[str]:
        return validate_image_url(value)


class AvailabilityRequest(BaseModel):
    is_available: bool


class StockAdjustmentRequest(BaseModel):
    """Restock (positive) or correct (any sign) the stock of a product."""

    quantity_change: int
    change_type: MovementType = MovementType.RESTOCK
    reason: Optional[str] = Field(default=None, max_length=Limits.MAX_NOTES_LENGTH)


class StockAdjustmentOutput(BaseModel):
    product: Product
    movement: InventoryMovement
