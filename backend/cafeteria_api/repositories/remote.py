"""
Remote relational store (SQLAlchemy).

Each operation opens its own session from the injected factory and commits
with ``safe_commit``; order header and items go in a single transaction.
SQLAlchemy errors propagate so the fallback store can take over.
"""

from datetime import date, datetime, timezone
from typing import Callable

from sqlalchemy import func, select, text
from sqlalchemy.orm import Session, selectinload

from cafeteria_api import models
from shared.config.constants import OrderStatus
from shared.infrastructure.db import safe_commit
from shared.utils.schemas import (
    Customization,
    DailyAnalytics,
    InventoryMovement,
    Order,
    OrderItem,
    Product,
    UserAccount,
)

from .base import PersistencePort


def _aware(value: datetime | None) -> datetime | None:
    """SQLite drops tzinfo; stored values are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


# =============================================================================
# Row <-> record conversion
# =============================================================================


def _product_from_row(row: models.Product) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        category=row.category,
        price=row.price,
        description=row.description or "",
        image_url=row.image_url,
        is_available=row.is_available,
        is_customizable=row.is_customizable,
        ingredients=list(row.ingredients or []),
        stock_quantity=row.stock_quantity,
        min_stock_alert=row.min_stock_alert,
    )


def _order_from_row(row: models.Order) -> Order:
    items = [
        OrderItem(
            product_id=item.product_id,
            product_name=item.product_name,
            category=item.category,
            unit_price=item.unit_price,
            quantity=item.quantity,
            customizations=Customization.model_validate(item.customizations)
            if item.customizations
            else None,
        )
        for item in row.items
    ]
    return Order(
        id=row.id,
        user_id=row.user_id,
        items=items,
        total_amount=row.total_amount,
        scheduled_time=row.scheduled_time,
        payment_method=row.payment_method,
        status=row.status,
        created_at=_aware(row.created_at),
        user_cycle=row.user_cycle,
        notes=row.notes,
        updated_at=_aware(row.updated_at),
        completed_at=_aware(row.completed_at),
    )


def _user_from_row(row: models.User) -> UserAccount:
    return UserAccount(
        id=row.id,
        email=row.email,
        role=row.role,
        name=row.name,
        password_hash=row.password_hash,
        is_active=row.is_active,
    )


def _movement_from_row(row: models.InventoryLog) -> InventoryMovement:
    return InventoryMovement(
        id=row.id,
        product_id=row.product_id,
        change_type=row.change_type,
        previous_quantity=row.previous_quantity,
        quantity_change=row.quantity_change,
        new_quantity=row.new_quantity,
        reason=row.reason,
        created_by=row.created_by,
        created_at=_aware(row.created_at),
    )


def _analytics_from_row(row: models.AnalyticsDaily) -> DailyAnalytics:
    return DailyAnalytics(
        day=row.day,
        total_orders=row.total_orders,
        total_revenue=row.total_revenue,
        average_order_value=row.average_order_value,
        active_orders=row.active_orders,
        orders_by_status=row.orders_by_status or {},
        orders_by_time=row.orders_by_time or {},
        top_products=row.top_products or [],
    )


class RemoteStore(PersistencePort):
    """PersistencePort over the relational database."""

    name = "remote"

    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def ping(self) -> None:
        """Round-trip to the database; raises on connection failure."""
        with self._session_factory() as db:
            db.execute(text("SELECT 1"))

    # =========================================================================
    # Catalog
    # =========================================================================

    def list_products(self, available_only: bool = False) -> list[Product]:
        query = select(models.Product).order_by(models.Product.name, models.Product.id)
        if available_only:
            query = query.where(models.Product.is_available.is_(True))
        with self._session_factory() as db:
            return [_product_from_row(row) for row in db.scalars(query).all()]

    def get_product(self, product_id: str) -> Product | None:
        with self._session_factory() as db:
            row = db.get(models.Product, product_id)
            return _product_from_row(row) if row else None

    def save_product(self, product: Product) -> Product:
        with self._session_factory() as db:
            row = db.get(models.Product, product.id)
            if row is None:
                row = models.Product(id=product.id, created_at=datetime.now(timezone.utc))
                db.add(row)
            else:
                row.updated_at = datetime.now(timezone.utc)
            row.name = product.name
            row.category = product.category.value
            row.price = product.price
            row.description = product.description
            row.image_url = product.image_url
            row.is_available = product.is_available
            row.is_customizable = product.is_customizable
            row.ingredients = list(product.ingredients)
            row.stock_quantity = product.stock_quantity
            row.min_stock_alert = product.min_stock_alert
            safe_commit(db)
            return product

    # =========================================================================
    # Orders
    # =========================================================================

    def generate_order_id(self) -> str:
        """ORD-YYYYMMDD-NNNN, numbered per calendar day (UTC)."""
        prefix = f"ORD-{datetime.now(timezone.utc):%Y%m%d}-"
        with self._session_factory() as db:
            count = db.scalar(
                select(func.count()).select_from(models.Order).where(models.Order.id.like(f"{prefix}%"))
            )
        return f"{prefix}{(count or 0) + 1:04d}"

    def create_order(self, order: Order) -> Order:
        row = models.Order(
            id=order.id,
            user_id=order.user_id,
            user_cycle=order.user_cycle.value if order.user_cycle else None,
            total_amount=order.total_amount,
            scheduled_time=order.scheduled_time,
            payment_method=order.payment_method.value,
            status=order.status.value,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
            completed_at=order.completed_at,
        )
        row.items = [
            models.OrderItem(
                position=position,
                product_id=item.product_id,
                product_name=item.product_name,
                category=item.category.value if item.category else None,
                quantity=item.quantity,
                unit_price=item.unit_price,
                customizations=item.customizations.model_dump() if item.customizations else None,
            )
            for position, item in enumerate(order.items)
        ]
        with self._session_factory() as db:
            db.add(row)
            safe_commit(db)
        return order

    def _order_query(self):
        return select(models.Order).options(selectinload(models.Order.items))

    def get_order(self, order_id: str) -> Order | None:
        with self._session_factory() as db:
            row = db.scalar(self._order_query().where(models.Order.id == order_id))
            return _order_from_row(row) if row else None

    def list_orders(
        self,
        user_id: str | None = None,
        scheduled_time: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        query = self._order_query().order_by(models.Order.created_at.desc(), models.Order.id.desc())
        if user_id is not None:
            query = query.where(models.Order.user_id == user_id)
        if scheduled_time is not None:
            query = query.where(models.Order.scheduled_time == scheduled_time)
        if status is not None:
            query = query.where(models.Order.status == OrderStatus(status).value)
        with self._session_factory() as db:
            return [_order_from_row(row) for row in db.scalars(query).all()]

    def update_order(self, order: Order) -> Order | None:
        with self._session_factory() as db:
            row = db.get(models.Order, order.id)
            if row is None:
                return None
            row.status = order.status.value
            row.notes = order.notes
            row.updated_at = order.updated_at
            row.completed_at = order.completed_at
            safe_commit(db)
        return order

    # =========================================================================
    # Inventory
    # =========================================================================

    def record_inventory_movement(self, movement: InventoryMovement) -> InventoryMovement:
        with self._session_factory() as db:
            db.add(
                models.InventoryLog(
                    id=movement.id,
                    product_id=movement.product_id,
                    change_type=movement.change_type.value,
                    previous_quantity=movement.previous_quantity,
                    quantity_change=movement.quantity_change,
                    new_quantity=movement.new_quantity,
                    reason=movement.reason,
                    created_by=movement.created_by,
                    created_at=movement.created_at,
                )
            )
            safe_commit(db)
        return movement

    def list_inventory_movements(self, product_id: str | None = None) -> list[InventoryMovement]:
        query = select(models.InventoryLog).order_by(models.InventoryLog.created_at.desc())
        if product_id is not None:
            query = query.where(models.InventoryLog.product_id == product_id)
        with self._session_factory() as db:
            return [_movement_from_row(row) for row in db.scalars(query).all()]

    # =========================================================================
    # Users
    # =========================================================================

    def find_user_by_email(self, email: str) -> UserAccount | None:
        with self._session_factory() as db:
            row = db.scalar(
                select(models.User).where(func.lower(models.User.email) == email.strip().lower())
            )
            return _user_from_row(row) if row else None

    def get_user(self, user_id: str) -> UserAccount | None:
        with self._session_factory() as db:
            row = db.get(models.User, user_id)
            return _user_from_row(row) if row else None

    def list_users(self) -> list[UserAccount]:
        with self._session_factory() as db:
            rows = db.scalars(select(models.User).order_by(models.User.id)).all()
            return [_user_from_row(row) for row in rows]

    def save_user(self, account: UserAccount) -> UserAccount:
        with self._session_factory() as db:
            row = db.get(models.User, account.id)
            if row is None:
                row = models.User(id=account.id, created_at=datetime.now(timezone.utc))
                db.add(row)
            else:
                row.updated_at = datetime.now(timezone.utc)
            row.email = account.email
            row.name = account.name
            row.role = account.role.value
            row.password_hash = account.password_hash
            row.is_active = account.is_active
            safe_commit(db)
        return account

    # =========================================================================
    # Analytics
    # =========================================================================

    def save_daily_analytics(self, summary: DailyAnalytics) -> DailyAnalytics:
        payload = summary.model_dump(mode="json")
        with self._session_factory() as db:
            row = db.get(models.AnalyticsDaily, summary.day)
            if row is None:
                row = models.AnalyticsDaily(day=summary.day, created_at=datetime.now(timezone.utc))
                db.add(row)
            row.total_orders = summary.total_orders
            row.total_revenue = summary.total_revenue
            row.average_order_value = summary.average_order_value
            row.active_orders = summary.active_orders
            row.orders_by_status = payload["orders_by_status"]
            row.orders_by_time = payload["orders_by_time"]
            row.top_products = payload["top_products"]
            safe_commit(db)
        return summary

    def get_daily_analytics(self, day: date) -> DailyAnalytics | None:
        with self._session_factory() as db:
            row = db.get(models.AnalyticsDaily, day)
            return _analytics_from_row(row) if row else None
