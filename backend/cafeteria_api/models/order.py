"""
Order Models: Order, OrderItem.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Order(TimestampMixin, Base):
    """
    A student's order for pickup at a break time.
    total_amount is frozen at submission and never recomputed.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    user_cycle: Mapped[Optional[str]] = mapped_column(String(32))
    total_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    scheduled_time: Mapped[str] = mapped_column(String(8), nullable=False)
    payment_method: Mapped[str] = mapped_column(String(32), nullable=False)
    # pendiente, en_preparacion, listo, entregado, cancelado
    status: Mapped[str] = mapped_column(String(32), default="pendiente", nullable=False, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))

    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="chk_orders_total_non_negative"),
        # Kiosk dashboard filters by pickup slot and status
        Index("ix_orders_slot_status", "scheduled_time", "status"),
        Index("ix_orders_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total={self.total_amount})>"


class OrderItem(Base):
    """
    A single line of an order.
    Stores the product name and price at the time of order for historical accuracy.
    """

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    product_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    product_name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Optional[str]] = mapped_column(String(32))
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[int] = mapped_column(Integer, nullable=False)
    customizations: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_items_qty_positive"),
        CheckConstraint("unit_price >= 0", name="chk_order_items_price_non_negative"),
    )

    order: Mapped["Order"] = relationship(back_populates="items")
