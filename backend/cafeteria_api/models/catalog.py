"""
Catalog Models: Product.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Product(TimestampMixin, Base):
    """
    A menu product.
    Prices are integer currency units; stock may go negative after
    concurrent sales.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text)
    image_url: Mapped[Optional[str]] = mapped_column(Text)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    is_customizable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    ingredients: Mapped[Optional[list[str]]] = mapped_column(JSON)
    stock_quantity: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    min_stock_alert: Mapped[int] = mapped_column(Integer, default=5, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="chk_products_price_non_negative"),
        Index("ix_products_available_name", "is_available", "name"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', stock={self.stock_quantity})>"
