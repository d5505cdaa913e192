"""
Analytics Model: AnalyticsDaily.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from sqlalchemy import JSON, Date, DateTime, Float, Integer, func
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class AnalyticsDaily(Base):
    """Aggregated sales for one day; one row per date, upserted on refresh."""

    __tablename__ = "analytics_daily"

    day: Mapped[date] = mapped_column("date", Date, primary_key=True)
    total_orders: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_revenue: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_order_value: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    active_orders: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    orders_by_status: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    orders_by_time: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    top_products: Mapped[Optional[list[Any]]] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
