"""
Analytics Domain Service.

Builds the daily sales summary for the kiosk and stores it through the
persistence port (the "daily analytics" row of the remote store).
"""

from datetime import date, datetime, timezone

from shared.config.constants import ACTIVE_ORDER_STATUSES, Limits, OrderStatus
from shared.config.logging import kiosco_logger as logger
from shared.utils.schemas import DailyAnalytics, Order, ProductSales, TimeSlotStats

from cafeteria_api.repositories.base import PersistencePort


def summarize(day: date, orders: list[Order]) -> DailyAnalytics:
    """
    Aggregate the given orders into one summary.

    Every order counts towards totals regardless of status; the status
    breakdown is reported separately. Top products are ranked by quantity.
    """
    total_orders = len(orders)
    total_revenue = sum(order.total_amount for order in orders)

    by_status: dict[str, int] = {status.value: 0 for status in OrderStatus}
    by_time: dict[str, TimeSlotStats] = {}
    sales: dict[str, ProductSales] = {}

    for order in orders:
        by_status[order.status.value] += 1

        slot = by_time.setdefault(order.scheduled_time, TimeSlotStats())
        slot.orders += 1
        slot.revenue += order.total_amount

        for item in order.items:
            entry = sales.setdefault(item.product_name, ProductSales(product_name=item.product_name))
            entry.quantity += item.quantity
            entry.revenue += item.subtotal

    top_products = sorted(sales.values(), key=lambda entry: entry.quantity, reverse=True)

    return DailyAnalytics(
        day=day,
        total_orders=total_orders,
        total_revenue=total_revenue,
        average_order_value=round(total_revenue / total_orders, 2) if total_orders else 0.0,
        active_orders=sum(1 for order in orders if order.status in ACTIVE_ORDER_STATUSES),
        orders_by_status=by_status,
        orders_by_time=dict(sorted(by_time.items(), key=lambda kv: _slot_sort_key(kv[0]))),
        top_products=top_products[: Limits.TOP_PRODUCTS],
    )


def _slot_sort_key(slot: str) -> tuple[int, int]:
    hours, _, minutes = slot.partition(":")
    try:
        return int(hours), int(minutes or 0)
    except ValueError:
        return 99, 99


class AnalyticsService:
    """Daily summary over the orders created on a calendar day (UTC)."""

    def __init__(self, persistence: PersistencePort):
        self._persistence = persistence

    def orders_for_day(self, day: date) -> list[Order]:
        return [
            order
            for order in self._persistence.list_orders()
            if order.created_at.astimezone(timezone.utc).date() == day
        ]

    def daily_summary(self, day: date | None = None) -> DailyAnalytics:
        """Compute the summary for ``day`` (default today) and persist it."""
        day = day or datetime.now(timezone.utc).date()
        summary = summarize(day, self.orders_for_day(day))
        self._persistence.save_daily_analytics(summary)
        logger.info(
            "Daily analytics refreshed",
            day=day.isoformat(),
            total_orders=summary.total_orders,
            total_revenue=summary.total_revenue,
        )
        return summary
