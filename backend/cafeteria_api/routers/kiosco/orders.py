"""
Kiosk dashboard router.
Order queue per pickup slot and status transitions.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from shared.config.constants import KIOSK_ROLES, OrderStatus
from shared.config.logging import kiosco_logger as logger
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import Order, UpdateOrderStatusRequest

from cafeteria_api.core.dependencies import get_order_service, user_from_context
from cafeteria_api.services.domain import OrderService

router = APIRouter(prefix="/orders")


@router.get("", response_model=list[Order])
def list_orders(
    scheduled_time: Optional[str] = Query(default=None, max_length=8),
    status: Optional[OrderStatus] = Query(default=None),
    ctx: dict[str, Any] = Depends(current_user_context),
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    """All orders, newest first, optionally filtered by slot and status."""
    require_roles(ctx, KIOSK_ROLES)
    orders = service.list_all(scheduled_time=scheduled_time, status=status)
    logger.debug("Dashboard orders listed", count=len(orders), scheduled_time=scheduled_time)
    return orders


@router.post("/{order_id}/advance", response_model=Order)
def advance_order(
    order_id: str,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """pendiente -> en_preparacion -> listo -> entregado."""
    require_roles(ctx, KIOSK_ROLES)
    return service.advance(order_id, user_from_context(ctx))


@router.post("/{order_id}/cancel", response_model=Order)
def cancel_order(
    order_id: str,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: OrderService = Depends(get_order_service),
) -> Order:
    require_roles(ctx, KIOSK_ROLES)
    return service.cancel(order_id, user_from_context(ctx))


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Explicit transition; must be an allowed edge of the lifecycle."""
    require_roles(ctx, KIOSK_ROLES)
    return service.set_status(order_id, body.status, user_from_context(ctx))
