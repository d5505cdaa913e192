"""
Student orders router.
Checkout from the caller's cart and order history.
"""

from typing import Any

from fastapi import APIRouter, Depends, status

from shared.config.constants import STUDENT_ROLES
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import CreateOrderRequest, Order, User

from cafeteria_api.core.dependencies import current_user, get_cart, get_order_service
from cafeteria_api.services.domain import Cart, OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(
    body: CreateOrderRequest,
    user: User = Depends(current_user),
    cart: Cart = Depends(get_cart),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """
    Place an order with the contents of the caller's cart.

    The cart is cleared on success. Rejected with 400 when the cart is
    empty or the pickup slot is not offered to the caller's cycle.
    """
    return service.create(cart, body.scheduled_time, body.payment_method, user, body.notes)


@router.get("", response_model=list[Order])
def list_my_orders(
    ctx: dict[str, Any] = Depends(current_user_context),
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    """The caller's orders, newest first."""
    require_roles(ctx, STUDENT_ROLES)
    return service.list_for_user(str(ctx["sub"]))


@router.get("/{order_id}", response_model=Order)
def get_order(
    order_id: str,
    user: User = Depends(current_user),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Students may only read their own orders; staff may read any."""
    return service.get_for_actor(order_id, user)
