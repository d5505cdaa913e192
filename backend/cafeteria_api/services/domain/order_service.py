"""
Order Domain Service.

Creates orders from a student's cart and moves them through the lifecycle:

    pendiente -> en_preparacion -> listo -> entregado
    (any non-terminal state) -> cancelado

``entregado`` and ``cancelado`` are terminal. Students create orders; kiosk
staff and admins advance and cancel them.
"""

import uuid
from datetime import datetime, timezone

from shared.config.constants import (
    ACTIVE_ORDER_STATUSES,
    BREAK_TIMES,
    KIOSK_ROLES,
    ORDER_NEXT_STATUS,
    ORDER_TRANSITIONS,
    STUDENT_ROLES,
    MovementType,
    OrderStatus,
    PaymentMethod,
)
from shared.config.logging import orders_logger as logger
from shared.utils.exceptions import (
    EmptyCartError,
    ForbiddenError,
    InsufficientRoleError,
    InvalidPickupTimeError,
    InvalidTransitionError,
    OrderNotFoundError,
)
from shared.utils.schemas import InventoryMovement, Order, OrderItem, User
from shared.utils.validators import sanitize_text

from cafeteria_api.repositories.base import PersistencePort
from cafeteria_api.services.domain.cart_service import Cart


def _role_names(roles) -> list[str]:
    return sorted(role.value for role in roles)


class OrderService:
    """
    Domain service for order creation and status transitions.

    All storage goes through the injected persistence port; the service
    never knows which backend answered.
    """

    def __init__(self, persistence: PersistencePort):
        self._persistence = persistence

    # =========================================================================
    # Authorization helpers
    # =========================================================================

    @staticmethod
    def _require_student(actor: User) -> None:
        if actor.role not in STUDENT_ROLES:
            raise InsufficientRoleError(_role_names(STUDENT_ROLES), user_id=actor.id)

    @staticmethod
    def _require_staff(actor: User) -> None:
        if actor.role not in KIOSK_ROLES:
            raise InsufficientRoleError(_role_names(KIOSK_ROLES), user_id=actor.id)

    # =========================================================================
    # Creation
    # =========================================================================

    def create(
        self,
        cart: Cart,
        scheduled_time: str,
        payment_method: PaymentMethod,
        user: User,
        notes: str | None = None,
    ) -> Order:
        """
        Create an order from the cart.

        Validation happens before anything is persisted. On success the
        stock of each product is decremented, one sale movement is recorded
        per line, and the cart is cleared.

        Raises:
            InsufficientRoleError: user is not a student
            EmptyCartError: cart has no lines
            InvalidPickupTimeError: slot not offered to the user's cycle
        """
        self._require_student(user)

        if cart.is_empty:
            raise EmptyCartError(user_id=user.id)

        allowed = list(BREAK_TIMES[user.role])
        if scheduled_time not in allowed:
            raise InvalidPickupTimeError(scheduled_time, allowed, user_id=user.id)

        lines = cart.items
        items = [OrderItem.from_cart_item(line) for line in lines]
        total_amount = cart.total_amount()

        order_id = self._persistence.generate_order_id()
        now = datetime.now(timezone.utc)
        order = Order(
            id=order_id,
            user_id=user.id,
            items=items,
            total_amount=total_amount,
            scheduled_time=scheduled_time,
            payment_method=PaymentMethod(payment_method),
            status=OrderStatus.PENDING,
            created_at=now,
            user_cycle=user.role,
            notes=sanitize_text(notes),
            updated_at=now,
        )
        order = self._persistence.create_order(order)

        self._decrement_stock(order, user)
        cart.clear()

        logger.info(
            "Order created",
            order_id=order.id,
            user_id=user.id,
            items=order.item_count,
            total_amount=order.total_amount,
            scheduled_time=scheduled_time,
        )
        return order

    def _decrement_stock(self, order: Order, user: User) -> None:
        """
        Plain read-modify-write per line.

        Not conditional: concurrent orders can both read the same stock and
        drive it below zero.
        """
        for item in order.items:
            product = self._persistence.get_product(item.product_id)
            if product is None:
                logger.warning(
                    "Ordered product missing from catalog, stock not updated",
                    order_id=order.id,
                    product_id=item.product_id,
                )
                continue

            previous = product.stock_quantity
            updated = product.model_copy(update={"stock_quantity": previous - item.quantity})
            self._persistence.save_product(updated)
            self._persistence.record_inventory_movement(
                InventoryMovement(
                    id=uuid.uuid4().hex,
                    product_id=product.id,
                    change_type=MovementType.SALE,
                    previous_quantity=previous,
                    quantity_change=-item.quantity,
                    new_quantity=updated.stock_quantity,
                    reason=f"Pedido {order.id}",
                    created_by=user.id,
                    created_at=order.created_at,
                )
            )
            if updated.is_low_stock:
                logger.warning(
                    "Product stock low",
                    product_id=product.id,
                    stock_quantity=updated.stock_quantity,
                    min_stock_alert=updated.min_stock_alert,
                )

    # =========================================================================
    # Transitions
    # =========================================================================

    def advance(self, order_id: str, actor: User) -> Order:
        """Move one step along the happy path. Terminal states are rejected."""
        self._require_staff(actor)
        order = self.get(order_id)

        next_status = ORDER_NEXT_STATUS[order.status]
        if next_status is None:
            raise InvalidTransitionError("Pedido", order.status.value, None, order_id=order_id)

        return self._apply(order, next_status, actor)

    def cancel(self, order_id: str, actor: User) -> Order:
        """Cancel an order that is not yet delivered or cancelled."""
        self._require_staff(actor)
        order = self.get(order_id)

        if OrderStatus.CANCELLED not in ORDER_TRANSITIONS[order.status]:
            raise InvalidTransitionError(
                "Pedido", order.status.value, OrderStatus.CANCELLED.value, order_id=order_id
            )

        return self._apply(order, OrderStatus.CANCELLED, actor)

    def set_status(self, order_id: str, status: OrderStatus, actor: User) -> Order:
        """Transition to an explicit target; it must be an allowed edge."""
        self._require_staff(actor)
        order = self.get(order_id)
        target = OrderStatus(status)

        if target not in ORDER_TRANSITIONS[order.status]:
            to_status = None if order.status.is_terminal else target.value
            raise InvalidTransitionError("Pedido", order.status.value, to_status, order_id=order_id)

        return self._apply(order, target, actor)

    def _apply(self, order: Order, target: OrderStatus, actor: User) -> Order:
        now = datetime.now(timezone.utc)
        changes: dict = {"status": target, "updated_at": now}
        if target is OrderStatus.DELIVERED:
            changes["completed_at"] = now

        updated = order.model_copy(update=changes)
        if self._persistence.update_order(updated) is None:
            raise OrderNotFoundError(order.id)

        logger.info(
            "Order status changed",
            order_id=order.id,
            from_status=order.status.value,
            to_status=target.value,
            actor_id=actor.id,
        )
        return updated

    # =========================================================================
    # Queries
    # =========================================================================

    def get(self, order_id: str) -> Order:
        order = self._persistence.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def get_for_actor(self, order_id: str, actor: User) -> Order:
        """Students may only see their own orders; staff see every order."""
        order = self.get(order_id)
        if actor.role in STUDENT_ROLES and order.user_id != actor.id:
            raise ForbiddenError("ver este pedido", user_id=actor.id, order_id=order_id)
        return order

    def list_for_user(self, user_id: str) -> list[Order]:
        return self._persistence.list_orders(user_id=user_id)

    def list_all(
        self,
        scheduled_time: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        return self._persistence.list_orders(scheduled_time=scheduled_time, status=status)

    def active_count(self) -> int:
        return sum(1 for order in self._persistence.list_orders() if order.status in ACTIVE_ORDER_STATUSES)
