"""
Cart router.
The caller's cart, kept in the local session store under a per-user slot.
"""

from typing import Any

from fastapi import APIRouter, Depends

from shared.security.auth import context_role, current_user_context
from shared.utils.exceptions import NotFoundError
from shared.utils.schemas import (
    AddToCartRequest,
    CartItemOutput,
    CartOutput,
    RemoveCartItemRequest,
    UpdateCartItemRequest,
)

from cafeteria_api.core.dependencies import get_cart, get_product_service
from cafeteria_api.services.domain import Cart, ProductService

router = APIRouter(prefix="/api/cart", tags=["cart"])


def cart_output(cart: Cart) -> CartOutput:
    return CartOutput(
        items=[
            CartItemOutput(
                product=item.product,
                quantity=item.quantity,
                customizations=item.customizations,
                subtotal=item.subtotal,
            )
            for item in cart.items
        ],
        total_amount=cart.total_amount(),
        total_items=cart.total_item_count(),
    )


@router.get("", response_model=CartOutput)
def get_cart_contents(cart: Cart = Depends(get_cart)) -> CartOutput:
    return cart_output(cart)


@router.post("/items", response_model=CartOutput)
def add_item(
    body: AddToCartRequest,
    ctx: dict[str, Any] = Depends(current_user_context),
    cart: Cart = Depends(get_cart),
    products: ProductService = Depends(get_product_service),
) -> CartOutput:
    """Add a product variant; identical variants are merged into one line."""
    product = products.get_for_role(body.product_id, context_role(ctx))
    cart.add(product, body.quantity, body.customizations)
    return cart_output(cart)


@router.put("/items", response_model=CartOutput)
def update_item(body: UpdateCartItemRequest, cart: Cart = Depends(get_cart)) -> CartOutput:
    """Set the quantity of one line; zero or less removes it."""
    updated = cart.set_quantity(body.product_id, body.quantity, body.customizations)
    if updated is None and body.quantity > 0:
        raise NotFoundError("Línea del carrito", body.product_id)
    return cart_output(cart)


@router.delete("/items", response_model=CartOutput)
def remove_item(body: RemoveCartItemRequest, cart: Cart = Depends(get_cart)) -> CartOutput:
    """Remove the line with this product and customization."""
    if not cart.remove(body.product_id, body.customizations):
        raise NotFoundError("Línea del carrito", body.product_id)
    return cart_output(cart)


@router.delete("/products/{product_id}", response_model=CartOutput)
def remove_product(product_id: str, cart: Cart = Depends(get_cart)) -> CartOutput:
    """Remove every variant of a product."""
    cart.remove_product(product_id)
    return cart_output(cart)


@router.delete("", response_model=CartOutput)
def clear_cart(cart: Cart = Depends(get_cart)) -> CartOutput:
    cart.clear()
    return cart_output(cart)
