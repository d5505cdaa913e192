"""
Inventory router.
Product management and stock movements for kiosk staff.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status

from shared.config.constants import KIOSK_ROLES
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import (
    AvailabilityRequest,
    InventoryMovement,
    Product,
    ProductCreateRequest,
    ProductUpdateRequest,
    StockAdjustmentOutput,
    StockAdjustmentRequest,
)

from cafeteria_api.core.dependencies import get_product_service
from cafeteria_api.services.domain import ProductService

router = APIRouter(prefix="/inventory")


@router.get("", response_model=list[Product])
def list_inventory(
    low_stock: bool = Query(default=False),
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    """Every product, including unavailable ones."""
    require_roles(ctx, KIOSK_ROLES)
    if low_stock:
        return service.list_low_stock()
    return service.list_inventory()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreateRequest,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> Product:
    require_roles(ctx, KIOSK_ROLES)
    return service.create(body, actor_id=str(ctx["sub"]))


@router.get("/movements", response_model=list[InventoryMovement])
def list_movements(
    product_id: Optional[str] = Query(default=None),
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> list[InventoryMovement]:
    require_roles(ctx, KIOSK_ROLES)
    return service.list_movements(product_id)


@router.patch("/{product_id}", response_model=Product)
def update_product(
    product_id: str,
    body: ProductUpdateRequest,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> Product:
    require_roles(ctx, KIOSK_ROLES)
    return service.update(product_id, body, actor_id=str(ctx["sub"]))


@router.post("/{product_id}/availability", response_model=Product)
def set_availability(
    product_id: str,
    body: AvailabilityRequest,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> Product:
    require_roles(ctx, KIOSK_ROLES)
    return service.set_availability(product_id, body.is_available, actor_id=str(ctx["sub"]))


@router.post("/{product_id}/stock", response_model=StockAdjustmentOutput)
def adjust_stock(
    product_id: str,
    body: StockAdjustmentRequest,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> StockAdjustmentOutput:
    """Restock or correct the stock; every change is recorded as a movement."""
    require_roles(ctx, KIOSK_ROLES)
    product, movement = service.adjust_stock(
        product_id,
        body.quantity_change,
        body.change_type,
        actor_id=str(ctx["sub"]),
        reason=body.reason,
    )
    return StockAdjustmentOutput(product=product, movement=movement)
