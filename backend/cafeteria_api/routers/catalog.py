"""
Catalog router.
Menu products, condiments and pickup slots for the caller's role.
"""

from typing import Any

from fastapi import APIRouter, Depends

from shared.config.constants import CONDIMENTS, pickup_times_for
from shared.security.auth import context_role, current_user_context
from shared.utils.schemas import PickupTimesOutput, Product

from cafeteria_api.core.dependencies import get_product_service
from cafeteria_api.services.domain import ProductService

router = APIRouter(prefix="/api/catalog", tags=["catalog"])


@router.get("/products", response_model=list[Product])
def list_products(
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> list[Product]:
    """Students only see available products."""
    return service.list_for_role(context_role(ctx))


@router.get("/products/{product_id}", response_model=Product)
def get_product(
    product_id: str,
    ctx: dict[str, Any] = Depends(current_user_context),
    service: ProductService = Depends(get_product_service),
) -> Product:
    return service.get_for_role(product_id, context_role(ctx))


@router.get("/condiments", response_model=list[str])
def list_condiments(ctx: dict[str, Any] = Depends(current_user_context)) -> list[str]:
    return list(CONDIMENTS)


@router.get("/pickup-times", response_model=PickupTimesOutput)
def list_pickup_times(ctx: dict[str, Any] = Depends(current_user_context)) -> PickupTimesOutput:
    role = context_role(ctx)
    return PickupTimesOutput(role=role, pickup_times=list(pickup_times_for(role)))
