"""
Kiosk routers - /api/kiosco/*
Dashboard, inventory and analytics for kiosk staff and admins.
"""

from fastapi import APIRouter

from .analytics import router as analytics_router
from .inventory import router as inventory_router
from .orders import router as orders_router

router = APIRouter(prefix="/api/kiosco", tags=["kiosco"])
router.include_router(orders_router)
router.include_router(inventory_router)
router.include_router(analytics_router)

__all__ = ["router"]
