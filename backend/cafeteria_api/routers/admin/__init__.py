"""
Admin routers - /api/admin/*
"""

from fastapi import APIRouter

from .users import router as users_router

router = APIRouter(prefix="/api/admin", tags=["admin"])
router.include_router(users_router)

__all__ = ["router"]
