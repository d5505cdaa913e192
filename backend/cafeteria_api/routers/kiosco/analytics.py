"""
Analytics router.
Daily sales summary for kiosk staff.
"""

from datetime import date
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from shared.config.constants import KIOSK_ROLES
from shared.security.auth import current_user_context, require_roles
from shared.utils.schemas import DailyAnalytics

from cafeteria_api.core.dependencies import get_analytics_service
from cafeteria_api.services.domain import AnalyticsService

router = APIRouter(prefix="/analytics")


@router.get("", response_model=DailyAnalytics)
def daily_analytics(
    day: Optional[date] = Query(default=None, description="YYYY-MM-DD, default today (UTC)"),
    ctx: dict[str, Any] = Depends(current_user_context),
    service: AnalyticsService = Depends(get_analytics_service),
) -> DailyAnalytics:
    """Compute and store the summary of one day."""
    require_roles(ctx, KIOSK_ROLES)
    return service.daily_summary(day)
