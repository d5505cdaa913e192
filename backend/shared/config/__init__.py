"""
Configuration module: Settings, logging, constants.
"""

from shared.config.settings import settings, get_settings
from shared.config.logging import get_logger, setup_logging
from shared.config.constants import (
    Roles,
    Category,
    PaymentMethod,
    OrderStatus,
    MovementType,
    Limits,
    STUDENT_ROLES,
    KIOSK_ROLES,
)

__all__ = [
    # settings
    "settings",
    "get_settings",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Roles",
    "Category",
    "PaymentMethod",
    "OrderStatus",
    "MovementType",
    "Limits",
    "STUDENT_ROLES",
    "KIOSK_ROLES",
]
