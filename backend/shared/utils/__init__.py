"""
Utilities module: Exceptions, validators, schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    ForbiddenError,
    InsufficientRoleError,
    ValidationError,
    InvalidTransitionError,
)
from shared.utils.validators import (
    validate_image_url,
    sanitize_text,
)

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "ForbiddenError",
    "InsufficientRoleError",
    "ValidationError",
    "InvalidTransitionError",
    # validators
    "validate_image_url",
    "sanitize_text",
]
