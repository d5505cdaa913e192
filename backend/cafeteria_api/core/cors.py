"""
CORS for the student app and the kiosk dashboard.

Both frontends call the API from the browser with a bearer token, so the
Authorization header must be allowed and the request id exposed for error
reports.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config.settings import settings
from shared.infrastructure.correlation import REQUEST_ID_HEADER

# PUT/DELETE for cart lines, PATCH for kiosk status and inventory edits
ALLOWED_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ALLOWED_HEADERS = ["Authorization", "Content-Type", "Accept", REQUEST_ID_HEADER]


def configure_cors(app: FastAPI) -> None:
    """
    Install CORSMiddleware.

    Origins come from ALLOWED_ORIGINS (comma-separated); without it only the
    local dev server is allowed. Preflights are not cached in development.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
        expose_headers=[REQUEST_ID_HEADER],
        max_age=0 if settings.environment == "development" else 600,
    )
