"""
REST API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded

from shared.config.settings import settings
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler

from cafeteria_api.core import configure_cors, lifespan, register_middlewares
from cafeteria_api.routers.admin import router as admin_router
from cafeteria_api.routers.auth import router as auth_router
from cafeteria_api.routers.cart import router as cart_router
from cafeteria_api.routers.catalog import router as catalog_router
from cafeteria_api.routers.kiosco import router as kiosco_router
from cafeteria_api.routers.navigation import router as navigation_router
from cafeteria_api.routers.orders import router as orders_router
from cafeteria_api.routers.public import health_router

# Create FastAPI application
app = FastAPI(
    title="Kiosco Escolar REST API",
    description="School cafeteria ordering: menu, cart, pickup orders and kiosk dashboard",
    version="0.1.0",
    lifespan=lifespan,
)

# Rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

configure_cors(app)
register_middlewares(app)


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(health_router)
app.include_router(auth_router)
app.include_router(navigation_router)
app.include_router(catalog_router)
app.include_router(cart_router)
app.include_router(orders_router)
app.include_router(kiosco_router)
app.include_router(admin_router)


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "cafeteria_api.main:app",
        host="0.0.0.0",
        port=settings.rest_api_port,
        reload=True,
    )
