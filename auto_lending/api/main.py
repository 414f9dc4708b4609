"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from auto_lending.api.middleware import RequestIDMiddleware, MetricsMiddleware
from auto_lending.api.v1 import customer, dealer, lender, session, vehicles
from auto_lending.infrastructure.observability.logging import setup_logging
from auto_lending.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Auto Lending Client",
        description="Dealer, lender and customer workflows for on-chain vehicle financing",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(session.router, prefix="/v1", tags=["session"])
    app.include_router(dealer.router, prefix="/v1", tags=["dealer"])
    app.include_router(lender.router, prefix="/v1", tags=["lender"])
    app.include_router(customer.router, prefix="/v1", tags=["customer"])
    app.include_router(vehicles.router, prefix="/v1", tags=["vehicles"])

    return app


app = create_app()
