"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from groupsplit.api.middleware import RequestIDMiddleware, MetricsMiddleware
from groupsplit.api.v1 import debts, plan, splits
from groupsplit.infrastructure.observability.logging import setup_logging
from groupsplit.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="GroupSplit Gateway",
        description="Group expense balances and settlement suggestions",
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
    app.include_router(plan.router, prefix="/v1", tags=["balances"])
    app.include_router(debts.router, prefix="/v1", tags=["debts"])
    app.include_router(splits.router, prefix="/v1", tags=["splits"])

    return app


app = create_app()
