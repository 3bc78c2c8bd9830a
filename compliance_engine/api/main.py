"""FastAPI application factory"""

from typing import Optional

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from compliance_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from compliance_engine.api.v1 import rules
from compliance_engine.infrastructure.observability.logging import setup_logging
from compliance_engine.config import Settings, build_engine_config, settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Rule constants are frozen here, once. An inconsistent tax bracket layout
    raises ConfigurationError and the service refuses to start.
    """
    app_settings = app_settings or settings
    engine_config = build_engine_config(app_settings)

    app = FastAPI(
        title="Compliance Rule Engine",
        description="Penalty, tax, voting, waterfall and housing grant rule evaluation",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.engine_config = engine_config

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": app_settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(rules.router, prefix="/v1", tags=["rules"])

    return app


app = create_app()
