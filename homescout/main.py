import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Routers
from .routers.places import router as places_router

# Core modules
from .core.config import settings
from .core.logging import configure_logging, CorrelationIdMiddleware
from .core.metrics import PromMiddleware, metrics_endpoint
from .data.base import InvalidMetric

logger = logging.getLogger(__name__)

async def invalid_metric_handler(request: Request, exc: InvalidMetric):
    # An upstream produced a record outside the documented domains
    logger.error("rejected metrics record: %s", exc)
    return JSONResponse(
        status_code=502,
        content={"detail": {"field": exc.field_name, "reason": exc.reason}},
    )

def create_app() -> FastAPI:
    """
    App factory so tests and ASGI servers can instantiate cleanly.
    """
    configure_logging()  # Set up JSON logs + request-id filter

    app = FastAPI(
        title="HomeScout Insights API",
        version="0.1.0",
        description="Place metrics, pros/cons and quick-take narratives over a pluggable factors provider.",
    )

    # CORS: allow the static frontend to call the API.
    allow_origins = [o.strip() for o in settings.ALLOW_ORIGINS.split(",")] if settings.ALLOW_ORIGINS else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag","X-Request-Id"],
    )

    # Observability middlewares
    app.add_middleware(CorrelationIdMiddleware)  # Adds/propagates X-Request-Id
    if settings.PROMETHEUS_ENABLED:
        app.add_middleware(PromMiddleware)       # Records req/latency metrics

    app.add_exception_handler(InvalidMetric, invalid_metric_handler)

    # Meta routes
    @app.get("/v1/health", tags=["meta"])
    def health():
        return {"status": "ok"}

    @app.get("/v1/ping", tags=["meta"])
    def ping():
        return {"pong": True}

    if settings.PROMETHEUS_ENABLED:
        # Standard Prometheus scrape endpoint
        app.add_route("/v1/metrics", metrics_endpoint, methods=["GET"])

    # Business routes
    app.include_router(places_router, prefix="/v1")

    return app

app = create_app()
