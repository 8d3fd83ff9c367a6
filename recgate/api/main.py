"""FastAPI application main module.

This module builds the RecGate application: middleware, exception handlers
and routers, plus the single engine client shared by every request. It also
serves the landing page and the engine call metrics.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.cors import CORSMiddleware

from recgate import __version__
from recgate.api.dependencies import get_engine_metrics, get_settings
from recgate.api.logging_config import AccessLogMiddleware, UnhandledErrorMiddleware, setup_logging
from recgate.api.metrics import EngineMetrics
from recgate.api.routes import feedback, items, recommend, users
from recgate.config import GatewaySettings
from recgate.engine.client import GorseClient
from recgate.exceptions import RecGateException

logger = logging.getLogger(__name__)


def _error_body(error: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    return {"error": error, "message": message, "details": details or {}}


async def recgate_exception_handler(request: Request, exc: RecGateException) -> JSONResponse:
    """Report a failed engine call to the caller instead of acknowledging it."""
    logger.error(
        exc.message,
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
            "details": exc.details,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(type(exc).__name__, exc.message, exc.details),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject missing, malformed or schema-invalid request bodies."""
    errors = jsonable_encoder(exc.errors())
    logger.warning(
        "Rejected invalid request body",
        extra={"method": request.method, "path": request.url.path, "errors": errors},
    )
    return JSONResponse(
        status_code=422,
        content=_error_body("ValidationError", "Invalid request body", {"errors": errors}),
    )


def create_app(
    settings: Optional[GatewaySettings] = None,
    engine_client: Optional[GorseClient] = None,
) -> FastAPI:
    """Build the gateway application.

    Args:
        settings: Gateway settings. Read from the environment if omitted.
        engine_client: Engine client to use. A ``GorseClient`` is built from
            the settings if omitted, and closed when the application stops.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or GatewaySettings.from_env()
    owns_client = engine_client is None
    if engine_client is None:
        engine_client = GorseClient(
            settings.engine_endpoint,
            settings.engine_api_key,
            timeout=settings.engine_timeout,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.log_level)
        logger.info(
            "Starting RecGate",
            extra={"port": settings.port, "engine_endpoint": settings.engine_endpoint},
        )
        yield
        logger.info("Shutting down RecGate")
        if owns_client:
            engine_client.close()

    app = FastAPI(
        title="RecGate API",
        description="HTTP gateway for a Gorse recommendation engine",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine_client = engine_client
    app.state.engine_metrics = EngineMetrics()

    # Middleware added last runs first: CORS, then the 500 fallback, then the access log
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RecGateException, recgate_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(users.router)
    app.include_router(items.router)
    app.include_router(feedback.router)
    app.include_router(recommend.router)

    @app.get("/", response_class=PlainTextResponse)
    def welcome(gateway_settings: GatewaySettings = Depends(get_settings)) -> str:
        """Landing page."""
        return f"Welcome to port {gateway_settings.port}"

    @app.get("/metrics")
    def engine_metrics(metrics: EngineMetrics = Depends(get_engine_metrics)) -> Dict[str, Dict]:
        """Per-operation counters and latencies of engine calls."""
        return metrics.get_metrics()

    return app


app = create_app()
