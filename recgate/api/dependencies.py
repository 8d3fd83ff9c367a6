"""FastAPI dependencies shared by the route handlers.

The engine client, metrics and settings are created once per application
and kept on ``app.state``; handlers receive them through these functions so
tests can substitute their own.
"""

from fastapi import Request

from recgate.api.metrics import EngineMetrics
from recgate.config import GatewaySettings
from recgate.engine.client import GorseClient


def get_engine_client(request: Request) -> GorseClient:
    return request.app.state.engine_client


def get_engine_metrics(request: Request) -> EngineMetrics:
    return request.app.state.engine_metrics


def get_settings(request: Request) -> GatewaySettings:
    return request.app.state.settings
