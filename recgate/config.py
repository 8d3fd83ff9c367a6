"""Runtime settings for the gateway.

Settings are read from environment variables once, when the application is
built, and never change afterwards.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

# Defaults used when the environment is silent
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 6666
DEFAULT_ENGINE_ENDPOINT = "http://127.0.0.1:8088"
DEFAULT_ENGINE_API_KEY = "api_key"
DEFAULT_ENGINE_TIMEOUT = 10.0

# Environment variable -> settings field
ENV_VARS = {
    "RECGATE_HOST": "host",
    "RECGATE_PORT": "port",
    "GORSE_ENDPOINT": "engine_endpoint",
    "GORSE_API_KEY": "engine_api_key",
    "GORSE_TIMEOUT": "engine_timeout",
    "LOG_LEVEL": "log_level",
}


class GatewaySettings(BaseModel):
    """Immutable gateway configuration.

    Attributes:
        host: Interface the HTTP server binds to.
        port: Port the HTTP server listens on.
        engine_endpoint: Base URL of the recommendation engine.
        engine_api_key: API key forwarded to the engine on every call.
        engine_timeout: Seconds to wait for an engine response.
        log_level: Root logging level.
    """

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    engine_endpoint: str = DEFAULT_ENGINE_ENDPOINT
    engine_api_key: str = DEFAULT_ENGINE_API_KEY
    engine_timeout: float = Field(default=DEFAULT_ENGINE_TIMEOUT, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewaySettings":
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            GatewaySettings with every unset variable at its default.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values = {field: env[name] for name, field in ENV_VARS.items() if env.get(name)}
        return cls(**values)
