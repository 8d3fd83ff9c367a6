"""Run the gateway with uvicorn: ``python -m recgate``."""

import uvicorn

from recgate.config import GatewaySettings


def main() -> None:
    settings = GatewaySettings.from_env()
    print(f"Listening on port {settings.port}")
    uvicorn.run(
        "recgate.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
