"""RecGate: HTTP gateway in front of a Gorse recommendation engine.

This package exposes a small REST surface for users, items, feedback and
recommendation queries and forwards each request to the engine's data-plane
API.

Modules:
    api: FastAPI application, middleware and route handlers
    engine: Domain records and the HTTP client for the engine
"""

__version__ = "0.1.0"
