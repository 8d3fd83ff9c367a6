"""User endpoints for the RecGate API.

Inserts users into the engine and applies partial updates to them.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from recgate.api.dependencies import get_engine_client, get_engine_metrics
from recgate.api.metrics import EngineMetrics
from recgate.api.schemas import UserInsertRequest, UserUpdateRequest
from recgate.engine.client import GorseClient

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/user",
    tags=["users"],
)

ACK = "OK"


@router.post("/insert", response_class=PlainTextResponse)
def insert_user(
    body: UserInsertRequest,
    client: GorseClient = Depends(get_engine_client),
    metrics: EngineMetrics = Depends(get_engine_metrics),
) -> str:
    """Insert a user, overwriting any existing user with the same id.

    Example:
        POST /user/insert {"UserId": "u1", "Comment": "", "Labels": ["news"]}
    """
    logger.info("Inserting user", extra={"user_id": body.user_id})
    with metrics.track("insert_user"):
        client.insert_user(body.to_domain())
    return ACK


@router.patch("/update", response_class=PlainTextResponse)
def update_user(
    body: UserUpdateRequest,
    client: GorseClient = Depends(get_engine_client),
    metrics: EngineMetrics = Depends(get_engine_metrics),
) -> str:
    """Apply a partial update; only the fields present in the body change."""
    logger.info("Updating user", extra={"user_id": body.user_id})
    with metrics.track("update_user"):
        client.update_user(body.user_id, body.to_domain())
    return ACK
