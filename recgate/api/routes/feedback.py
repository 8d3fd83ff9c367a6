"""Feedback endpoint for the RecGate API."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from recgate.api.dependencies import get_engine_client, get_engine_metrics
from recgate.api.metrics import EngineMetrics
from recgate.api.schemas import FeedbackInsertRequest
from recgate.engine.client import GorseClient

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/feedback",
    tags=["feedback"],
)


@router.post("/insert", response_class=PlainTextResponse)
def insert_feedback(
    body: FeedbackInsertRequest,
    client: GorseClient = Depends(get_engine_client),
    metrics: EngineMetrics = Depends(get_engine_metrics),
) -> str:
    """Record one feedback event, sent to the engine as a batch of one.

    Example:
        POST /feedback/insert {"FeedbackType": "like", "UserId": "u1", "ItemId": "i1"}
    """
    logger.info(
        "Inserting feedback",
        extra={
            "feedback_type": body.feedback_type,
            "user_id": body.user_id,
            "item_id": body.item_id,
        },
    )
    with metrics.track("insert_feedback"):
        client.insert_feedback(body.to_domain())
    return "OK"
