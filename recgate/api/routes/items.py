"""Item endpoints for the RecGate API."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from recgate.api.dependencies import get_engine_client, get_engine_metrics
from recgate.api.metrics import EngineMetrics
from recgate.api.schemas import ItemInsertRequest, ItemUpdateRequest
from recgate.engine.client import GorseClient

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/item",
    tags=["items"],
)

ACK = "OK"


@router.post("/insert", response_class=PlainTextResponse)
def insert_item(
    body: ItemInsertRequest,
    client: GorseClient = Depends(get_engine_client),
    metrics: EngineMetrics = Depends(get_engine_metrics),
) -> str:
    """Insert an item stamped with the current time."""
    item = body.to_domain()
    logger.info("Inserting item", extra={"item_id": item.item_id, "item_timestamp": item.timestamp})
    with metrics.track("insert_item"):
        client.insert_item(item)
    return ACK


@router.patch("/update", response_class=PlainTextResponse)
def update_item(
    body: ItemUpdateRequest,
    client: GorseClient = Depends(get_engine_client),
    metrics: EngineMetrics = Depends(get_engine_metrics),
) -> str:
    """Apply a partial update to an item and refresh its timestamp."""
    logger.info("Updating item", extra={"item_id": body.item_id})
    with metrics.track("update_item"):
        client.update_item(body.item_id, body.to_domain())
    return ACK
