"""Recommendation endpoint for the RecGate API.

Forwards recommendation queries to the engine and returns its ranking as is.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from recgate.api.dependencies import get_engine_client, get_engine_metrics
from recgate.api.metrics import EngineMetrics
from recgate.api.schemas import RecommendRequest
from recgate.engine.client import GorseClient

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/recommend",
    tags=["recommendations"],
)

# No category filter is exposed on this route
NO_CATEGORY = ""


@router.get("/get", response_model=List[str])
def get_recommend(
    body: RecommendRequest,
    client: GorseClient = Depends(get_engine_client),
    metrics: EngineMetrics = Depends(get_engine_metrics),
) -> List[str]:
    """Get recommended item ids for a user.

    The request carries a JSON body even though the method is GET. The
    engine's ordering is returned unchanged; the list is neither truncated
    nor padded to ``n``.

    Args:
        body: Request with ``userId`` and ``n``.

    Returns:
        Item ids ranked by the engine.

    Example:
        GET /recommend/get {"userId": "u1", "n": 5}
        Returns ["i1", "i2", "i3"] if that is what the engine ranked.
    """
    logger.info(f"Fetching recommendations for user {body.user_id}, n={body.n}")

    with metrics.track("get_recommend"):
        recommendations = client.get_recommend(body.user_id, NO_CATEGORY, body.n)

    logger.info(
        f"Engine returned {len(recommendations)} recommendations for user {body.user_id}"
    )
    return recommendations
