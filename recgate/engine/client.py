"""HTTP client for the Gorse recommendation engine.

This module is the only place that talks to the engine. Each public method
performs a single synchronous round trip against the engine's REST API and
either returns the decoded result or raises an ``EngineError`` subclass.
There is no retry, no batching beyond what the caller built, and no caching.

The client holds only its endpoint, API key, timeout and a pooled
``requests.Session``, so one instance can be shared by every request handler.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import requests

from recgate.engine.models import Feedback, Item, ItemPatch, RowAffected, User, UserPatch
from recgate.exceptions import (
    EngineResponseError,
    EngineTimeoutError,
    EngineUnavailableError,
)

# Configure module logger
logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"
DEFAULT_TIMEOUT = 10.0


def _path_segment(value: str) -> str:
    return quote(value, safe="")


class GorseClient:
    """Client for the data-plane API of a Gorse recommendation engine.

    Example:
        >>> client = GorseClient("http://127.0.0.1:8088", "api_key")
        >>> client.insert_user(User(user_id="u1", labels=["news"]))
        RowAffected(row_affected=1)
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._session = session or requests.Session()

    # ------------------------------------------------------------------
    # Core request helper
    # ------------------------------------------------------------------

    def _request(
        self,
        operation: str,
        method: str,
        path: str,
        payload: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Send one request to the engine and return the decoded JSON body.

        Raises:
            EngineUnavailableError: If the engine cannot be reached.
            EngineTimeoutError: If the engine does not answer in time.
            EngineResponseError: If the engine answers with a non-2xx status
                or a body that is not JSON.
        """
        url = f"{self.endpoint}{path}"
        headers = {API_KEY_HEADER: self.api_key}

        logger.debug(f"Engine request {method} {url}", extra={"operation": operation})

        try:
            resp = self._session.request(
                method,
                url,
                headers=headers,
                json=payload,
                params=params,
                timeout=self.timeout,
            )
        except requests.Timeout:
            raise EngineTimeoutError(operation, self.timeout)
        except requests.RequestException as e:
            logger.warning(
                f"Engine unreachable at {self.endpoint}: {e}",
                extra={"operation": operation, "error_type": type(e).__name__},
            )
            raise EngineUnavailableError(operation, self.endpoint, e)

        if not 200 <= resp.status_code < 300:
            raise EngineResponseError(operation, resp.status_code, resp.text)

        try:
            return resp.json()
        except ValueError:
            raise EngineResponseError(operation, resp.status_code, resp.text)

    def _acknowledge(self, operation: str, method: str, path: str, payload: Any) -> RowAffected:
        body = self._request(operation, method, path, payload=payload)
        try:
            return RowAffected.from_payload(body)
        except (TypeError, ValueError):
            raise EngineResponseError(operation, 200, str(body))

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def insert_user(self, user: User) -> RowAffected:
        return self._acknowledge("insert_user", "POST", "/api/user", user.to_payload())

    def update_user(self, user_id: str, patch: UserPatch) -> RowAffected:
        return self._acknowledge(
            "update_user",
            "PATCH",
            f"/api/user/{_path_segment(user_id)}",
            patch.to_payload(),
        )

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def insert_item(self, item: Item) -> RowAffected:
        return self._acknowledge("insert_item", "POST", "/api/item", item.to_payload())

    def update_item(self, item_id: str, patch: ItemPatch) -> RowAffected:
        return self._acknowledge(
            "update_item",
            "PATCH",
            f"/api/item/{_path_segment(item_id)}",
            patch.to_payload(),
        )

    # ------------------------------------------------------------------
    # Feedback
    # ------------------------------------------------------------------

    def insert_feedback(self, feedbacks: Sequence[Feedback]) -> RowAffected:
        return self._acknowledge(
            "insert_feedback",
            "POST",
            "/api/feedback",
            [feedback.to_payload() for feedback in feedbacks],
        )

    # ------------------------------------------------------------------
    # Recommendations
    # ------------------------------------------------------------------

    def get_recommend(self, user_id: str, category: str, n: int) -> List[str]:
        """Fetch the ranked item ids the engine recommends for a user.

        Args:
            user_id: User to recommend for.
            category: Optional category filter; empty means all categories.
            n: Number of items requested from the engine.

        Returns:
            Item ids in the order the engine ranked them.
        """
        path = f"/api/recommend/{_path_segment(user_id)}"
        if category:
            path = f"{path}/{_path_segment(category)}"

        body = self._request("get_recommend", "GET", path, params={"n": n})
        if body is None:
            return []
        if not isinstance(body, list):
            raise EngineResponseError("get_recommend", 200, str(body))
        return [str(item_id) for item_id in body]

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()
