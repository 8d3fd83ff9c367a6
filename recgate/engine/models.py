"""Domain records exchanged with the recommendation engine.

These are transient values built per request. ``to_payload`` renders each
record with the field names the engine's REST API expects. Patch records use
``None`` for "no change requested", so an omitted field never overwrites
state held by the engine.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def now_utc() -> datetime:
    """Return the current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def now_rfc3339() -> str:
    """Return the current wall-clock time as an RFC3339 string.

    Example:
        >>> now_rfc3339()
        '2024-05-01T09:30:00+00:00'
    """
    return now_utc().isoformat(timespec="seconds")


def _drop_unset(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass(frozen=True)
class User:
    user_id: str
    comment: str = ""
    labels: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "UserId": self.user_id,
            "Comment": self.comment,
            "Labels": list(self.labels),
        }


@dataclass(frozen=True)
class UserPatch:
    comment: Optional[str] = None
    labels: Optional[List[str]] = None

    def to_payload(self) -> Dict[str, Any]:
        return _drop_unset(
            {
                "Comment": self.comment,
                "Labels": None if self.labels is None else list(self.labels),
            }
        )


@dataclass(frozen=True)
class Item:
    item_id: str
    timestamp: str
    comment: str = ""
    categories: List[str] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "ItemId": self.item_id,
            "Comment": self.comment,
            "Categories": list(self.categories),
            "Labels": list(self.labels),
            "Timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ItemPatch:
    comment: Optional[str] = None
    is_hidden: Optional[bool] = None
    categories: Optional[List[str]] = None
    labels: Optional[List[str]] = None
    timestamp: Optional[datetime] = None

    def to_payload(self) -> Dict[str, Any]:
        return _drop_unset(
            {
                "Comment": self.comment,
                "IsHidden": self.is_hidden,
                "Categories": None if self.categories is None else list(self.categories),
                "Labels": None if self.labels is None else list(self.labels),
                "Timestamp": None if self.timestamp is None else self.timestamp.isoformat(),
            }
        )


@dataclass(frozen=True)
class Feedback:
    feedback_type: str
    user_id: str
    item_id: str
    timestamp: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "FeedbackType": self.feedback_type,
            "UserId": self.user_id,
            "ItemId": self.item_id,
            "Timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class RowAffected:
    """Acknowledgement returned by mutating engine operations."""

    row_affected: int = 0

    @classmethod
    def from_payload(cls, payload: Any) -> "RowAffected":
        if isinstance(payload, dict):
            return cls(row_affected=int(payload.get("RowAffected", 0)))
        return cls()
