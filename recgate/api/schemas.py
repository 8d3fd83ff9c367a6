"""Request schemas for the RecGate API.

Each model decodes one route's JSON body using the exact wire field names,
and ``to_domain`` turns it into the record sent to the engine, applying the
server-side defaults. Timestamps are always assigned here at handling time;
a ``Timestamp`` supplied by the caller is ignored like any other unknown field.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from recgate.engine.models import (
    Feedback,
    Item,
    ItemPatch,
    User,
    UserPatch,
    now_rfc3339,
    now_utc,
)

DEFAULT_RECOMMEND_N = 10


class WireModel(BaseModel):
    """Base for request bodies.

    Fields are only read under their wire names; unknown fields, including
    the Python attribute names, are dropped.
    """

    model_config = ConfigDict(extra="ignore")


class UserInsertRequest(WireModel):
    """New user; a null or omitted ``Comment`` or ``Labels`` is stored empty."""

    user_id: str = Field(..., alias="UserId")
    comment: Optional[str] = Field(default=None, alias="Comment")
    labels: Optional[List[str]] = Field(default=None, alias="Labels")

    def to_domain(self) -> User:
        return User(
            user_id=self.user_id,
            comment=self.comment or "",
            labels=list(self.labels or []),
        )


class UserUpdateRequest(WireModel):
    """Partial user update.

    ``Comment`` and ``Labels`` are only applied when present; an omitted or
    null field leaves the engine's value untouched, while ``[]`` or ``""``
    overwrite it.
    """

    user_id: str = Field(..., alias="UserId")
    comment: Optional[str] = Field(default=None, alias="Comment")
    labels: Optional[List[str]] = Field(default=None, alias="Labels")

    def to_domain(self) -> UserPatch:
        return UserPatch(comment=self.comment, labels=self.labels)


class ItemInsertRequest(WireModel):
    item_id: str = Field(..., alias="ItemId")
    comment: Optional[str] = Field(default=None, alias="Comment")
    categories: Optional[List[str]] = Field(default=None, alias="Categories")
    labels: Optional[List[str]] = Field(default=None, alias="Labels")

    def to_domain(self) -> Item:
        return Item(
            item_id=self.item_id,
            comment=self.comment or "",
            categories=list(self.categories or []),
            labels=list(self.labels or []),
            timestamp=now_rfc3339(),
        )


class ItemUpdateRequest(WireModel):
    """Partial item update; the patch timestamp is always refreshed."""

    item_id: str = Field(..., alias="ItemId")
    comment: Optional[str] = Field(default=None, alias="Comment")
    is_hidden: Optional[bool] = Field(default=None, alias="IsHidden")
    categories: Optional[List[str]] = Field(default=None, alias="Categories")
    labels: Optional[List[str]] = Field(default=None, alias="Labels")

    def to_domain(self) -> ItemPatch:
        return ItemPatch(
            comment=self.comment,
            is_hidden=self.is_hidden,
            categories=self.categories,
            labels=self.labels,
            timestamp=now_utc(),
        )


class FeedbackInsertRequest(WireModel):
    feedback_type: str = Field(..., alias="FeedbackType")
    user_id: str = Field(..., alias="UserId")
    item_id: str = Field(..., alias="ItemId")

    def to_domain(self) -> List[Feedback]:
        # The engine only accepts feedback in batches
        return [
            Feedback(
                feedback_type=self.feedback_type,
                user_id=self.user_id,
                item_id=self.item_id,
                timestamp=now_rfc3339(),
            )
        ]


class RecommendRequest(WireModel):
    user_id: str = Field(..., alias="userId")
    n: int = Field(default=DEFAULT_RECOMMEND_N, ge=1, description="Number of items to request")
