"""Pydantic DTOs (Data Transfer Objects) for the Confession feature."""

from datetime import datetime

from pydantic import BaseModel, Field

from unheard.application.schemas.comment import CommentResponse
from unheard.application.schemas.reaction import ReactionSummarySchema
from unheard.domain.entities import Confession, Mood, ReactionType, Tag


class ConfessionCreate(BaseModel):
    """Schema for submitting a new confession."""

    text: str = Field(..., min_length=1, max_length=5000)
    tags: list[Tag] = Field(default_factory=list, examples=[["#love", "#dreams"]])
    username: str | None = Field(None, max_length=50)
    mood: Mood | None = None
    anonymous: bool | None = Field(
        None, description="Defaults to true when no username is given",
    )
    topic: str | None = Field(None, max_length=100, examples=["Mental Health"])
    avatar: str | None = Field(None, max_length=500)
    initial_reaction: ReactionType | None = None


class ConfessionUpdate(BaseModel):
    """Schema for an author editing their own confession — all fields optional."""

    text: str | None = Field(None, min_length=1, max_length=5000)
    tags: list[Tag] | None = None
    mood: Mood | None = None
    topic: str | None = Field(None, max_length=100)


class ConfessionResponse(BaseModel):
    """Schema returned to the client. ``comments``/``reactions`` are null when
    engagement data could not be loaded for this confession."""

    id: str
    text: str
    tags: list[Tag]
    timestamp: datetime
    username: str
    avatar: str
    mood: Mood | None
    topic: str | None
    anonymous: bool
    is_highlighted: bool
    comments_count: int
    comments: list[CommentResponse] | None = None
    reactions: list[ReactionSummarySchema] | None = None
    owned_by_me: bool = False

    @classmethod
    def from_entity(cls, confession: Confession, device_id: str) -> "ConfessionResponse":
        return cls(
            id=confession.id or "",
            text=confession.text,
            tags=confession.tags,
            timestamp=confession.timestamp,
            username=confession.username,
            avatar=confession.avatar,
            mood=confession.mood,
            topic=confession.topic,
            anonymous=confession.anonymous,
            is_highlighted=confession.is_highlighted,
            comments_count=confession.comments_count,
            comments=(
                [CommentResponse.from_entity(c, device_id) for c in confession.comments]
                if confession.comments is not None
                else None
            ),
            reactions=(
                [ReactionSummarySchema.model_validate(r, from_attributes=True) for r in confession.reactions]
                if confession.reactions is not None
                else None
            ),
            owned_by_me=confession.is_owned_by(device_id),
        )
