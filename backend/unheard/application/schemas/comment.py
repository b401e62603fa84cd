"""Pydantic DTOs for comments."""

from datetime import datetime

from pydantic import BaseModel, Field

from unheard.domain.entities import Comment


class CommentCreate(BaseModel):
    text: str = Field(..., min_length=1, max_length=2000)
    username: str | None = Field(None, max_length=50)
    avatar: str | None = Field(None, max_length=500)


class CommentResponse(BaseModel):
    id: str
    confession_id: str
    username: str
    text: str
    avatar: str
    timestamp: datetime
    owned_by_me: bool = False

    @classmethod
    def from_entity(cls, comment: Comment, device_id: str) -> "CommentResponse":
        return cls(
            id=comment.id or "",
            confession_id=comment.confession_id,
            username=comment.username,
            text=comment.text,
            avatar=comment.avatar,
            timestamp=comment.timestamp,
            owned_by_me=comment.is_owned_by(device_id),
        )
