"""Pydantic DTOs for topic statistics and the submission catalogs."""

from pydantic import BaseModel

from unheard.domain.entities import Mood, ReactionType, Tag


class TopicResponse(BaseModel):
    name: str
    icon: str
    count: int

    model_config = {"from_attributes": True}


class TopicChoice(BaseModel):
    name: str
    icon: str


class MoodChoice(BaseModel):
    value: Mood
    icon: str


class ReactionChoice(BaseModel):
    type: ReactionType
    description: str


class CatalogResponse(BaseModel):
    """Closed vocabularies used by the submission forms."""

    tags: list[Tag]
    moods: list[MoodChoice]
    reactions: list[ReactionChoice]
    topics: list[TopicChoice]
