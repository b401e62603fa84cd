"""Pydantic DTOs for reactions."""

from pydantic import BaseModel

from unheard.domain.entities import ReactionTally, ReactionType


class ReactionSummarySchema(BaseModel):
    type: ReactionType
    count: int
    user_has_reacted: bool

    model_config = {"from_attributes": True}


class ToggleReactionRequest(BaseModel):
    type: ReactionType


class ToggleReactionResponse(BaseModel):
    added: bool
    reaction_type: ReactionType

    model_config = {"from_attributes": True}


class ReactionTallyResponse(BaseModel):
    """Counts for all five reaction types plus this device's own reactions."""

    counts: dict[ReactionType, int]
    user_reactions: list[ReactionType]
    total: int

    @classmethod
    def from_tally(cls, tally: ReactionTally) -> "ReactionTallyResponse":
        return cls(
            counts=tally.counts,
            user_reactions=[t for t in ReactionType if t in tally.user_reactions],
            total=tally.total,
        )
