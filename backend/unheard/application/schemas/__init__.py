from .comment import CommentCreate, CommentResponse
from .confession import ConfessionCreate, ConfessionResponse, ConfessionUpdate
from .identity import DisplayProfileResponse, DisplayProfileUpdate, IdentityResponse
from .reaction import (
    ReactionSummarySchema,
    ReactionTallyResponse,
    ToggleReactionRequest,
    ToggleReactionResponse,
)
from .topic import CatalogResponse, MoodChoice, ReactionChoice, TopicChoice, TopicResponse

__all__ = [
    "CommentCreate",
    "CommentResponse",
    "ConfessionCreate",
    "ConfessionResponse",
    "ConfessionUpdate",
    "DisplayProfileResponse",
    "DisplayProfileUpdate",
    "IdentityResponse",
    "ReactionSummarySchema",
    "ReactionTallyResponse",
    "ToggleReactionRequest",
    "ToggleReactionResponse",
    "CatalogResponse",
    "MoodChoice",
    "ReactionChoice",
    "TopicChoice",
    "TopicResponse",
]
