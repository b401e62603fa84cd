from .comment import Comment
from .confession import (
    ANONYMOUS_USERNAME,
    MOOD_ICONS,
    Confession,
    Mood,
    Tag,
    count_words,
    unique_tags,
)
from .identity import AnonymousSession, DisplayProfile
from .reaction import (
    REACTION_DESCRIPTIONS,
    Reaction,
    ReactionSummary,
    ReactionTally,
    ReactionType,
    ToggleResult,
)
from .topic import DEFAULT_TOPIC_ICON, TOPIC_ICONS, Topic, icon_for_topic

__all__ = [
    "Comment",
    "ANONYMOUS_USERNAME",
    "MOOD_ICONS",
    "Confession",
    "Mood",
    "Tag",
    "count_words",
    "unique_tags",
    "AnonymousSession",
    "DisplayProfile",
    "REACTION_DESCRIPTIONS",
    "Reaction",
    "ReactionSummary",
    "ReactionTally",
    "ReactionType",
    "ToggleResult",
    "DEFAULT_TOPIC_ICON",
    "TOPIC_ICONS",
    "Topic",
    "icon_for_topic",
]
