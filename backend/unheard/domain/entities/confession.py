"""Domain entity — an anonymous confession and its closed vocabularies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .comment import Comment
    from .reaction import ReactionSummary


class Tag(str, Enum):
    """Hashtags a confession can be filed under."""

    ANXIETY = "#anxiety"
    STUDY = "#study"
    LOVE = "#love"
    FAILURE = "#failure"
    DREAMS = "#dreams"
    MOTIVATION = "#motivation"
    RELATIONSHIP = "#relationship"
    CAREER = "#career"
    FAMILY = "#family"
    HEALTH = "#health"


class Mood(str, Enum):
    """Optional mood the author attaches to a confession."""

    HAPPY = "happy"
    SAD = "sad"
    NEUTRAL = "neutral"
    ANGRY = "angry"
    INSPIRED = "inspired"
    CONFUSED = "confused"


MOOD_ICONS: dict[Mood, str] = {
    Mood.HAPPY: "😊",
    Mood.SAD: "😔",
    Mood.NEUTRAL: "😐",
    Mood.ANGRY: "😠",
    Mood.INSPIRED: "✨",
    Mood.CONFUSED: "😕",
}

ANONYMOUS_USERNAME = "Anonymous"


def count_words(text: str) -> int:
    """Number of whitespace-separated words in the text."""
    return len(text.split())


def unique_tags(tags: "list[Tag]") -> list[Tag]:
    """Drop repeated tags, keeping first occurrence order."""
    return list(dict.fromkeys(tags))


@dataclass
class Confession:
    """Core domain entity for a shared confession.

    ``is_highlighted`` and ``comments_count`` are derived/denormalized and
    only written by engagement bookkeeping. ``device_id`` identifies the
    creating device and is the sole ownership token.

    ``comments`` and ``reactions`` stay ``None`` until the confession has
    been enriched with its engagement data.
    """

    text: str
    tags: list[Tag]
    username: str
    avatar: str
    device_id: str | None = None
    mood: Mood | None = None
    topic: str | None = None
    anonymous: bool = False
    is_highlighted: bool = False
    comments_count: int = 0
    id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    comments: "list[Comment] | None" = None
    reactions: "list[ReactionSummary] | None" = None

    @property
    def is_enriched(self) -> bool:
        return self.comments is not None and self.reactions is not None

    def is_owned_by(self, device_id: str) -> bool:
        return self.device_id is not None and self.device_id == device_id
