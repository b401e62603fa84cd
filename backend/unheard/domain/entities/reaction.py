"""Domain entities for emoji reactions.

A ``Reaction`` row exists for every (confession, device, type) the device
has reacted with — the row's existence *is* the reacted state.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ReactionType(str, Enum):
    """The closed set of reactions. Count tables are keyed by all five."""

    HEART = "❤️"
    THUMBS_UP = "👍"
    LAUGHING = "😂"
    CRYING = "😢"
    FIRE = "🔥"


REACTION_DESCRIPTIONS: dict[ReactionType, str] = {
    ReactionType.HEART: "Love this",
    ReactionType.THUMBS_UP: "Approve",
    ReactionType.LAUGHING: "Laugh",
    ReactionType.CRYING: "Sad",
    ReactionType.FIRE: "Fire",
}


@dataclass
class Reaction:
    confession_id: str
    device_id: str | None
    type: ReactionType
    id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_owned_by(self, device_id: str) -> bool:
        return self.device_id is not None and self.device_id == device_id


@dataclass
class ReactionSummary:
    """Per-type view of a confession's reactions for one device."""

    type: ReactionType
    count: int = 0
    user_has_reacted: bool = False


@dataclass
class ReactionTally:
    """Counts for every reaction type plus the types the asking device used."""

    counts: dict[ReactionType, int] = field(
        default_factory=lambda: {t: 0 for t in ReactionType}
    )
    user_reactions: set[ReactionType] = field(default_factory=set)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def summaries(self) -> list[ReactionSummary]:
        """One summary per reaction type, in the fixed enum order."""
        return [
            ReactionSummary(
                type=t,
                count=self.counts.get(t, 0),
                user_has_reacted=t in self.user_reactions,
            )
            for t in ReactionType
        ]


@dataclass
class ToggleResult:
    added: bool
    reaction_type: ReactionType
