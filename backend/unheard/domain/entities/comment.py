"""Domain entity for comments left on a confession."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Comment:
    """A comment attached to a confession, owned by the device that wrote it."""

    confession_id: str
    username: str
    text: str
    avatar: str
    device_id: str | None = None
    id: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_owned_by(self, device_id: str) -> bool:
        return self.device_id is not None and self.device_id == device_id
