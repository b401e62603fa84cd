"""Abstract repository interface (port) for Confession persistence."""

from abc import ABC, abstractmethod
from typing import Any

from unheard.domain.entities import Confession, Tag


class ConfessionRepository(ABC):
    """Port for the confession collection — implemented in the infrastructure layer."""

    @abstractmethod
    async def get_by_id(self, confession_id: str) -> Confession | None:
        """Retrieve a single confession, or None if it does not exist."""
        ...

    @abstractmethod
    async def get_all(
        self,
        *,
        tag: Tag | None = None,
        topic: str | None = None,
        highlighted: bool | None = None,
        newest_first: bool = True,
    ) -> list[Confession]:
        """Retrieve every confession matching the (optional) filter."""
        ...

    @abstractmethod
    async def create(self, confession: Confession) -> Confession:
        """Persist a new confession; the store assigns id and keeps the timestamp."""
        ...

    @abstractmethod
    async def update_fields(self, confession_id: str, fields: dict[str, Any]) -> None:
        """Write a partial update keyed by entity attribute names."""
        ...

    @abstractmethod
    async def delete(self, confession_id: str) -> bool:
        """Delete a confession. Returns True if deleted, False if not found."""
        ...

    @abstractmethod
    async def list_without_device_id(self) -> list[Confession]:
        """Confessions written before device ownership was recorded."""
        ...
