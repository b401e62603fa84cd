"""Abstract repository interface (port) for Reaction persistence."""

from abc import ABC, abstractmethod

from unheard.domain.entities import Reaction, ReactionType


class ReactionRepository(ABC):

    @abstractmethod
    async def list_for_confession(self, confession_id: str) -> list[Reaction]:
        """Every reaction row attached to a confession."""
        ...

    @abstractmethod
    async def find(
        self, confession_id: str, device_id: str, reaction_type: ReactionType
    ) -> list[Reaction]:
        """Rows for one (confession, device, type) triple, oldest first."""
        ...

    @abstractmethod
    async def create(self, reaction: Reaction) -> Reaction:
        ...

    @abstractmethod
    async def delete(self, reaction_id: str) -> bool:
        ...

    @abstractmethod
    async def list_without_device_id(self) -> list[Reaction]:
        ...

    @abstractmethod
    async def assign_device_id(self, reaction_id: str, device_id: str) -> None:
        ...
