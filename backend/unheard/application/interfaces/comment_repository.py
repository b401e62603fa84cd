"""Abstract repository interface (port) for Comment persistence."""

from abc import ABC, abstractmethod

from unheard.domain.entities import Comment


class CommentRepository(ABC):

    @abstractmethod
    async def get_by_id(self, comment_id: str) -> Comment | None:
        ...

    @abstractmethod
    async def list_for_confession(self, confession_id: str) -> list[Comment]:
        """Comments on a confession, newest first."""
        ...

    @abstractmethod
    async def create(self, comment: Comment) -> Comment:
        ...

    @abstractmethod
    async def delete(self, comment_id: str) -> bool:
        ...

    @abstractmethod
    async def list_without_device_id(self) -> list[Comment]:
        ...

    @abstractmethod
    async def assign_device_id(self, comment_id: str, device_id: str) -> None:
        ...
