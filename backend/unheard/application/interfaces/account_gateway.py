"""Port for the backend's account/session endpoints."""

from abc import ABC, abstractmethod

from unheard.domain.entities import AnonymousSession


class AccountGateway(ABC):
    """Anonymous session management on the document store's auth service.

    Every method raises ``DocumentStoreError`` when the backend refuses.
    """

    @abstractmethod
    async def get_current_session(self) -> AnonymousSession:
        """The session the client is currently authenticated with."""
        ...

    @abstractmethod
    async def get_session(self, session_id: str) -> AnonymousSession:
        """Look up a previously created session by id."""
        ...

    @abstractmethod
    async def create_anonymous_session(self) -> AnonymousSession:
        """Open a brand-new anonymous session and start using it."""
        ...

    @abstractmethod
    def use_session_secret(self, secret: str | None) -> None:
        """Authenticate subsequent requests with ``secret`` (None clears it)."""
        ...
