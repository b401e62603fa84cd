"""Anonymous identity provider — device identifier and backend session.

The device identifier is the only thing that ties reactions, comments and
confessions to their author. It is generated once, kept in durable local
storage and never changes. The backend session is what lets the device
write to the store at all; it carries no personal data.
"""

import time
from collections.abc import Callable
from uuid import uuid4

from unheard.application.interfaces import AccountGateway, KeyValueStore
from unheard.application.services.single_flight import SingleFlight
from unheard.domain.entities import AnonymousSession
from unheard.domain.exceptions import DocumentStoreError, SessionUnavailableError
from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

DEVICE_ID_KEY = "unheard_anonymous_id"
SESSION_ID_KEY = "unheard_session_id"
SESSION_SECRET_KEY = "unheard_session_secret"

_SESSION_FLIGHT = "session"

log = EngagementLogger("AnonymousIdentityProvider")


class AnonymousIdentityProvider:
    """Issues the device identifier and keeps one backend session alive.

    Session acquisition tries, in order: the session the client is already
    using, the session whose id was persisted by an earlier run, and
    finally a brand-new anonymous session. Overlapping callers share one
    attempt; a successful result is reused for ``session_ttl_seconds``.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        account: AccountGateway,
        session_ttl_seconds: float = 30.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._storage = storage
        self._account = account
        self._sessions: SingleFlight[AnonymousSession] = SingleFlight(
            ttl_seconds=session_ttl_seconds, clock=clock
        )

    def get_or_create_device_id(self) -> str:
        device_id = self._storage.get(DEVICE_ID_KEY)
        if not device_id:
            device_id = uuid4().hex
            self._storage.set(DEVICE_ID_KEY, device_id)
            log.event(EngagementStage.SESSION, "Issued new device identifier")
        return device_id

    async def get_or_create_session(self) -> AnonymousSession:
        """Return an authenticated anonymous session.

        Raises:
            SessionUnavailableError: if no session could be reused, recovered
                or created.
        """
        return await self._sessions.do(_SESSION_FLIGHT, self._acquire_session)

    def invalidate_session(self) -> None:
        """Forget the cached session so the next call re-checks the backend."""
        self._sessions.forget(_SESSION_FLIGHT)

    async def _acquire_session(self) -> AnonymousSession:
        try:
            session = await self._account.get_current_session()
            log.trace(EngagementStage.SESSION, "Using active session", session_id=session.id)
            return session
        except DocumentStoreError as exc:
            log.trace(EngagementStage.SESSION, "No active session", status=exc.status_code)

        recovered = await self._recover_saved_session()
        if recovered is not None:
            return recovered

        try:
            session = await self._account.create_anonymous_session()
        except DocumentStoreError as exc:
            log.failure(EngagementStage.SESSION, "Failed to create anonymous session", error=exc)
            raise SessionUnavailableError(
                "Could not establish an anonymous session with the backend"
            ) from exc

        self._storage.set(SESSION_ID_KEY, session.id)
        if session.secret:
            self._storage.set(SESSION_SECRET_KEY, session.secret)
        log.event(EngagementStage.SESSION, "Anonymous session created", session_id=session.id)
        return session

    async def _recover_saved_session(self) -> AnonymousSession | None:
        saved_id = self._storage.get(SESSION_ID_KEY)
        if not saved_id:
            return None

        saved_secret = self._storage.get(SESSION_SECRET_KEY)
        if saved_secret:
            self._account.use_session_secret(saved_secret)

        try:
            session = await self._account.get_session(saved_id)
        except DocumentStoreError as exc:
            log.failure(
                EngagementStage.SESSION,
                "Session recovery failed, creating new session",
                error=exc,
            )
            self._storage.remove(SESSION_ID_KEY)
            self._storage.remove(SESSION_SECRET_KEY)
            self._account.use_session_secret(None)
            return None

        if session.secret is None:
            session.secret = saved_secret
        log.event(EngagementStage.SESSION, "Recovered session from storage", session_id=session.id)
        return session
