"""Shared in-memory fakes and service fixtures for the test suite."""

import asyncio
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Any

import pytest

from unheard.application.interfaces import (
    AccountGateway,
    CommentRepository,
    ConfessionRepository,
    KeyValueStore,
    ReactionRepository,
)
from unheard.application.services import (
    AnonymousIdentityProvider,
    CommentService,
    ConfessionService,
    EngagementAggregator,
    OwnershipPolicy,
    ProfileService,
    ReactionService,
    SecondaryEffectQueue,
    TopicStatsService,
)
from unheard.domain.entities import (
    AnonymousSession,
    Comment,
    Confession,
    Reaction,
    ReactionType,
    Tag,
)
from unheard.domain.exceptions import DocumentStoreError

_BASE_TIME = datetime(2025, 5, 1, tzinfo=timezone.utc)


class InMemoryKeyValueStore(KeyValueStore):

    def __init__(self, values: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


class FakeAccountGateway(AccountGateway):
    """Starts without a session; ``create_anonymous_session`` makes one current."""

    def __init__(self):
        self.current: AnonymousSession | None = None
        self.known: dict[str, AnonymousSession] = {}
        self.secret: str | None = None
        self.create_calls = 0
        self.fail_create = False
        self._ids = count(1)

    async def get_current_session(self) -> AnonymousSession:
        await asyncio.sleep(0)
        if self.current is None:
            raise DocumentStoreError(401, "User (role: guests) missing scope (account)")
        return self.current

    async def get_session(self, session_id: str) -> AnonymousSession:
        session = self.known.get(session_id)
        if session is None or session.secret != self.secret:
            raise DocumentStoreError(404, "Session not found")
        self.current = session
        return AnonymousSession(id=session.id, user_id=session.user_id)

    async def create_anonymous_session(self) -> AnonymousSession:
        self.create_calls += 1
        await asyncio.sleep(0)
        if self.fail_create:
            raise DocumentStoreError(429, "Rate limit for the current endpoint has been exceeded")
        n = next(self._ids)
        session = AnonymousSession(id=f"session-{n}", user_id=f"user-{n}", secret=f"secret-{n}")
        self.known[session.id] = session
        self.current = session
        self.secret = session.secret
        return session

    def use_session_secret(self, secret: str | None) -> None:
        self.secret = secret


class FakeConfessionRepository(ConfessionRepository):
    """In-memory fake keyed by generated ids; timestamps increase per insert."""

    def __init__(self):
        self.items: dict[str, Confession] = {}
        self.fail_updates: Exception | None = None
        self.create_calls = 0
        self._ids = count(1)

    def add(self, confession: Confession) -> Confession:
        n = next(self._ids)
        confession.id = confession.id or f"confession-{n}"
        confession.timestamp = _BASE_TIME + timedelta(minutes=n)
        self.items[confession.id] = confession
        return confession

    async def get_by_id(self, confession_id: str) -> Confession | None:
        stored = self.items.get(confession_id)
        return Confession(**{**stored.__dict__, "tags": list(stored.tags)}) if stored else None

    async def get_all(
        self,
        *,
        tag: Tag | None = None,
        topic: str | None = None,
        highlighted: bool | None = None,
        newest_first: bool = True,
    ) -> list[Confession]:
        result = [await self.get_by_id(c_id) for c_id in self.items]
        if tag is not None:
            result = [c for c in result if tag in c.tags]
        if topic is not None:
            result = [c for c in result if c.topic == topic]
        if highlighted is not None:
            result = [c for c in result if c.is_highlighted == highlighted]
        if newest_first:
            result.sort(key=lambda c: c.timestamp, reverse=True)
        return result

    async def create(self, confession: Confession) -> Confession:
        self.create_calls += 1
        return self.add(confession)

    async def update_fields(self, confession_id: str, fields: dict[str, Any]) -> None:
        await asyncio.sleep(0)
        if self.fail_updates is not None:
            raise self.fail_updates
        if confession_id not in self.items:
            raise DocumentStoreError(404, "Document with the requested ID could not be found.")
        for name, value in fields.items():
            setattr(self.items[confession_id], name, value)

    async def delete(self, confession_id: str) -> bool:
        return self.items.pop(confession_id, None) is not None

    async def list_without_device_id(self) -> list[Confession]:
        return [c for c in self.items.values() if c.device_id is None]


class FakeCommentRepository(CommentRepository):

    def __init__(self):
        self.items: dict[str, Comment] = {}
        self.fail_lists = False
        self._ids = count(1)

    def add(self, comment: Comment) -> Comment:
        n = next(self._ids)
        comment.id = comment.id or f"comment-{n}"
        comment.timestamp = _BASE_TIME + timedelta(minutes=n)
        self.items[comment.id] = comment
        return comment

    async def get_by_id(self, comment_id: str) -> Comment | None:
        await asyncio.sleep(0)
        return self.items.get(comment_id)

    async def list_for_confession(self, confession_id: str) -> list[Comment]:
        if self.fail_lists:
            raise DocumentStoreError(500, "Server Error")
        comments = [c for c in self.items.values() if c.confession_id == confession_id]
        return sorted(comments, key=lambda c: c.timestamp, reverse=True)

    async def create(self, comment: Comment) -> Comment:
        return self.add(comment)

    async def delete(self, comment_id: str) -> bool:
        return self.items.pop(comment_id, None) is not None

    async def list_without_device_id(self) -> list[Comment]:
        return [c for c in self.items.values() if c.device_id is None]

    async def assign_device_id(self, comment_id: str, device_id: str) -> None:
        self.items[comment_id].device_id = device_id


class FakeReactionRepository(ReactionRepository):
    """Yields to the event loop on every call so interleavings are realistic."""

    def __init__(self):
        self.items: dict[str, Reaction] = {}
        self.create_calls = 0
        self._ids = count(1)

    def add(self, reaction: Reaction) -> Reaction:
        n = next(self._ids)
        reaction.id = reaction.id or f"reaction-{n}"
        reaction.timestamp = _BASE_TIME + timedelta(seconds=n)
        self.items[reaction.id] = reaction
        return reaction

    async def list_for_confession(self, confession_id: str) -> list[Reaction]:
        await asyncio.sleep(0)
        return [r for r in self.items.values() if r.confession_id == confession_id]

    async def find(
        self, confession_id: str, device_id: str, reaction_type: ReactionType
    ) -> list[Reaction]:
        await asyncio.sleep(0)
        rows = [
            r for r in self.items.values()
            if r.confession_id == confession_id
            and r.device_id == device_id
            and r.type == reaction_type
        ]
        return sorted(rows, key=lambda r: r.timestamp)

    async def create(self, reaction: Reaction) -> Reaction:
        self.create_calls += 1
        await asyncio.sleep(0)
        return self.add(reaction)

    async def delete(self, reaction_id: str) -> bool:
        await asyncio.sleep(0)
        return self.items.pop(reaction_id, None) is not None

    async def list_without_device_id(self) -> list[Reaction]:
        return [r for r in self.items.values() if r.device_id is None]

    async def assign_device_id(self, reaction_id: str, device_id: str) -> None:
        self.items[reaction_id].device_id = device_id


# ── Fixtures ──


@pytest.fixture
def storage() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def account() -> FakeAccountGateway:
    return FakeAccountGateway()


@pytest.fixture
def identity(storage, account) -> AnonymousIdentityProvider:
    return AnonymousIdentityProvider(storage, account)


@pytest.fixture
def device_id(identity) -> str:
    return identity.get_or_create_device_id()


@pytest.fixture
def effects() -> SecondaryEffectQueue:
    return SecondaryEffectQueue()


@pytest.fixture
def ownership(identity) -> OwnershipPolicy:
    return OwnershipPolicy(identity)


@pytest.fixture
def profiles(storage) -> ProfileService:
    return ProfileService(storage)


@pytest.fixture
def confession_repo() -> FakeConfessionRepository:
    return FakeConfessionRepository()


@pytest.fixture
def comment_repo() -> FakeCommentRepository:
    return FakeCommentRepository()


@pytest.fixture
def reaction_repo() -> FakeReactionRepository:
    return FakeReactionRepository()


@pytest.fixture
def reaction_service(reaction_repo, identity, ownership) -> ReactionService:
    return ReactionService(reaction_repo, identity, ownership)


@pytest.fixture
def aggregator(confession_repo, comment_repo, reaction_service, effects) -> EngagementAggregator:
    return EngagementAggregator(confession_repo, comment_repo, reaction_service, effects)


@pytest.fixture
def confession_service(
    confession_repo, comment_repo, reaction_repo, identity, aggregator, ownership, effects,
    reaction_service, profiles,
) -> ConfessionService:
    return ConfessionService(
        repository=confession_repo,
        identity=identity,
        aggregator=aggregator,
        ownership=ownership,
        effects=effects,
        reactions=reaction_service,
        profiles=profiles,
        comment_repository=comment_repo,
        reaction_repository=reaction_repo,
    )


@pytest.fixture
def comment_service(
    comment_repo, confession_repo, identity, ownership, effects, profiles
) -> CommentService:
    return CommentService(
        repository=comment_repo,
        confession_repository=confession_repo,
        identity=identity,
        ownership=ownership,
        effects=effects,
        profiles=profiles,
    )


@pytest.fixture
def topic_stats_service(confession_service) -> TopicStatsService:
    return TopicStatsService(confession_service)


@pytest.fixture
def make_confession(confession_repo):
    """Insert a stored confession directly, bypassing validation."""

    def _make(
        text: str = "one two three four five six seven eight nine ten",
        device_id: str | None = "other-device",
        **kwargs: Any,
    ) -> Confession:
        kwargs.setdefault("tags", [])
        kwargs.setdefault("username", "Anonymous")
        kwargs.setdefault("avatar", "https://api.dicebear.com/7.x/avataaars/svg?seed=x")
        return confession_repo.add(Confession(text=text, device_id=device_id, **kwargs))

    return _make
