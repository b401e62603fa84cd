"""Application service (use case) for Confession operations."""

import logging
from functools import partial
from typing import Any

from unheard.application.interfaces import (
    CommentRepository,
    ConfessionRepository,
    ReactionRepository,
)
from unheard.application.schemas.confession import ConfessionCreate, ConfessionUpdate
from unheard.application.services.engagement_aggregator import EngagementAggregator
from unheard.application.services.identity_service import AnonymousIdentityProvider
from unheard.application.services.ownership_policy import OwnershipPolicy
from unheard.application.services.profile_service import ProfileService
from unheard.application.services.reaction_service import ReactionService
from unheard.application.services.secondary_effects import SecondaryEffectQueue
from unheard.domain.avatars import resolve_avatar
from unheard.domain.entities import (
    ANONYMOUS_USERNAME,
    TOPIC_ICONS,
    Confession,
    ReactionSummary,
    ReactionType,
    Tag,
    count_words,
    unique_tags,
)
from unheard.domain.exceptions import (
    DocumentStoreError,
    EntityNotFoundError,
    SubmissionRejectedError,
)
from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

logger = logging.getLogger(__name__)
log = EngagementLogger("ConfessionService")


class ConfessionService:
    """Orchestrates confession CRUD. Every read comes back enriched.

    Depends on the repository port (DI) plus the identity provider for
    sessions and authorship, and the aggregator for engagement data.
    """

    def __init__(
        self,
        repository: ConfessionRepository,
        identity: AnonymousIdentityProvider,
        aggregator: EngagementAggregator,
        ownership: OwnershipPolicy,
        effects: SecondaryEffectQueue,
        reactions: ReactionService | None = None,
        profiles: ProfileService | None = None,
        min_words: int = 10,
        comment_repository: CommentRepository | None = None,
        reaction_repository: ReactionRepository | None = None,
    ):
        self._repository = repository
        self._identity = identity
        self._aggregator = aggregator
        self._ownership = ownership
        self._effects = effects
        self._reactions = reactions
        self._profiles = profiles
        self._min_words = min_words
        self._comments = comment_repository
        self._reaction_rows = reaction_repository

    async def create_confession(self, data: ConfessionCreate) -> Confession:
        """Validate, stamp with this device and store a new confession.

        The optional initial reaction is applied afterwards as a separate
        best-effort step; if it fails the confession still stands.
        """
        self._check_text(data.text)
        topic = self._check_topic(data.topic)

        await self._identity.get_or_create_session()
        device_id = self._identity.get_or_create_device_id()

        anonymous = data.anonymous if data.anonymous is not None else not data.username
        if anonymous:
            username = ANONYMOUS_USERNAME
        else:
            username = data.username or f"User-{device_id[:6]}"

        created = await self._repository.create(
            Confession(
                text=data.text,
                tags=unique_tags(data.tags),
                username=username,
                avatar=resolve_avatar(data.avatar, device_id),
                device_id=device_id,
                mood=data.mood,
                topic=topic,
                anonymous=anonymous,
            )
        )
        log.event(EngagementStage.CONFESSION, "Confession created", confession_id=created.id)

        if data.initial_reaction is not None and self._reactions is not None:
            self._effects.submit(
                "initial_reaction",
                partial(self._reactions.toggle_reaction, created.id, data.initial_reaction),
                key=created.id,
            )
        if self._profiles is not None and data.username:
            self._profiles.remember("confession", data.username, data.avatar)

        created.comments = []
        created.reactions = [
            ReactionSummary(
                type=t,
                count=1 if t == data.initial_reaction else 0,
                user_has_reacted=t == data.initial_reaction,
            )
            for t in ReactionType
        ]
        return created

    async def list_confessions(
        self,
        *,
        tag: Tag | None = None,
        topic: str | None = None,
        highlighted: bool = False,
    ) -> list[Confession]:
        """List enriched confessions, optionally narrowed by one filter.

        Unfiltered and tag listings are newest first; topic and highlighted
        listings keep the store's default order.
        """
        if sum((tag is not None, topic is not None, highlighted)) > 1:
            raise SubmissionRejectedError("Only one of tag, topic or highlighted may be used as a filter")

        await self._identity.get_or_create_session()
        confessions = await self._repository.get_all(
            tag=tag,
            topic=topic,
            highlighted=True if highlighted else None,
            newest_first=topic is None and not highlighted,
        )
        return await self._aggregator.enrich_many(confessions)

    async def get_confession(self, confession_id: str) -> Confession:
        await self._identity.get_or_create_session()
        confession = await self._get_stored(confession_id)
        return await self._aggregator.enrich(confession)

    async def update_confession(self, confession_id: str, fields: dict[str, Any]) -> bool:
        """Write ``fields`` to the stored confession.

        A refusal from the backend's permission check is tolerated: the
        write is skipped, logged, and False is returned instead of raising.
        """
        await self._identity.get_or_create_session()
        try:
            await self._repository.update_fields(confession_id, fields)
        except DocumentStoreError as exc:
            if not exc.is_permission_error:
                raise
            if exc.status_code == 401:
                # The backend no longer accepts the cached session
                self._identity.invalidate_session()
            logger.info(
                "Update of confession %s skipped, backend denied the write (%s)",
                confession_id,
                exc.message,
            )
            return False
        return True

    async def edit_confession(self, confession_id: str, data: ConfessionUpdate) -> Confession:
        """Author edit — only the device that created the confession may change it."""
        await self._identity.get_or_create_session()
        confession = await self._get_stored(confession_id)
        self._ownership.ensure_owner(confession, action="edit", entity_type="Confession")

        fields: dict[str, Any] = {}
        if data.text is not None:
            self._check_text(data.text)
            fields["text"] = data.text
        if data.tags is not None:
            fields["tags"] = unique_tags(data.tags)
        if data.mood is not None:
            fields["mood"] = data.mood
        if data.topic is not None:
            fields["topic"] = self._check_topic(data.topic)

        if fields:
            await self.update_confession(confession_id, fields)
        return await self.get_confession(confession_id)

    async def delete_confession(self, confession_id: str) -> bool:
        """Delete an own confession, then queue removal of its comments and reactions.

        The cleanup runs as a secondary effect after the confession is gone.
        """
        await self._identity.get_or_create_session()
        confession = await self._get_stored(confession_id)
        self._ownership.ensure_owner(confession, action="delete", entity_type="Confession")
        deleted = await self._repository.delete(confession_id)
        if not deleted:
            raise EntityNotFoundError("Confession", confession_id)
        log.event(EngagementStage.CONFESSION, "Confession deleted", confession_id=confession_id)

        if self._comments is not None or self._reaction_rows is not None:
            self._effects.submit(
                "confession.cleanup",
                partial(self._remove_engagement, confession_id),
                key=confession_id,
            )
        return True

    async def _remove_engagement(self, confession_id: str) -> None:
        removed = 0
        if self._comments is not None:
            for comment in await self._comments.list_for_confession(confession_id):
                removed += await self._comments.delete(comment.id)
        if self._reaction_rows is not None:
            for reaction in await self._reaction_rows.list_for_confession(confession_id):
                removed += await self._reaction_rows.delete(reaction.id)
        log.event(
            EngagementStage.CONFESSION,
            "Removed comments and reactions",
            confession_id=confession_id,
            removed=removed,
        )

    async def _get_stored(self, confession_id: str) -> Confession:
        confession = await self._repository.get_by_id(confession_id)
        if confession is None:
            raise EntityNotFoundError("Confession", confession_id)
        return confession

    def _check_text(self, text: str) -> None:
        if count_words(text) < self._min_words:
            raise SubmissionRejectedError(
                f"Please write at least {self._min_words} words for your confession"
            )

    @staticmethod
    def _check_topic(topic: str | None) -> str | None:
        if not topic:
            return None
        if topic not in TOPIC_ICONS:
            raise SubmissionRejectedError(f"Unknown topic '{topic}'")
        return topic
