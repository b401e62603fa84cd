"""Application service (use case) for comments on confessions."""

from functools import partial

from unheard.application.interfaces import CommentRepository, ConfessionRepository
from unheard.application.schemas.comment import CommentCreate
from unheard.application.services.identity_service import AnonymousIdentityProvider
from unheard.application.services.ownership_policy import OwnershipPolicy
from unheard.application.services.profile_service import ProfileService
from unheard.application.services.secondary_effects import SecondaryEffectQueue
from unheard.domain.avatars import resolve_avatar
from unheard.domain.entities import Comment
from unheard.domain.exceptions import EntityNotFoundError, SubmissionRejectedError
from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

log = EngagementLogger("CommentService")


class CommentService:
    """Adds, lists and deletes comments.

    The parent confession's ``comments_count`` is denormalized; it is
    adjusted after the comment write as a queued best-effort effect.
    """

    def __init__(
        self,
        repository: CommentRepository,
        confession_repository: ConfessionRepository,
        identity: AnonymousIdentityProvider,
        ownership: OwnershipPolicy,
        effects: SecondaryEffectQueue,
        profiles: ProfileService | None = None,
    ):
        self._repository = repository
        self._confessions = confession_repository
        self._identity = identity
        self._ownership = ownership
        self._effects = effects
        self._profiles = profiles

    async def add_comment(self, confession_id: str, data: CommentCreate) -> Comment:
        if not data.text.strip():
            raise SubmissionRejectedError("Comment text cannot be empty")

        await self._identity.get_or_create_session()
        device_id = self._identity.get_or_create_device_id()

        created = await self._repository.create(
            Comment(
                confession_id=confession_id,
                username=data.username or f"Anonymous User-{device_id[:6]}",
                text=data.text,
                avatar=resolve_avatar(data.avatar, device_id),
                device_id=device_id,
            )
        )
        log.event(EngagementStage.COMMENT, "Comment added", confession_id=confession_id)

        self._effects.submit(
            "comments_count.increment",
            partial(self._adjust_comments_count, confession_id, 1),
            key=confession_id,
        )
        if self._profiles is not None and data.username:
            self._profiles.remember("comment", data.username, data.avatar)
        return created

    async def list_comments(self, confession_id: str) -> list[Comment]:
        """Comments on a confession, newest first."""
        return await self._repository.list_for_confession(confession_id)

    async def delete_comment(self, comment_id: str, confession_id: str) -> bool:
        """Delete one of this device's own comments.

        Raises:
            EntityNotFoundError: no such comment on that confession.
            PermissionDeniedError: the comment was written by another device.
        """
        await self._identity.get_or_create_session()

        comment = await self._repository.get_by_id(comment_id)
        if comment is None or comment.confession_id != confession_id:
            raise EntityNotFoundError("Comment", comment_id)
        self._ownership.ensure_owner(comment, action="delete", entity_type="Comment")

        deleted = await self._repository.delete(comment_id)
        if not deleted:
            # Another delete of the same comment won; its decrement is already queued
            raise EntityNotFoundError("Comment", comment_id)
        log.event(EngagementStage.COMMENT, "Comment deleted", confession_id=confession_id)

        self._effects.submit(
            "comments_count.decrement",
            partial(self._adjust_comments_count, confession_id, -1),
            key=confession_id,
        )
        return True

    async def _adjust_comments_count(self, confession_id: str, delta: int) -> None:
        confession = await self._confessions.get_by_id(confession_id)
        if confession is None:
            raise EntityNotFoundError("Confession", confession_id)
        new_count = max(0, confession.comments_count + delta)
        await self._confessions.update_fields(confession_id, {"comments_count": new_count})
