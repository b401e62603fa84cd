"""One-off migration that gives pre-ownership records a device identifier.

Records written before ``deviceId`` existed have no owner; they are all
assigned one shared ``legacy-…`` identifier that no real device holds, so
nobody can edit or delete them through the ownership checks.
"""

from dataclasses import dataclass
from uuid import uuid4

from unheard.application.interfaces import (
    CommentRepository,
    ConfessionRepository,
    ReactionRepository,
)
from unheard.application.services.identity_service import AnonymousIdentityProvider
from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

log = EngagementLogger("LegacyDeviceMigration")


@dataclass
class MigrationReport:
    legacy_device_id: str
    confessions_migrated: int = 0
    comments_migrated: int = 0
    reactions_migrated: int = 0


class LegacyDeviceMigration:

    def __init__(
        self,
        confessions: ConfessionRepository,
        comments: CommentRepository,
        reactions: ReactionRepository,
        identity: AnonymousIdentityProvider,
    ):
        self._confessions = confessions
        self._comments = comments
        self._reactions = reactions
        self._identity = identity

    async def run(self) -> MigrationReport:
        await self._identity.get_or_create_session()
        report = MigrationReport(legacy_device_id=f"legacy-{uuid4().hex}")

        with log.timed(EngagementStage.MIGRATION, "Legacy deviceId migration"):
            for confession in await self._confessions.list_without_device_id():
                await self._confessions.update_fields(
                    confession.id, {"device_id": report.legacy_device_id}
                )
                report.confessions_migrated += 1

            for comment in await self._comments.list_without_device_id():
                await self._comments.assign_device_id(comment.id, report.legacy_device_id)
                report.comments_migrated += 1

            for reaction in await self._reactions.list_without_device_id():
                await self._reactions.assign_device_id(reaction.id, report.legacy_device_id)
                report.reactions_migrated += 1

        log.event(
            EngagementStage.MIGRATION, "Migration completed",
            confessions=report.confessions_migrated,
            comments=report.comments_migrated,
            reactions=report.reactions_migrated,
        )
        return report
