"""Application service for emoji reactions on confessions."""

from unheard.application.interfaces import ReactionRepository
from unheard.application.services.identity_service import AnonymousIdentityProvider
from unheard.application.services.ownership_policy import OwnershipPolicy
from unheard.application.services.single_flight import SingleFlight
from unheard.domain.entities import Reaction, ReactionTally, ReactionType, ToggleResult
from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

log = EngagementLogger("ReactionService")


class ReactionService:
    """Toggles and tallies reactions for the current device.

    A device may hold several reaction types on the same confession at
    once; each (confession, device, type) triple is toggled on its own.
    """

    def __init__(
        self,
        repository: ReactionRepository,
        identity: AnonymousIdentityProvider,
        ownership: OwnershipPolicy,
    ):
        self._repository = repository
        self._identity = identity
        self._ownership = ownership
        self._toggles: SingleFlight[ToggleResult] = SingleFlight()

    async def toggle_reaction(
        self, confession_id: str, reaction_type: ReactionType
    ) -> ToggleResult:
        """Add the reaction if this device has not reacted with it yet, else remove it.

        Toggles that overlap for the same triple (e.g. a double click) are
        merged into a single store operation and all receive its result.
        """
        await self._identity.get_or_create_session()
        device_id = self._identity.get_or_create_device_id()

        return await self._toggles.do(
            (confession_id, device_id, reaction_type),
            lambda: self._toggle(confession_id, device_id, reaction_type),
        )

    async def get_reactions(self, confession_id: str) -> ReactionTally:
        """Count every reaction type and collect the ones this device used."""
        device_id = self._identity.get_or_create_device_id()
        tally = ReactionTally()
        for reaction in await self._repository.list_for_confession(confession_id):
            if reaction.type not in tally.counts:
                continue
            tally.counts[reaction.type] += 1
            if reaction.is_owned_by(device_id):
                tally.user_reactions.add(reaction.type)
        return tally

    async def _toggle(
        self, confession_id: str, device_id: str, reaction_type: ReactionType
    ) -> ToggleResult:
        existing = await self._repository.find(confession_id, device_id, reaction_type)

        if existing:
            # Removing every match also clears duplicates left by earlier races.
            for row in existing:
                self._ownership.ensure_owner(row, action="remove", entity_type="Reaction")
                await self._repository.delete(row.id)
            log.event(
                EngagementStage.REACTION, "Reaction removed",
                confession_id=confession_id, type=reaction_type.value,
            )
            return ToggleResult(added=False, reaction_type=reaction_type)

        await self._repository.create(
            Reaction(confession_id=confession_id, device_id=device_id, type=reaction_type)
        )
        await self._drop_duplicates(confession_id, device_id, reaction_type)
        log.event(
            EngagementStage.REACTION, "Reaction added",
            confession_id=confession_id, type=reaction_type.value,
        )
        return ToggleResult(added=True, reaction_type=reaction_type)

    async def _drop_duplicates(
        self, confession_id: str, device_id: str, reaction_type: ReactionType
    ) -> None:
        """Keep only the oldest row for the triple.

        Another process acting for the same device can slip a second row in
        between our read and our write; this re-read closes that gap.
        """
        rows = await self._repository.find(confession_id, device_id, reaction_type)
        for extra in rows[1:]:
            log.trace(EngagementStage.REACTION, "Dropping duplicate reaction", reaction_id=extra.id)
            await self._repository.delete(extra.id)
