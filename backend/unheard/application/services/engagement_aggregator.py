"""Engagement aggregator — joins confessions with their comments and reactions.

Produces the enriched confession view the UI renders and keeps the derived
``is_highlighted`` flag in the store in line with the reactions it sees.
"""

import asyncio
from dataclasses import replace
from functools import partial

from unheard.application.interfaces import CommentRepository, ConfessionRepository
from unheard.application.services.reaction_service import ReactionService
from unheard.application.services.secondary_effects import SecondaryEffectQueue
from unheard.domain.entities import Confession, ReactionTally
from unheard.infrastructure.logging.engagement_logger import EngagementLogger, EngagementStage

log = EngagementLogger("EngagementAggregator")


class EngagementAggregator:
    """Enriches confessions and recomputes their highlight status.

    A confession is highlighted when its reactions add up to more than
    ``highlight_threshold``. The recomputed flag is what callers see; when
    it differs from the stored one a best-effort write-back is queued.
    """

    def __init__(
        self,
        confession_repository: ConfessionRepository,
        comment_repository: CommentRepository,
        reactions: ReactionService,
        effects: SecondaryEffectQueue,
        highlight_threshold: int = 30,
    ):
        self._confessions = confession_repository
        self._comments = comment_repository
        self._reactions = reactions
        self._effects = effects
        self._threshold = highlight_threshold

    def is_highlighted(self, tally: ReactionTally) -> bool:
        return tally.total > self._threshold

    async def enrich(self, confession: Confession) -> Confession:
        """Return a copy of ``confession`` with comments, reactions and a fresh flag.

        If either lookup fails the confession comes back unenriched rather
        than raising, so one broken record cannot blank a whole feed.
        """
        comments, tally = await asyncio.gather(
            self._comments.list_for_confession(confession.id),
            self._reactions.get_reactions(confession.id),
            return_exceptions=True,
        )
        error = next((o for o in (comments, tally) if isinstance(o, BaseException)), None)
        if error is not None:
            log.failure(
                EngagementStage.HIGHLIGHT, "Could not enrich confession",
                error=error, confession_id=confession.id,
            )
            return confession

        highlighted = self.is_highlighted(tally)
        if highlighted != confession.is_highlighted:
            log.event(
                EngagementStage.HIGHLIGHT, "Highlight status changed",
                confession_id=confession.id, highlighted=highlighted, reactions=tally.total,
            )
            self._effects.submit(
                "is_highlighted",
                partial(self._confessions.update_fields, confession.id, {"is_highlighted": highlighted}),
                key=confession.id,
            )

        return replace(
            confession,
            comments=list(comments),
            reactions=tally.summaries(),
            is_highlighted=highlighted,
        )

    async def enrich_many(self, confessions: list[Confession]) -> list[Confession]:
        """Enrich all confessions concurrently, keeping the input order."""
        if not confessions:
            return []
        return list(await asyncio.gather(*(self.enrich(c) for c in confessions)))
