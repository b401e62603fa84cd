"""Unit tests for the EngagementAggregator (enrichment and highlight recompute)."""

import pytest

from unheard.domain.entities import Reaction, ReactionTally, ReactionType


def _add_reactions(reaction_repo, confession_id: str, n: int) -> None:
    for i in range(n):
        reaction_repo.add(
            Reaction(confession_id=confession_id, device_id=f"d{i}", type=ReactionType.HEART)
        )


def test_highlight_threshold_is_exclusive(aggregator):
    at_threshold = ReactionTally(counts={t: 0 for t in ReactionType})
    at_threshold.counts[ReactionType.HEART] = 30
    above = ReactionTally(counts={t: 0 for t in ReactionType})
    above.counts[ReactionType.HEART] = 31

    assert aggregator.is_highlighted(at_threshold) is False
    assert aggregator.is_highlighted(above) is True


@pytest.mark.asyncio
async def test_crossing_threshold_writes_flag_back(
    aggregator, reaction_repo, confession_repo, effects, make_confession
):
    confession = make_confession()
    _add_reactions(reaction_repo, confession.id, 31)

    enriched = await aggregator.enrich(confession)
    await effects.drain()

    assert enriched.is_highlighted is True
    assert confession_repo.items[confession.id].is_highlighted is True


@pytest.mark.asyncio
async def test_falling_below_threshold_clears_flag(
    aggregator, reaction_repo, confession_repo, effects, make_confession
):
    confession = make_confession(is_highlighted=True)
    _add_reactions(reaction_repo, confession.id, 30)

    enriched = await aggregator.enrich(confession)
    await effects.drain()

    assert enriched.is_highlighted is False
    assert confession_repo.items[confession.id].is_highlighted is False


@pytest.mark.asyncio
async def test_unchanged_flag_is_not_written(aggregator, effects, make_confession):
    confession = make_confession()

    await aggregator.enrich(confession)
    await effects.drain()

    assert effects.stats()["succeeded"] == {}


@pytest.mark.asyncio
async def test_failed_write_back_still_returns_fresh_flag(
    aggregator, reaction_repo, confession_repo, effects, make_confession
):
    confession = make_confession()
    _add_reactions(reaction_repo, confession.id, 31)
    confession_repo.fail_updates = RuntimeError("store unavailable")

    enriched = await aggregator.enrich(confession)
    await effects.drain()

    assert enriched.is_highlighted is True
    assert effects.stats()["failed"] == {"is_highlighted": 1}


@pytest.mark.asyncio
async def test_lookup_failure_returns_unenriched_confession(
    aggregator, comment_repo, make_confession
):
    confession = make_confession()
    comment_repo.fail_lists = True

    result = await aggregator.enrich(confession)

    assert result is confession
    assert result.is_enriched is False


@pytest.mark.asyncio
async def test_enrich_many_keeps_order(aggregator, make_confession):
    confessions = [make_confession() for _ in range(4)]

    enriched = await aggregator.enrich_many(confessions)

    assert [c.id for c in enriched] == [c.id for c in confessions]
    assert await aggregator.enrich_many([]) == []
