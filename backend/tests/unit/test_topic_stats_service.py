"""Unit tests for the TopicStatsService."""

import pytest


@pytest.mark.asyncio
async def test_no_confessions_gives_no_topics(topic_stats_service):
    assert await topic_stats_service.compute_topic_stats() == []


@pytest.mark.asyncio
async def test_topics_are_counted_most_popular_first(topic_stats_service, make_confession):
    make_confession(topic="Relationships")
    for _ in range(3):
        make_confession(topic="Mental Health")
    make_confession(topic=None)

    topics = await topic_stats_service.compute_topic_stats()

    assert [(t.name, t.icon, t.count) for t in topics] == [
        ("Mental Health", "🧠", 3),
        ("Relationships", "❤️", 1),
    ]


@pytest.mark.asyncio
async def test_unknown_topic_uses_fallback_icon(topic_stats_service, make_confession):
    make_confession(topic="Quantum Gardening")

    topics = await topic_stats_service.compute_topic_stats()

    assert topics[0].icon == "📝"


@pytest.mark.asyncio
async def test_ties_keep_feed_order(topic_stats_service, make_confession):
    # The feed is newest first, so the last inserted topic is seen first.
    make_confession(topic="Life Goals")
    make_confession(topic="Career Struggles")

    topics = await topic_stats_service.compute_topic_stats()

    assert [t.name for t in topics] == ["Career Struggles", "Life Goals"]
