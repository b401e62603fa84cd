"""Topic statistics — how many confessions each topic has, for browsing."""

from unheard.application.services.confession_service import ConfessionService
from unheard.domain.entities import Topic, icon_for_topic


class TopicStatsService:

    def __init__(self, confessions: ConfessionService):
        self._confessions = confessions

    async def compute_topic_stats(self) -> list[Topic]:
        """Count confessions per topic, most popular first.

        Confessions without a topic are skipped. Topics with equal counts
        keep the order in which they were first seen in the feed.
        """
        topics: dict[str, Topic] = {}
        for confession in await self._confessions.list_confessions():
            if not confession.topic:
                continue
            topic = topics.get(confession.topic)
            if topic is None:
                topic = topics[confession.topic] = Topic(
                    name=confession.topic, icon=icon_for_topic(confession.topic)
                )
            topic.count += 1

        return sorted(topics.values(), key=lambda t: t.count, reverse=True)
