"""Topic statistics endpoint."""

from fastapi import APIRouter, Depends

from unheard.application.schemas import TopicResponse
from unheard.application.services import TopicStatsService
from unheard.infrastructure.dependencies import get_topic_stats_service

router = APIRouter(prefix="/topics", tags=["Topics"])


@router.get("", response_model=list[TopicResponse])
async def list_topics(
    service: TopicStatsService = Depends(get_topic_stats_service),
) -> list[TopicResponse]:
    """Topics with their confession counts, most popular first."""
    topics = await service.compute_topic_stats()
    return [TopicResponse.model_validate(t) for t in topics]
