"""Closed vocabularies for the submission forms."""

from fastapi import APIRouter

from unheard.application.schemas import CatalogResponse, MoodChoice, ReactionChoice, TopicChoice
from unheard.domain.entities import MOOD_ICONS, REACTION_DESCRIPTIONS, TOPIC_ICONS, Mood, ReactionType, Tag

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("", response_model=CatalogResponse)
async def get_catalog() -> CatalogResponse:
    return CatalogResponse(
        tags=list(Tag),
        moods=[MoodChoice(value=m, icon=MOOD_ICONS[m]) for m in Mood],
        reactions=[ReactionChoice(type=t, description=REACTION_DESCRIPTIONS[t]) for t in ReactionType],
        topics=[TopicChoice(name=name, icon=icon) for name, icon in TOPIC_ICONS.items()],
    )
