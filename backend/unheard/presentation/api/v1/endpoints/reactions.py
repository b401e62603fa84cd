"""Reaction endpoints — tally and toggle for one confession."""

from fastapi import APIRouter, Depends, HTTPException, status

from unheard.application.schemas import (
    ReactionTallyResponse,
    ToggleReactionRequest,
    ToggleReactionResponse,
)
from unheard.application.services import ReactionService
from unheard.domain.exceptions import PermissionDeniedError
from unheard.infrastructure.dependencies import get_reaction_service

router = APIRouter(prefix="/confessions/{confession_id}/reactions", tags=["Reactions"])


@router.get("", response_model=ReactionTallyResponse)
async def get_reactions(
    confession_id: str,
    service: ReactionService = Depends(get_reaction_service),
) -> ReactionTallyResponse:
    tally = await service.get_reactions(confession_id)
    return ReactionTallyResponse.from_tally(tally)


@router.post("", response_model=ToggleReactionResponse)
async def toggle_reaction(
    confession_id: str,
    data: ToggleReactionRequest,
    service: ReactionService = Depends(get_reaction_service),
) -> ToggleReactionResponse:
    """Add this device's reaction of the given type, or remove it if present."""
    try:
        result = await service.toggle_reaction(confession_id, data.type)
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return ToggleReactionResponse.model_validate(result)
