"""Confession endpoints — feed, submission, author edits and deletion."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from unheard.application.schemas import ConfessionCreate, ConfessionResponse, ConfessionUpdate
from unheard.application.services import AnonymousIdentityProvider, ConfessionService
from unheard.domain.entities import Tag
from unheard.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    SubmissionRejectedError,
)
from unheard.infrastructure.dependencies import get_confession_service, get_identity_provider

router = APIRouter(prefix="/confessions", tags=["Confessions"])


@router.get("", response_model=list[ConfessionResponse])
async def list_confessions(
    tag: Tag | None = Query(None, description="Only confessions carrying this tag"),
    topic: str | None = Query(None, description="Only confessions in this topic"),
    highlighted: bool = Query(False, description="Only highlighted confessions"),
    service: ConfessionService = Depends(get_confession_service),
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> list[ConfessionResponse]:
    """The enriched feed; at most one filter may be given."""
    try:
        confessions = await service.list_confessions(tag=tag, topic=topic, highlighted=highlighted)
    except SubmissionRejectedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    device_id = identity.get_or_create_device_id()
    return [ConfessionResponse.from_entity(c, device_id) for c in confessions]


@router.post("", response_model=ConfessionResponse, status_code=status.HTTP_201_CREATED)
async def create_confession(
    data: ConfessionCreate,
    service: ConfessionService = Depends(get_confession_service),
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> ConfessionResponse:
    try:
        confession = await service.create_confession(data)
    except SubmissionRejectedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return ConfessionResponse.from_entity(confession, identity.get_or_create_device_id())


@router.get("/{confession_id}", response_model=ConfessionResponse)
async def get_confession(
    confession_id: str,
    service: ConfessionService = Depends(get_confession_service),
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> ConfessionResponse:
    try:
        confession = await service.get_confession(confession_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ConfessionResponse.from_entity(confession, identity.get_or_create_device_id())


@router.patch("/{confession_id}", response_model=ConfessionResponse)
async def edit_confession(
    confession_id: str,
    data: ConfessionUpdate,
    service: ConfessionService = Depends(get_confession_service),
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> ConfessionResponse:
    """Author edit of text, tags, mood or topic."""
    try:
        confession = await service.edit_confession(confession_id, data)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except SubmissionRejectedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return ConfessionResponse.from_entity(confession, identity.get_or_create_device_id())


@router.delete("/{confession_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_confession(
    confession_id: str,
    service: ConfessionService = Depends(get_confession_service),
) -> None:
    try:
        await service.delete_confession(confession_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
