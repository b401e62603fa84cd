"""Comment endpoints for one confession."""

from fastapi import APIRouter, Depends, HTTPException, status

from unheard.application.schemas import CommentCreate, CommentResponse
from unheard.application.services import AnonymousIdentityProvider, CommentService
from unheard.domain.exceptions import (
    EntityNotFoundError,
    PermissionDeniedError,
    SubmissionRejectedError,
)
from unheard.infrastructure.dependencies import get_comment_service, get_identity_provider

router = APIRouter(prefix="/confessions/{confession_id}/comments", tags=["Comments"])


@router.get("", response_model=list[CommentResponse])
async def list_comments(
    confession_id: str,
    service: CommentService = Depends(get_comment_service),
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> list[CommentResponse]:
    comments = await service.list_comments(confession_id)
    device_id = identity.get_or_create_device_id()
    return [CommentResponse.from_entity(c, device_id) for c in comments]


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def add_comment(
    confession_id: str,
    data: CommentCreate,
    service: CommentService = Depends(get_comment_service),
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> CommentResponse:
    try:
        comment = await service.add_comment(confession_id, data)
    except SubmissionRejectedError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return CommentResponse.from_entity(comment, identity.get_or_create_device_id())


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    confession_id: str,
    comment_id: str,
    service: CommentService = Depends(get_comment_service),
) -> None:
    try:
        await service.delete_comment(comment_id, confession_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
