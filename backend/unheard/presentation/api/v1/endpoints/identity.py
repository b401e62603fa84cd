"""Anonymous identity endpoints — device id, session and remembered display profiles."""

from fastapi import APIRouter, Depends, HTTPException, status

from unheard.application.schemas import DisplayProfileResponse, DisplayProfileUpdate, IdentityResponse
from unheard.application.services import AnonymousIdentityProvider, ProfileService
from unheard.infrastructure.dependencies import get_identity_provider, get_profile_service

router = APIRouter(prefix="/identity", tags=["Identity"])


@router.get("", response_model=IdentityResponse)
async def get_identity(
    identity: AnonymousIdentityProvider = Depends(get_identity_provider),
) -> IdentityResponse:
    """Ensure a backend session exists and return this device's identifiers."""
    session = await identity.get_or_create_session()
    return IdentityResponse(device_id=identity.get_or_create_device_id(), session_id=session.id)


@router.get("/profiles/{form}", response_model=DisplayProfileResponse)
async def get_profile(
    form: str,
    profiles: ProfileService = Depends(get_profile_service),
) -> DisplayProfileResponse:
    try:
        profile = profiles.recall(form)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DisplayProfileResponse.model_validate(profile)


@router.put("/profiles/{form}", response_model=DisplayProfileResponse)
async def update_profile(
    form: str,
    data: DisplayProfileUpdate,
    profiles: ProfileService = Depends(get_profile_service),
) -> DisplayProfileResponse:
    try:
        profile = profiles.remember(form, data.username, data.avatar)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return DisplayProfileResponse.model_validate(profile)
