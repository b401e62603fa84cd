"""Pydantic DTOs for the anonymous identity endpoints."""

from pydantic import BaseModel, Field


class IdentityResponse(BaseModel):
    device_id: str
    session_id: str


class DisplayProfileResponse(BaseModel):
    form: str
    username: str | None
    avatar: str | None

    model_config = {"from_attributes": True}


class DisplayProfileUpdate(BaseModel):
    username: str | None = Field(None, max_length=50)
    avatar: str | None = Field(None, max_length=500)
