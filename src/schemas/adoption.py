"""Adoption schemas."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from src.schemas.cat import CatResponse


class AdoptionCreate(BaseModel):
    """Adopt a cat."""

    cat_id: int = Field(..., ge=1, validation_alias=AliasChoices("cat_id", "catId"))


class AdoptionResponse(BaseModel):
    """An adoption with the adopted cat embedded."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    cat_id: int
    adopted_at: datetime
    cat: CatResponse


class AdoptionList(BaseModel):
    """All adoptions of the current user."""

    adoptions: list[AdoptionResponse]


class AdoptionCreatedResponse(BaseModel):
    """Result of adopting a cat."""

    message: str
    id: int
    cat: CatResponse
