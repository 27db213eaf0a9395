"""Adoption API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_adoption_service, get_current_identity, parse_body
from src.schemas.adoption import (
    AdoptionCreate,
    AdoptionCreatedResponse,
    AdoptionList,
    AdoptionResponse,
)
from src.schemas.cat import CatResponse
from src.schemas.common import MessageResponse
from src.services.adoption_service import AdoptionService
from src.services.auth import UserIdentity

router = APIRouter(prefix="/adoptions", tags=["adoptions"])


@router.get("", response_model=AdoptionList)
async def list_adoptions(
    identity: Annotated[UserIdentity, Depends(get_current_identity)],
    service: Annotated[AdoptionService, Depends(get_adoption_service)],
):
    """List the current user's adopted cats, most recent first."""
    adoptions = service.list_for_user(identity.id)
    return AdoptionList(adoptions=[AdoptionResponse.model_validate(a) for a in adoptions])


@router.post("", response_model=AdoptionCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_adoption(
    identity: Annotated[UserIdentity, Depends(get_current_identity)],
    adoption_data: Annotated[AdoptionCreate, Depends(parse_body(AdoptionCreate))],
    service: Annotated[AdoptionService, Depends(get_adoption_service)],
):
    """Adopt a cat."""
    adoption = service.create(identity.id, adoption_data.cat_id)
    return AdoptionCreatedResponse(
        message="Cat adopted successfully",
        id=adoption.id,
        cat=CatResponse.model_validate(adoption.cat),
    )


@router.delete("/{cat_id}", response_model=MessageResponse)
async def delete_adoption(
    cat_id: int,
    identity: Annotated[UserIdentity, Depends(get_current_identity)],
    service: Annotated[AdoptionService, Depends(get_adoption_service)],
):
    """Give up the adoption of a cat."""
    service.delete(identity.id, cat_id)
    return MessageResponse(message="Adoption removed successfully")
