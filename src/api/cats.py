"""Cat API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_cat_service, parse_body, require_cat_writer
from src.schemas.cat import (
    CatCreate,
    CatCreatedResponse,
    CatPage,
    CatResponse,
    CatUpdate,
    Pagination,
)
from src.schemas.common import MessageResponse
from src.services.auth import UserIdentity
from src.services.cat_service import DEFAULT_LIMIT, DEFAULT_PAGE, CatService, total_pages

router = APIRouter(prefix="/cats", tags=["cats"])


@router.get("", response_model=list[CatResponse] | CatPage)
async def list_cats(
    service: Annotated[CatService, Depends(get_cat_service)],
    page: Annotated[int | None, Query()] = None,
    limit: Annotated[int | None, Query()] = None,
):
    """List cats. Passing ``page`` or ``limit`` switches to a paginated response."""
    if page is None and limit is None:
        return [CatResponse.model_validate(cat) for cat in service.list_all()]

    page = DEFAULT_PAGE if page is None else page
    limit = DEFAULT_LIMIT if limit is None else limit
    cats, total = service.list_page(page, limit)
    return CatPage(
        cats=[CatResponse.model_validate(cat) for cat in cats],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages(total, limit),
        ),
    )


@router.get("/{cat_id}", response_model=CatResponse)
async def get_cat(
    cat_id: int,
    service: Annotated[CatService, Depends(get_cat_service)],
):
    """Get a specific cat."""
    return service.get(cat_id)


@router.post("", response_model=CatCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_cat(
    _writer: Annotated[UserIdentity | None, Depends(require_cat_writer)],
    cat_data: Annotated[CatCreate, Depends(parse_body(CatCreate))],
    service: Annotated[CatService, Depends(get_cat_service)],
):
    """Add a cat."""
    cat = service.create(cat_data.name, cat_data.tag, cat_data.pfp)
    return CatCreatedResponse(message="Cat added successfully", id=cat.id)


@router.put("/{cat_id}", response_model=MessageResponse)
async def update_cat(
    cat_id: int,
    _writer: Annotated[UserIdentity | None, Depends(require_cat_writer)],
    cat_data: Annotated[CatUpdate, Depends(parse_body(CatUpdate))],
    service: Annotated[CatService, Depends(get_cat_service)],
):
    """Update only the fields present in the request."""
    updated = service.update(cat_id, cat_data.model_dump(exclude_unset=True))
    return MessageResponse(
        message=f"Record Num: {cat_id} updated successfully (Fields updated: {len(updated)})"
    )


@router.delete("/{cat_id}", response_model=MessageResponse)
async def delete_cat(
    cat_id: int,
    service: Annotated[CatService, Depends(get_cat_service)],
    _writer: Annotated[UserIdentity | None, Depends(require_cat_writer)],
):
    """Delete a cat."""
    service.delete(cat_id)
    return MessageResponse(message=f"Record Num: {cat_id} deleted successfully")
