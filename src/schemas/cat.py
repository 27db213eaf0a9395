"""Cat schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.schemas.common import blank_to_none


class CatCreate(BaseModel):
    """Create a new cat."""

    name: str = Field(..., max_length=255)
    tag: str | None = Field(None, max_length=100)
    pfp: str | None = Field(None, max_length=2048)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        return value

    @field_validator("tag", "pfp")
    @classmethod
    def optional_blank_is_none(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class CatUpdate(BaseModel):
    """Partial update of a cat. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, max_length=255)
    tag: str | None = Field(None, max_length=100)
    pfp: str | None = Field(None, max_length=2048)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str | None) -> str:
        # Only runs when the client sent the field; name cannot be cleared
        if value is None or not value.strip():
            raise ValueError("Name cannot be empty")
        return value.strip()

    @field_validator("tag", "pfp")
    @classmethod
    def optional_blank_is_none(cls, value: str | None) -> str | None:
        return blank_to_none(value)


class CatResponse(BaseModel):
    """Cat response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    tag: str | None
    pfp: str | None


class Pagination(BaseModel):
    """Page metadata for paginated listings."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")


class CatPage(BaseModel):
    """One page of cats."""

    cats: list[CatResponse]
    pagination: Pagination


class CatCreatedResponse(BaseModel):
    """Result of creating a cat."""

    message: str
    id: int
