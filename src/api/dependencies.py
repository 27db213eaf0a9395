"""FastAPI dependencies for request bodies, authentication and services."""

from collections.abc import Awaitable, Callable
from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.database import get_db
from src.exceptions import UnauthorizedError, ValidationError
from src.services.adoption_service import AdoptionService
from src.services.auth import Authenticator, UserIdentity, build_authenticator
from src.services.cat_service import CatService

SchemaT = TypeVar("SchemaT", bound=BaseModel)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

security = HTTPBearer(auto_error=False)


async def read_payload(request: Request) -> Any:
    """Read a JSON or form-encoded request body."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return dict(form)

    if not await request.body():
        return {}
    try:
        return await request.json()
    except ValueError as e:
        raise ValidationError("Invalid JSON body", details=str(e)) from e


def _describe(error: PydanticValidationError) -> str:
    first = error.errors()[0]
    message = first["msg"].removeprefix("Value error, ")
    field = ".".join(str(part) for part in first["loc"])
    return f"{field}: {message}" if field else message


def parse_body(model: type[SchemaT]) -> Callable[[Request], Awaitable[SchemaT]]:
    """Build a dependency that validates the request body against ``model``.

    JSON and form bodies go through the same schema, and failures surface as a
    400 ValidationError rather than FastAPI's default 422.
    """

    async def dependency(request: Request) -> SchemaT:
        payload = await read_payload(request)
        try:
            return model.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(_describe(e), details=str(e)) from e

    return dependency


def get_cat_service(
    db: Annotated[Session, Depends(get_db)],
) -> CatService:
    """Get cat service with dependencies."""
    return CatService(db)


def get_adoption_service(
    db: Annotated[Session, Depends(get_db)],
) -> AdoptionService:
    """Get adoption service with dependencies."""
    return AdoptionService(db)


def get_authenticator(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Authenticator:
    """Get the authenticator for the configured strategy."""
    return build_authenticator(db, settings)


def get_credential(
    request: Request,
    bearer: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> str | None:
    """Extract the caller's credential.

    Priority:
      1. Authorization: Bearer header (API clients).
      2. Session cookie (browsers).
    """
    if bearer is not None and bearer.credentials:
        return bearer.credentials
    return request.cookies.get(settings.session_cookie_name) or None


def get_current_identity(
    credential: Annotated[str | None, Depends(get_credential)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
) -> UserIdentity:
    """Get the authenticated caller, raising 401 if there is none."""
    if credential is None:
        raise UnauthorizedError("Not authenticated")
    return authenticator.authenticate(credential)


def require_cat_writer(
    credential: Annotated[str | None, Depends(get_credential)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserIdentity | None:
    """Authenticate cat writes unless they are configured to be public."""
    if not settings.require_auth_for_cat_writes:
        return None
    return get_current_identity(credential, authenticator)
