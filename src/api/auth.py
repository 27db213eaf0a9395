"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from src.api.dependencies import get_authenticator, get_credential, get_current_identity, parse_body
from src.config import Settings, get_settings
from src.database import get_db
from src.schemas.auth import (
    LoginResponse,
    MeResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.common import MessageResponse
from src.services.auth import Authenticator, UserIdentity, authenticate_user, create_user, get_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Older clients register and log in under /users
users_router = APIRouter(prefix="/users", tags=["auth"])


def set_session_cookie(response: Response, session_id: str, settings: Settings) -> None:
    """Store the session id in an http-only cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Remove the session cookie from the client."""
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@users_router.post("/signup", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: Annotated[UserRegister, Depends(parse_body(UserRegister))],
    db: Annotated[Session, Depends(get_db)],
):
    """Register a new user."""
    user = create_user(db, user_data.username, user_data.password, user_data.email)
    return RegisterResponse(message="User created successfully", id=user.id)


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
@users_router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    credentials: Annotated[UserLogin, Depends(parse_body(UserLogin))],
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Login with email or username and password."""
    user = authenticate_user(
        db, credentials.password, email=credentials.email, username=credentials.username
    )
    credential = authenticator.issue(user)
    logger.info(f"User {user.id} logged in")

    result = LoginResponse(message="Login successful", user=UserResponse.model_validate(user))
    if settings.auth_strategy == "token":
        result.token = credential
        result.token_type = "bearer"  # noqa: S105
    else:
        set_session_cookie(response, credential, settings)
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    credential: Annotated[str | None, Depends(get_credential)],
    authenticator: Annotated[Authenticator, Depends(get_authenticator)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Logout. Sessions are deleted server side; tokens are simply discarded by the client."""
    if credential:
        authenticator.revoke(credential)
        logger.info("Session logged out")
    clear_session_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get("/me", response_model=MeResponse)
async def get_me(
    identity: Annotated[UserIdentity, Depends(get_current_identity)],
    db: Annotated[Session, Depends(get_db)],
):
    """Get current user information."""
    return MeResponse(user=UserResponse.model_validate(get_user(db, identity.id)))
