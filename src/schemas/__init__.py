"""Pydantic schemas for API requests and responses."""

from src.schemas.adoption import (
    AdoptionCreate,
    AdoptionCreatedResponse,
    AdoptionList,
    AdoptionResponse,
)
from src.schemas.auth import (
    LoginResponse,
    MeResponse,
    RegisterResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from src.schemas.cat import (
    CatCreate,
    CatCreatedResponse,
    CatPage,
    CatResponse,
    CatUpdate,
    Pagination,
)
from src.schemas.common import ErrorResponse, HealthResponse, MessageResponse

__all__ = [
    "AdoptionCreate",
    "AdoptionCreatedResponse",
    "AdoptionList",
    "AdoptionResponse",
    "CatCreate",
    "CatCreatedResponse",
    "CatPage",
    "CatResponse",
    "CatUpdate",
    "ErrorResponse",
    "HealthResponse",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "Pagination",
    "RegisterResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
]
