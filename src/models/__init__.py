"""SQLAlchemy models."""

from src.models.adoption import Adoption
from src.models.cat import Cat
from src.models.session import UserSession
from src.models.user import User

__all__ = [
    "Adoption",
    "Cat",
    "User",
    "UserSession",
]
