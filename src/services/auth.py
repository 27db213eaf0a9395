"""Authentication service for password handling, sessions and JWTs.

Two interchangeable strategies implement the ``Authenticator`` interface:

- ``SessionAuthenticator`` stores a random opaque id in the ``sessions`` table
  and hands it to the client as a cookie.
- ``TokenAuthenticator`` signs a self-contained JWT. Nothing is stored, so a
  token stays valid until it expires even after logout.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.config import Settings
from src.exceptions import ConflictError, UnauthorizedError
from src.models.session import UserSession
from src.models.user import User

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

INVALID_CREDENTIALS = "Invalid credentials"


@dataclass(frozen=True)
class UserIdentity:
    """The authenticated caller, as resolved from a credential."""

    id: int
    username: str
    email: str | None


class Authenticator(Protocol):
    """Issues, checks and revokes login credentials."""

    def issue(self, user: User) -> str: ...

    def authenticate(self, credential: str) -> UserIdentity: ...

    def revoke(self, credential: str) -> None: ...


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class SessionAuthenticator:
    """Server-stored sessions referenced by an opaque cookie value."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def issue(self, user: User) -> str:
        now = datetime.now(UTC)
        # Drop this user's expired sessions so rows do not pile up
        self.db.query(UserSession).filter(
            UserSession.user_id == user.id, UserSession.expires_at <= now
        ).delete(synchronize_session=False)

        session = UserSession(
            id=secrets.token_urlsafe(32),
            user_id=user.id,
            expires_at=now + timedelta(days=self.settings.session_expiration_days),
        )
        self.db.add(session)
        self.db.commit()
        return session.id

    def authenticate(self, credential: str) -> UserIdentity:
        row = (
            self.db.query(UserSession, User)
            .join(User, UserSession.user_id == User.id)
            .filter(UserSession.id == credential)
            .first()
        )
        if row is None:
            raise UnauthorizedError("Invalid or expired session")

        session, user = row
        if _as_utc(session.expires_at) <= datetime.now(UTC):
            self.db.delete(session)
            self.db.commit()
            raise UnauthorizedError("Invalid or expired session")

        return UserIdentity(id=user.id, username=user.username, email=user.email)

    def revoke(self, credential: str) -> None:
        self.db.query(UserSession).filter(UserSession.id == credential).delete(
            synchronize_session=False
        )
        self.db.commit()


class TokenAuthenticator:
    """Stateless signed JWTs."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def issue(self, user: User) -> str:
        now = datetime.now(UTC)
        to_encode = {
            "sub": str(user.id),
            "username": user.username,
            "email": user.email,
            "iat": now,
            "exp": now + timedelta(minutes=self.settings.jwt_expiration_minutes),
        }
        return jwt.encode(
            to_encode, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm
        )

    def authenticate(self, credential: str) -> UserIdentity:
        try:
            payload = jwt.decode(
                credential, self.settings.jwt_secret, algorithms=[self.settings.jwt_algorithm]
            )
        except JWTError as e:
            raise UnauthorizedError("Invalid or expired token") from e

        user_id = payload.get("sub")
        username = payload.get("username")
        if user_id is None or username is None:
            raise UnauthorizedError("Invalid or expired token")

        return UserIdentity(id=int(user_id), username=username, email=payload.get("email"))

    def revoke(self, credential: str) -> None:
        # Stateless tokens cannot be revoked server side; the client discards it
        logger.debug("Token logout requested; nothing to revoke")


def build_authenticator(db: Session, settings: Settings) -> Authenticator:
    """Return the authenticator for the configured strategy."""
    if settings.auth_strategy == "token":
        return TokenAuthenticator(settings)
    return SessionAuthenticator(db, settings)


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def user_exists(db: Session, username: str, email: str | None = None) -> bool:
    """Whether the username, or the email when given, is already registered."""
    filters = [User.username == username]
    if email:
        filters.append(User.email == email)
    return db.query(User.id).filter(or_(*filters)).first() is not None


def create_user(db: Session, username: str, password: str, email: str | None = None) -> User:
    """Create a new user, raising ConflictError if the username or email is taken."""
    if user_exists(db, username, email):
        raise ConflictError("User already exists")

    user = User(username=username, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("User already exists") from e
    db.refresh(user)
    logger.info(f"Registered user {user.id} ({user.username})")
    return user


def authenticate_user(
    db: Session, password: str, email: str | None = None, username: str | None = None
) -> User:
    """Authenticate a user by email (preferred) or username and password.

    Unknown users and wrong passwords raise the same UnauthorizedError.
    """
    user = get_user_by_email(db, email) if email else get_user_by_username(db, username or "")
    if user is None:
        # Keep response time independent of whether the account exists
        pwd_context.dummy_verify()
        logger.info("Login failed: unknown account")
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.info(f"Login failed: wrong password for user {user.id}")
        raise UnauthorizedError(INVALID_CREDENTIALS)
    return user


def get_user(db: Session, user_id: int) -> User:
    """Load the user behind an identity."""
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise UnauthorizedError("User not found")
    return user
