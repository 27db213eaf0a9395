"""Adoption service linking users to the cats they adopt."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, contains_eager

from src.exceptions import ConflictError, NotFoundError
from src.models.adoption import Adoption
from src.models.cat import Cat

logger = logging.getLogger(__name__)


class AdoptionService:
    """Service for adoption-related operations, always scoped to one user."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int) -> list[Adoption]:
        """The user's adoptions with their cats, most recent first."""
        return (
            self.db.query(Adoption)
            .join(Cat, Adoption.cat_id == Cat.id)
            .options(contains_eager(Adoption.cat))
            .filter(Adoption.user_id == user_id)
            .order_by(Adoption.adopted_at.desc(), Adoption.id.desc())
            .all()
        )

    def is_adopted(self, user_id: int, cat_id: int) -> bool:
        """Whether the user already adopted the cat."""
        existing = (
            self.db.query(Adoption.id)
            .filter(Adoption.user_id == user_id, Adoption.cat_id == cat_id)
            .first()
        )
        return existing is not None

    def create(self, user_id: int, cat_id: int) -> Adoption:
        """Adopt a cat. NotFoundError for an unknown cat, ConflictError if already adopted."""
        cat = self.db.query(Cat).filter(Cat.id == cat_id).first()
        if not cat:
            raise NotFoundError("Cat not found")

        if self.is_adopted(user_id, cat_id):
            raise ConflictError("You have already adopted this cat")

        adoption = Adoption(user_id=user_id, cat_id=cat_id)
        self.db.add(adoption)
        try:
            self.db.commit()
        except IntegrityError as e:
            # uq_adoptions_user_cat caught a concurrent duplicate
            self.db.rollback()
            raise ConflictError("You have already adopted this cat") from e
        self.db.refresh(adoption)
        logger.info(f"User {user_id} adopted cat {cat_id}")
        return adoption

    def delete(self, user_id: int, cat_id: int) -> None:
        """Remove the user's adoption of a cat; NotFoundError if there is none."""
        deleted = (
            self.db.query(Adoption)
            .filter(Adoption.user_id == user_id, Adoption.cat_id == cat_id)
            .delete(synchronize_session=False)
        )
        if deleted == 0:
            self.db.rollback()
            raise NotFoundError("Adoption not found")
        self.db.commit()
        logger.info(f"User {user_id} removed adoption of cat {cat_id}")
