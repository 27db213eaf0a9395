"""Cat service for listing, creating, updating and deleting cats."""

import logging
import math
from typing import Any

from sqlalchemy.orm import Session

from src.exceptions import NotFoundError, ValidationError
from src.models.cat import Cat

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Request field -> column. Anything not listed here can never reach the UPDATE statement.
UPDATABLE_COLUMNS = {
    "name": Cat.name,
    "tag": Cat.tag,
    "pfp": Cat.pfp,
}


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` rows ``limit`` at a time."""
    return math.ceil(total / limit)


class CatService:
    """Service for cat-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> list[Cat]:
        """All cats in insertion order."""
        return self.db.query(Cat).order_by(Cat.id).all()

    def list_page(
        self, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
    ) -> tuple[list[Cat], int]:
        """
        One page of cats in insertion order.

        Returns:
            (cats on the page, total number of cats)
        """
        if page < 1:
            raise ValidationError("Page must be at least 1")
        if not 1 <= limit <= MAX_LIMIT:
            raise ValidationError(f"Limit must be between 1 and {MAX_LIMIT}")

        total = self.db.query(Cat).count()
        offset = (page - 1) * limit
        if offset >= total:
            # Past the last page; also keeps huge offsets away from the driver
            return [], total

        cats = self.db.query(Cat).order_by(Cat.id).offset(offset).limit(limit).all()
        return cats, total

    def get(self, cat_id: int) -> Cat:
        """Get a cat or raise NotFoundError."""
        cat = self.db.query(Cat).filter(Cat.id == cat_id).first()
        if not cat:
            raise NotFoundError("Cat not found")
        return cat

    def create(self, name: str, tag: str | None = None, pfp: str | None = None) -> Cat:
        """Insert a cat and return it with its generated id."""
        if not name or not name.strip():
            raise ValidationError("Name is required")

        cat = Cat(name=name.strip(), tag=tag, pfp=pfp)
        self.db.add(cat)
        self.db.commit()
        self.db.refresh(cat)
        logger.info(f"Created cat {cat.id} ({cat.name})")
        return cat

    def update(self, cat_id: int, fields: dict[str, Any]) -> list[str]:
        """
        Apply a partial update restricted to UPDATABLE_COLUMNS.

        Returns the names of the fields that were written.
        """
        values = {key: value for key, value in fields.items() if key in UPDATABLE_COLUMNS}
        if not values:
            raise ValidationError("No valid fields provided for update")
        if "name" in values and not (values["name"] or "").strip():
            raise ValidationError("Name cannot be empty")

        matched = (
            self.db.query(Cat)
            .filter(Cat.id == cat_id)
            .update(
                {UPDATABLE_COLUMNS[key]: value for key, value in values.items()},
                synchronize_session=False,
            )
        )
        if matched == 0:
            self.db.rollback()
            raise NotFoundError(f"Cat with ID {cat_id} not found")
        self.db.commit()

        updated = sorted(values)
        logger.info(f"Updated cat {cat_id}: {', '.join(updated)}")
        return updated

    def delete(self, cat_id: int) -> None:
        """Delete a cat and its adoptions; NotFoundError if it does not exist."""
        cat = self.get(cat_id)
        self.db.delete(cat)
        self.db.commit()
        logger.info(f"Deleted cat {cat_id}")
