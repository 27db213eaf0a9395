"""Adoption model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func
from sqlalchemy.orm import relationship

from src.database import Base


class Adoption(Base):
    """Links a user to a cat they have adopted."""

    __tablename__ = "adoptions"
    __table_args__ = (UniqueConstraint("user_id", "cat_id", name="uq_adoptions_user_cat"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    cat_id = Column(Integer, ForeignKey("cats.id", ondelete="CASCADE"), nullable=False, index=True)
    adopted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="adoptions")
    cat = relationship("Cat", back_populates="adoptions")
