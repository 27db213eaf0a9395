"""Cat model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from src.database import Base


class Cat(Base):
    """A cat record that users can adopt."""

    __tablename__ = "cats"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    tag = Column(String(100), nullable=True)
    pfp = Column(String(2048), nullable=True)  # profile picture URL

    # Relationships
    adoptions = relationship("Adoption", back_populates="cat", cascade="all, delete-orphan")
