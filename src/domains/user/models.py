import uuid6

from sqlalchemy import Column, String, DateTime, func
from sqlalchemy.types import Uuid
from sqlalchemy.orm import relationship

from core.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid6.uuid7)
    username = Column(String(255), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    groups = relationship("Group", back_populates="user")
    recipes = relationship("Recipe", back_populates="user")
