from sqlalchemy import Column, ForeignKey, Integer, String, Text, DateTime, Table
from sqlalchemy.orm import relationship
from sqlalchemy.types import Uuid
from sqlalchemy.sql import func

from core.database import Base, BigIntPK
from domains.group.models import Group  # noqa: F401 (relationship 대상 등록)

# Recipe <-> Group 다대다 연결 테이블
recipe_groups = Table(
    "recipe_groups",
    Base.metadata,
    Column("recipe_id", BigIntPK, ForeignKey("recipes.id"), primary_key=True),
    Column("group_id", BigIntPK, ForeignKey("groups.id"), primary_key=True),
)


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(BigIntPK, primary_key=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False, unique=True)
    description = Column(Text)
    image_url = Column(String(512), nullable=False)
    prep_time = Column(String(255))
    servings = Column(Integer)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="recipes")
    ingredients = relationship("Ingredient", order_by="Ingredient.position", viewonly=True)
    steps = relationship("Step", order_by="Step.position", viewonly=True)
    groups = relationship("Group", secondary=recipe_groups, order_by="Group.name", viewonly=True)


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(BigIntPK, primary_key=True, index=True)
    recipe_id = Column(BigIntPK, ForeignKey("recipes.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    quantity = Column(String(255), nullable=False, default="")
    position = Column(Integer, nullable=False)


class Step(Base):
    __tablename__ = "steps"

    id = Column(BigIntPK, primary_key=True, index=True)
    recipe_id = Column(BigIntPK, ForeignKey("recipes.id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    position = Column(Integer, nullable=False)
