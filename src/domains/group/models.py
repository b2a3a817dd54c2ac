from sqlalchemy import Column, ForeignKey, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.types import Uuid
from sqlalchemy.sql import func

from core.database import Base, BigIntPK
from domains.user.models import User  # noqa: F401 (relationship 대상 등록)


class Group(Base):
    __tablename__ = "groups"

    id = Column(BigIntPK, primary_key=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="groups")
    # 연결 행(recipe_groups)은 레포지토리에서 직접 관리한다
    recipes = relationship("Recipe", secondary="recipe_groups", viewonly=True)
