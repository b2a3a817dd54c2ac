from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


class GroupRequest(CamelModel):
    name: str | None = None


class GroupResponse(CamelModel):
    id: int
    name: str
    user_id: UUID
    created_at: datetime | None = None


class GroupListResponse(GroupResponse):
    recipe_count: int = 0


class DeleteGroupResponse(CamelModel):
    message: str = Field(default="그룹과 연결된 레시피가 삭제되었습니다.")
    deleted_recipe_count: int
