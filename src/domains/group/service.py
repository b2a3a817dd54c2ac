import logging

from core.database import atomic
from core.security import Authenticated
from domains.group.exceptions import (
    GroupForbiddenException,
    GroupNotFoundException,
    InvalidGroupNameException,
)
from domains.group.models import Group
from domains.group.repository import GroupRepository
from domains.group.schemas import GroupRequest, GroupResponse, GroupListResponse

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 255


def _clean_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise InvalidGroupNameException()
    if len(cleaned) > MAX_NAME_LENGTH:
        raise InvalidGroupNameException(detail=f"그룹 이름은 {MAX_NAME_LENGTH}자 이하여야 합니다.")
    return cleaned


class GroupService:
    def __init__(self, group_repo: GroupRepository):
        self.group_repo = group_repo

    async def create_group(self, request: GroupRequest, caller: Authenticated) -> GroupResponse:
        group = Group(name=_clean_name(request.name), user_id=caller.user_id)
        async with atomic(self.group_repo.session):
            saved_group = await self.group_repo.add_group(group)

        return GroupResponse.model_validate(saved_group)

    async def get_groups(self, caller: Authenticated) -> list[GroupListResponse]:
        rows = await self.group_repo.get_groups_with_recipe_count(caller.user_id)

        return [
            GroupListResponse(
                id=group.id,
                name=group.name,
                user_id=group.user_id,
                created_at=group.created_at,
                recipe_count=count,
            )
            for group, count in rows
        ]

    async def rename_group(self, group_id: int, request: GroupRequest, caller: Authenticated) -> GroupResponse:
        async with atomic(self.group_repo.session):
            group = await self.group_repo.get_group(group_id)

            if not group:
                raise GroupNotFoundException()

            if group.user_id != caller.user_id:
                logger.warning("그룹 수정 권한 없음: group_id=%s user_id=%s", group_id, caller.user_id)
                raise GroupForbiddenException(detail="이 그룹을 수정할 권한이 없습니다.")

            group.name = _clean_name(request.name)
            saved_group = await self.group_repo.update_group(group)

        return GroupResponse.model_validate(saved_group)
