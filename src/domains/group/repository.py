from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exception.exceptions import DatabaseException
from domains.group.models import Group
from domains.recipe.models import recipe_groups


class GroupRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_group(self, group: Group) -> Group:
        try:
            self.session.add(group)
            await self.session.flush()
            await self.session.refresh(group)
            return group
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"그룹 저장 실패: {str(e)}")

    async def update_group(self, group: Group) -> Group:
        try:
            self.session.add(group)
            await self.session.flush()
            await self.session.refresh(group)
            return group
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"그룹 수정 실패: {str(e)}")

    async def get_group(self, group_id: int) -> Group | None:
        try:
            stmt = select(Group).where(Group.id == group_id)
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"그룹 조회 실패: {str(e)}")

    async def get_linked_recipe_ids(self, group_id: int) -> list[int]:
        stmt = select(recipe_groups.c.recipe_id).where(recipe_groups.c.group_id == group_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_groups_with_recipe_count(self, user_id) -> list[tuple[Group, int]]:
        try:
            stmt = (
                select(Group, func.count(recipe_groups.c.recipe_id))
                .outerjoin(recipe_groups, recipe_groups.c.group_id == Group.id)
                .where(Group.user_id == user_id)
                .group_by(Group.id)
                .order_by(Group.name.asc())
            )
            result = await self.session.execute(stmt)
            return [(group, count) for group, count in result.all()]
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"그룹 목록 조회 실패: {str(e)}")

    async def get_owned_groups(self, group_ids: list[int], user_id) -> list[Group]:
        """요청한 id 중 실제로 존재하고 user_id 소유인 그룹만 돌려준다."""
        if not group_ids:
            return []

        stmt = select(Group).where(Group.id.in_(group_ids), Group.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_group_ids_by_user(self, user_id) -> list[int]:
        stmt = select(Group.id).where(Group.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def delete_groups(self, group_ids: list[int]) -> int:
        # 연결 행 -> 그룹 순서. commit 은 서비스 트랜잭션에서
        if not group_ids:
            return 0

        await self.session.execute(
            delete(recipe_groups).where(recipe_groups.c.group_id.in_(group_ids))
        )
        result = await self.session.execute(
            delete(Group).where(Group.id.in_(group_ids)).execution_options(synchronize_session=False)
        )
        return result.rowcount
