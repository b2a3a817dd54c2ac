from sqlalchemy import select, delete, insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.exception.exceptions import DatabaseException
from domains.recipe.exception import DuplicateTitleException
from domains.recipe.models import Recipe, Ingredient, Step, recipe_groups


def _aggregate_options():
    return (
        selectinload(Recipe.ingredients),
        selectinload(Recipe.steps),
        selectinload(Recipe.groups),
        selectinload(Recipe.user),
    )


class RecipeRepository:
    """레시피 애그리거트(레시피 + 재료 + 단계 + 그룹 연결) 저장소.

    쓰기 메서드는 flush 까지만 한다. commit / rollback 은 서비스의 atomic 블록이 담당.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- 조회 ---
    async def get_recipe(self, recipe_id: int) -> Recipe | None:
        try:
            stmt = (
                select(Recipe)
                .options(*_aggregate_options())
                .where(Recipe.id == recipe_id)
                .execution_options(populate_existing=True)
            )
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"레시피 조회 실패: {str(e)}")

    async def get_recipe_row(self, recipe_id: int) -> Recipe | None:
        stmt = select(Recipe).where(Recipe.id == recipe_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_recipes(self, user_id=None, search: str | None = None) -> list[Recipe]:
        try:
            stmt = select(Recipe).options(*_aggregate_options())
            if user_id is not None:
                stmt = stmt.where(Recipe.user_id == user_id)
            if search:
                stmt = stmt.where(Recipe.title.icontains(search, autoescape=True))

            stmt = stmt.order_by(Recipe.title.asc()).execution_options(populate_existing=True)
            result = await self.session.execute(stmt)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"레시피 목록 조회 실패: {str(e)}")

    async def is_title_taken(self, title: str, exclude_id: int | None = None) -> bool:
        stmt = select(Recipe.id).where(Recipe.title == title)
        if exclude_id is not None:
            stmt = stmt.where(Recipe.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none() is not None

    async def get_linked_group_ids(self, recipe_id: int) -> set[int]:
        stmt = select(recipe_groups.c.group_id).where(recipe_groups.c.recipe_id == recipe_id)
        result = await self.session.execute(stmt)
        return set(result.scalars().all())

    async def get_recipe_ids_by_user(self, user_id) -> list[int]:
        stmt = select(Recipe.id).where(Recipe.user_id == user_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # --- 쓰기 ---
    async def add_recipe(self, recipe: Recipe) -> Recipe:
        return await self._flush_recipe(recipe)

    async def update_recipe(self, recipe: Recipe) -> Recipe:
        return await self._flush_recipe(recipe)

    async def _flush_recipe(self, recipe: Recipe) -> Recipe:
        try:
            self.session.add(recipe)
            await self.session.flush()
            return recipe
        except IntegrityError as e:
            # 사전 중복 검사와 저장 사이에 같은 제목이 먼저 저장된 경우
            if "title" in str(e.orig):
                raise DuplicateTitleException()
            raise DatabaseException(detail="레시피 저장 실패: 제약조건 위반")

    async def replace_ingredients(self, recipe_id: int, ingredients: list[dict]) -> None:
        # 전체 교체: 기존 행 삭제 후 배열 순서대로 position 0..n-1 재생성
        await self.session.execute(delete(Ingredient).where(Ingredient.recipe_id == recipe_id))
        self.session.add_all(
            [
                Ingredient(
                    recipe_id=recipe_id,
                    name=item["name"],
                    quantity=item.get("quantity") or "",
                    position=index,
                )
                for index, item in enumerate(ingredients)
            ]
        )
        await self.session.flush()

    async def replace_steps(self, recipe_id: int, steps: list[dict]) -> None:
        await self.session.execute(delete(Step).where(Step.recipe_id == recipe_id))
        self.session.add_all(
            [
                Step(recipe_id=recipe_id, description=item["description"], position=index)
                for index, item in enumerate(steps)
            ]
        )
        await self.session.flush()

    async def replace_groups(self, recipe_id: int, group_ids: list[int]) -> None:
        await self.session.execute(
            delete(recipe_groups).where(recipe_groups.c.recipe_id == recipe_id)
        )
        await self.link_groups(recipe_id, group_ids)

    async def link_groups(self, recipe_id: int, group_ids: list[int]) -> int:
        """아직 연결되지 않은 그룹만 추가한다. 새로 추가된 연결 수를 돌려준다."""
        existing = await self.get_linked_group_ids(recipe_id)
        new_ids = [group_id for group_id in dict.fromkeys(group_ids) if group_id not in existing]
        if not new_ids:
            return 0

        await self.session.execute(
            insert(recipe_groups),
            [{"recipe_id": recipe_id, "group_id": group_id} for group_id in new_ids],
        )
        return len(new_ids)

    async def unlink_group(self, recipe_id: int, group_id: int) -> int:
        result = await self.session.execute(
            delete(recipe_groups).where(
                recipe_groups.c.recipe_id == recipe_id,
                recipe_groups.c.group_id == group_id,
            )
        )
        return result.rowcount

    async def delete_recipes(self, recipe_ids: list[int]) -> int:
        """레시피 삭제 cascade: 모든 그룹과의 연결 행 -> 재료 -> 단계 -> 레시피."""
        if not recipe_ids:
            return 0

        await self.session.execute(
            delete(recipe_groups).where(recipe_groups.c.recipe_id.in_(recipe_ids))
        )
        await self.session.execute(
            delete(Ingredient)
            .where(Ingredient.recipe_id.in_(recipe_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(
            delete(Step)
            .where(Step.recipe_id.in_(recipe_ids))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(
            delete(Recipe)
            .where(Recipe.id.in_(recipe_ids))
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
