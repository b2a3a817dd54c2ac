import logging

from core.database import atomic
from core.security import Authenticated
from domains.group.exceptions import GroupForbiddenException, GroupNotFoundException
from domains.group.repository import GroupRepository
from domains.group.schemas import DeleteGroupResponse
from domains.recipe.repository import RecipeRepository
from domains.user.exceptions import UserNotFoundException
from domains.user.repository import UserRepository
from domains.user.schemas import DeleteAccountResponse

logger = logging.getLogger(__name__)


class ConsistencyService:
    """여러 엔티티에 걸친 삭제를 한 트랜잭션 안에서 명시적으로 수행한다.

    cascade 순서는 DB 의 ON DELETE 가 아니라 여기서 정해진다:
    유저 -> 그룹 / 레시피 -> 연결 행, 재료, 단계.
    """

    def __init__(
        self,
        group_repo: GroupRepository,
        recipe_repo: RecipeRepository,
        user_repo: UserRepository,
    ):
        self.group_repo = group_repo
        self.recipe_repo = recipe_repo
        self.user_repo = user_repo

    async def delete_group(self, group_id: int, caller: Authenticated) -> DeleteGroupResponse:
        """그룹 삭제는 파괴적이다: 그룹에 연결된 레시피까지 모두 삭제한다.

        다른 그룹에도 속해 있던 레시피 역시 삭제되고, 그 그룹과의 연결 행도 사라진다.
        """
        async with atomic(self.group_repo.session):
            group = await self.group_repo.get_group(group_id)

            if not group:
                raise GroupNotFoundException()

            if group.user_id != caller.user_id:
                logger.warning("그룹 삭제 권한 없음: group_id=%s user_id=%s", group_id, caller.user_id)
                raise GroupForbiddenException(detail="이 그룹을 삭제할 권한이 없습니다.")

            recipe_ids = await self.group_repo.get_linked_recipe_ids(group_id)

            if recipe_ids:
                await self.recipe_repo.delete_recipes(recipe_ids)

            await self.group_repo.delete_groups([group_id])

        logger.info("그룹 삭제: group_id=%s 삭제된 레시피=%d", group_id, len(recipe_ids))
        return DeleteGroupResponse(deleted_recipe_count=len(recipe_ids))

    async def delete_user(self, user_id) -> DeleteAccountResponse:
        async with atomic(self.user_repo.session):
            user = await self.user_repo.get_user_by_id(user_id)

            if not user:
                raise UserNotFoundException()

            recipe_ids = await self.recipe_repo.get_recipe_ids_by_user(user_id)
            deleted_recipes = await self.recipe_repo.delete_recipes(recipe_ids)

            group_ids = await self.group_repo.get_group_ids_by_user(user_id)
            deleted_groups = await self.group_repo.delete_groups(group_ids)

            await self.user_repo.delete_user(user_id)

        logger.info(
            "계정 삭제: user_id=%s 레시피=%d 그룹=%d", user_id, deleted_recipes, deleted_groups
        )
        return DeleteAccountResponse(
            deleted_recipe_count=deleted_recipes,
            deleted_group_count=deleted_groups,
        )
