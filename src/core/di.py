from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from core.security import (
    Anonymous,
    Authenticated,
    Caller,
    get_access_token,
    get_optional_access_token,
)
from domains.consistency.service import ConsistencyService
from domains.group.repository import GroupRepository
from domains.group.service import GroupService
from domains.recipe.repository import RecipeRepository
from domains.recipe.service import RecipeService
from domains.user.exceptions import TokenExpiredException, InvalidCredentialsException
from domains.user.repository import UserRepository
from domains.user.service import UserService


# --- 유저 관련 DI ---
def get_user_repo(session: AsyncSession = Depends(get_db)) -> UserRepository:
    return UserRepository(session)


def get_user_service(user_repo: UserRepository = Depends(get_user_repo)) -> UserService:
    return UserService(user_repo)


async def get_current_caller(
    access_token: str = Depends(get_access_token),
    user_service: UserService = Depends(get_user_service),
) -> Authenticated:
    return await user_service.get_caller_by_token(access_token)


async def get_caller(
    access_token: str | None = Depends(get_optional_access_token),
    user_service: UserService = Depends(get_user_service),
) -> Caller:
    # 토큰이 없거나 잘못됐으면 익명으로 진행
    if access_token is None:
        return Anonymous()
    try:
        return await user_service.get_caller_by_token(access_token)
    except (TokenExpiredException, InvalidCredentialsException):
        return Anonymous()


# --- 그룹 / 레시피 관련 DI ---
def get_group_repo(session: AsyncSession = Depends(get_db)) -> GroupRepository:
    return GroupRepository(session)


def get_recipe_repo(session: AsyncSession = Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(session)


def get_group_service(group_repo: GroupRepository = Depends(get_group_repo)) -> GroupService:
    return GroupService(group_repo)


def get_recipe_service(
    recipe_repo: RecipeRepository = Depends(get_recipe_repo),
    group_repo: GroupRepository = Depends(get_group_repo),
) -> RecipeService:
    return RecipeService(recipe_repo=recipe_repo, group_repo=group_repo)


def get_consistency_service(
    group_repo: GroupRepository = Depends(get_group_repo),
    recipe_repo: RecipeRepository = Depends(get_recipe_repo),
    user_repo: UserRepository = Depends(get_user_repo),
) -> ConsistencyService:
    return ConsistencyService(group_repo=group_repo, recipe_repo=recipe_repo, user_repo=user_repo)
