import logging

from core.config import settings
from core.database import atomic
from core.security import Authenticated, Caller
from domains.group.exceptions import GroupNotFoundException
from domains.group.repository import GroupRepository
from domains.recipe.exception import (
    DuplicateTitleException,
    EmptyGroupIdsException,
    EmptyIngredientsException,
    EmptyStepsException,
    FieldTooLongException,
    InvalidIngredientException,
    InvalidStepException,
    MissingTitleException,
    RecipeForbiddenException,
    RecipeNotFoundException,
)
from domains.recipe.models import Recipe
from domains.recipe.repository import RecipeRepository
from domains.recipe.schemas import (
    AttachGroupsRequest,
    AttachGroupsResponse,
    CreateRecipeRequest,
    IngredientRequest,
    RecipeResponse,
    StepRequest,
    UpdateRecipeRequest,
)

logger = logging.getLogger(__name__)

SCALAR_FIELDS = ("description", "image_url", "prep_time", "servings")
MAX_TEXT_LENGTH = 255
MAX_IMAGE_URL_LENGTH = 512


def _check_length(value: str | None, field: str, limit: int = MAX_TEXT_LENGTH) -> None:
    if value is not None and len(value) > limit:
        raise FieldTooLongException(field=field, limit=limit)


def _check_title(title: str | None) -> None:
    if not title or not title.strip():
        raise MissingTitleException()
    _check_length(title, "title")


def _check_ingredients(ingredients: list[IngredientRequest] | None) -> list[dict]:
    if not ingredients:
        raise EmptyIngredientsException()
    if any(not item.name.strip() for item in ingredients):
        raise InvalidIngredientException()
    for item in ingredients:
        _check_length(item.name, "ingredients")
        _check_length(item.quantity, "ingredients")
    return [item.model_dump() for item in ingredients]


def _check_steps(steps: list[StepRequest] | None) -> list[dict]:
    if not steps:
        raise EmptyStepsException()
    if any(not item.description.strip() for item in steps):
        raise InvalidStepException()
    return [item.model_dump() for item in steps]


def _check_scalars(request: CreateRecipeRequest | UpdateRecipeRequest) -> None:
    _check_length(request.prep_time, "prepTime")
    _check_length(request.image_url, "imageUrl", MAX_IMAGE_URL_LENGTH)


class RecipeService:
    def __init__(self, recipe_repo: RecipeRepository, group_repo: GroupRepository):
        self.recipe_repo = recipe_repo
        self.group_repo = group_repo

    async def _load(self, recipe_id: int) -> RecipeResponse:
        recipe = await self.recipe_repo.get_recipe(recipe_id)
        if not recipe:
            raise RecipeNotFoundException()
        return RecipeResponse.model_validate(recipe)

    async def _get_owned_recipe(self, recipe_id: int, caller: Authenticated, action: str) -> Recipe:
        recipe = await self.recipe_repo.get_recipe_row(recipe_id)

        if not recipe:
            raise RecipeNotFoundException()

        if recipe.user_id != caller.user_id:
            logger.warning("레시피 %s 권한 없음: recipe_id=%s user_id=%s", action, recipe_id, caller.user_id)
            raise RecipeForbiddenException(detail=f"이 레시피를 {action}할 권한이 없습니다.")

        return recipe

    async def _owned_group_ids(self, group_ids: list[int], caller: Authenticated) -> list[int]:
        # 존재하지 않거나 남의 그룹인 id 는 조용히 무시
        groups = await self.group_repo.get_owned_groups(group_ids, caller.user_id)
        return [group.id for group in groups]

    async def create_recipe(self, request: CreateRecipeRequest, caller: Authenticated) -> RecipeResponse:
        _check_title(request.title)
        ingredients = _check_ingredients(request.ingredients)
        steps = _check_steps(request.steps)
        _check_scalars(request)

        async with atomic(self.recipe_repo.session):
            if await self.recipe_repo.is_title_taken(request.title):
                raise DuplicateTitleException()

            recipe = await self.recipe_repo.add_recipe(
                Recipe(
                    user_id=caller.user_id,
                    title=request.title,
                    description=request.description,
                    image_url=request.image_url or settings.DEFAULT_IMAGE_URL,
                    prep_time=request.prep_time,
                    servings=request.servings,
                )
            )
            await self.recipe_repo.replace_ingredients(recipe.id, ingredients)
            await self.recipe_repo.replace_steps(recipe.id, steps)

            if request.group_ids:
                group_ids = await self._owned_group_ids(request.group_ids, caller)
                await self.recipe_repo.link_groups(recipe.id, group_ids)

        logger.info("레시피 생성: recipe_id=%s user_id=%s", recipe.id, caller.user_id)
        return await self._load(recipe.id)

    async def get_recipe(self, recipe_id: int) -> RecipeResponse:
        return await self._load(recipe_id)

    async def get_recipes(self, caller: Caller, mine: bool = False, search: str | None = None) -> list[RecipeResponse]:
        # mine 필터는 로그인한 호출자에게만 적용된다
        user_id = caller.user_id if mine and isinstance(caller, Authenticated) else None
        recipes = await self.recipe_repo.get_recipes(user_id=user_id, search=search)

        return [RecipeResponse.model_validate(recipe) for recipe in recipes]

    async def update_recipe(
        self, recipe_id: int, request: UpdateRecipeRequest, caller: Authenticated
    ) -> RecipeResponse:
        fields = request.model_fields_set

        async with atomic(self.recipe_repo.session):
            recipe = await self._get_owned_recipe(recipe_id, caller, "수정")

            # 변경 전에 모든 검증을 끝낸다
            if request.title is not None:
                _check_title(request.title)
            ingredients = _check_ingredients(request.ingredients) if request.ingredients is not None else None
            steps = _check_steps(request.steps) if request.steps is not None else None
            _check_scalars(request)

            if request.title is not None and request.title != recipe.title:
                if await self.recipe_repo.is_title_taken(request.title, exclude_id=recipe.id):
                    raise DuplicateTitleException(detail="이미 다른 레시피가 사용 중인 제목입니다.")
                recipe.title = request.title

            for field in SCALAR_FIELDS:
                if field in fields:
                    setattr(recipe, field, getattr(request, field))
            if "image_url" in fields and not request.image_url:
                recipe.image_url = settings.DEFAULT_IMAGE_URL

            await self.recipe_repo.update_recipe(recipe)

            if ingredients is not None:
                await self.recipe_repo.replace_ingredients(recipe.id, ingredients)
            if steps is not None:
                await self.recipe_repo.replace_steps(recipe.id, steps)
            if request.group_ids is not None:
                group_ids = await self._owned_group_ids(request.group_ids, caller)
                await self.recipe_repo.replace_groups(recipe.id, group_ids)

        return await self._load(recipe_id)

    async def delete_recipe(self, recipe_id: int, caller: Authenticated) -> None:
        async with atomic(self.recipe_repo.session):
            await self._get_owned_recipe(recipe_id, caller, "삭제")
            await self.recipe_repo.delete_recipes([recipe_id])

        logger.info("레시피 삭제: recipe_id=%s user_id=%s", recipe_id, caller.user_id)

    async def attach_to_groups(
        self, recipe_id: int, request: AttachGroupsRequest, caller: Authenticated
    ) -> AttachGroupsResponse:
        async with atomic(self.recipe_repo.session):
            await self._get_owned_recipe(recipe_id, caller, "수정")

            if not request.group_ids:
                raise EmptyGroupIdsException()

            group_ids = await self._owned_group_ids(request.group_ids, caller)
            # 이미 연결된 그룹은 건너뛴다
            await self.recipe_repo.link_groups(recipe_id, group_ids)

        return AttachGroupsResponse(
            message=f"레시피가 {len(group_ids)}개 그룹에 추가되었습니다.",
            attached_count=len(group_ids),
        )

    async def detach_from_group(self, recipe_id: int, group_id: int, caller: Authenticated) -> None:
        async with atomic(self.recipe_repo.session):
            await self._get_owned_recipe(recipe_id, caller, "수정")

            group = await self.group_repo.get_group(group_id)
            if not group:
                raise GroupNotFoundException()

            # 연결돼 있지 않아도 에러 없이 통과
            await self.recipe_repo.unlink_group(recipe_id, group_id)
