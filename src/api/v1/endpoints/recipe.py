from fastapi import APIRouter, Depends

from core.di import get_recipe_service, get_current_caller, get_caller
from core.schemas import MessageResponse
from core.security import Authenticated, Caller
from domains.group.exceptions import GroupNotFoundException
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
from domains.recipe.schemas import (
    AttachGroupsRequest,
    AttachGroupsResponse,
    CreateRecipeRequest,
    RecipeResponse,
    UpdateRecipeRequest,
)
from domains.recipe.service import RecipeService
from util.docs import create_error_response

router = APIRouter()


@router.get(
    "",
    status_code=200,
    summary="레시피 목록 조회 API",
    response_model=list[RecipeResponse],
)
async def get_recipes(
    mine: bool = False,
    search: str | None = None,
    caller: Caller = Depends(get_caller),
    service: RecipeService = Depends(get_recipe_service),
):
    """
    로그인 없이 조회 가능. `mine=true` 는 토큰이 있을 때만 내 레시피로 좁힌다.
    """
    return await service.get_recipes(caller, mine=mine, search=search)


@router.get(
    "/{recipe_id}",
    status_code=200,
    summary="레시피 상세 조회 API",
    response_model=RecipeResponse,
    responses=create_error_response(RecipeNotFoundException),
)
async def get_recipe(recipe_id: int, service: RecipeService = Depends(get_recipe_service)):
    return await service.get_recipe(recipe_id)


@router.post(
    "",
    status_code=201,
    summary="레시피 생성 API",
    response_model=RecipeResponse,
    responses=create_error_response(
        MissingTitleException,
        EmptyIngredientsException,
        EmptyStepsException,
        FieldTooLongException,
        InvalidIngredientException,
        InvalidStepException,
        DuplicateTitleException,
    ),
)
async def create_recipe(
    request: CreateRecipeRequest,
    caller: Authenticated = Depends(get_current_caller),
    service: RecipeService = Depends(get_recipe_service),
):
    return await service.create_recipe(request, caller)


@router.put(
    "/{recipe_id}",
    status_code=200,
    summary="레시피 수정 API",
    response_model=RecipeResponse,
    responses=create_error_response(
        RecipeNotFoundException,
        RecipeForbiddenException,
        MissingTitleException,
        EmptyIngredientsException,
        EmptyStepsException,
        FieldTooLongException,
        DuplicateTitleException,
    ),
)
async def update_recipe(
    recipe_id: int,
    request: UpdateRecipeRequest,
    caller: Authenticated = Depends(get_current_caller),
    service: RecipeService = Depends(get_recipe_service),
):
    """
    ingredients / steps 를 보내면 전체 교체, groupIds 를 보내면 (빈 배열 포함) 그룹 연결 전체 교체.
    """
    return await service.update_recipe(recipe_id, request, caller)


@router.delete(
    "/{recipe_id}",
    status_code=200,
    summary="레시피 삭제 API",
    response_model=MessageResponse,
    responses=create_error_response(RecipeNotFoundException, RecipeForbiddenException),
)
async def delete_recipe(
    recipe_id: int,
    caller: Authenticated = Depends(get_current_caller),
    service: RecipeService = Depends(get_recipe_service),
):
    await service.delete_recipe(recipe_id, caller)
    return MessageResponse(message="레시피가 삭제되었습니다.")


@router.post(
    "/{recipe_id}/groups",
    status_code=200,
    summary="레시피를 그룹에 추가 API",
    response_model=AttachGroupsResponse,
    responses=create_error_response(
        RecipeNotFoundException, RecipeForbiddenException, EmptyGroupIdsException
    ),
)
async def attach_to_groups(
    recipe_id: int,
    request: AttachGroupsRequest,
    caller: Authenticated = Depends(get_current_caller),
    service: RecipeService = Depends(get_recipe_service),
):
    return await service.attach_to_groups(recipe_id, request, caller)


@router.delete(
    "/{recipe_id}/groups/{group_id}",
    status_code=200,
    summary="레시피를 그룹에서 제거 API",
    response_model=MessageResponse,
    responses=create_error_response(
        RecipeNotFoundException, RecipeForbiddenException, GroupNotFoundException
    ),
)
async def detach_from_group(
    recipe_id: int,
    group_id: int,
    caller: Authenticated = Depends(get_current_caller),
    service: RecipeService = Depends(get_recipe_service),
):
    await service.detach_from_group(recipe_id, group_id, caller)
    return MessageResponse(message="레시피가 그룹에서 제거되었습니다.")
