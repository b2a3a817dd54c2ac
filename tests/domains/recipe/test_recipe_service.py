import uuid
from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock

from core.config import settings
from core.exception.exceptions import DatabaseException
from core.security import Anonymous, Authenticated
from domains.group.exceptions import GroupNotFoundException
from domains.group.models import Group
from domains.recipe.exception import (
    DuplicateTitleException,
    EmptyGroupIdsException,
    EmptyIngredientsException,
    EmptyStepsException,
    FieldTooLongException,
    InvalidIngredientException,
    MissingTitleException,
    RecipeForbiddenException,
    RecipeNotFoundException,
)
from domains.recipe.models import Recipe
from domains.recipe.schemas import (
    AttachGroupsRequest,
    CreateRecipeRequest,
    UpdateRecipeRequest,
)
from domains.recipe.service import RecipeService

OWNER_ID = uuid.uuid4()


def make_aggregate(recipe_id=1, title="Tacos"):
    return SimpleNamespace(
        id=recipe_id,
        title=title,
        description=None,
        image_url=settings.DEFAULT_IMAGE_URL,
        prep_time=None,
        servings=None,
        user_id=OWNER_ID,
        created_at=None,
        ingredients=[SimpleNamespace(id=1, name="Tortilla", quantity="", position=0)],
        steps=[SimpleNamespace(id=1, description="Fry", position=0)],
        groups=[],
        user=SimpleNamespace(id=OWNER_ID, username="owner"),
    )


@pytest.fixture
def recipe_repo():
    return AsyncMock()


@pytest.fixture
def group_repo():
    return AsyncMock()


@pytest.fixture
def caller():
    return Authenticated(user_id=OWNER_ID, username="owner", email="owner@test.com")


@pytest.fixture
def stranger():
    return Authenticated(user_id=uuid.uuid4(), username="stranger", email="stranger@test.com")


@pytest.fixture
def recipe_service(recipe_repo, group_repo):
    return RecipeService(recipe_repo=recipe_repo, group_repo=group_repo)


def create_request(**overrides) -> CreateRecipeRequest:
    payload = {
        "title": "Tacos",
        "ingredients": [{"name": "Tortilla"}],
        "steps": [{"description": "Fry"}],
    }
    payload.update(overrides)
    return CreateRecipeRequest(**payload)


# --- create ---
@pytest.mark.asyncio
async def test_create_recipe_success(recipe_service, recipe_repo, group_repo, caller):
    recipe_repo.is_title_taken.return_value = False
    recipe_repo.add_recipe.side_effect = lambda r: (setattr(r, "id", 1), r)[1]
    group_repo.get_owned_groups.return_value = [Group(id=7, name="Mine", user_id=OWNER_ID)]
    recipe_repo.get_recipe.return_value = make_aggregate()

    response = await recipe_service.create_recipe(create_request(group_ids=[7, 8]), caller)

    assert response.title == "Tacos"
    saved = recipe_repo.add_recipe.call_args[0][0]
    assert saved.image_url == settings.DEFAULT_IMAGE_URL
    assert saved.user_id == OWNER_ID
    recipe_repo.replace_ingredients.assert_awaited_once_with(1, [{"name": "Tortilla", "quantity": ""}])
    recipe_repo.replace_steps.assert_awaited_once_with(1, [{"description": "Fry"}])
    # 소유한 그룹만 연결
    recipe_repo.link_groups.assert_awaited_once_with(1, [7])
    recipe_repo.session.commit.assert_awaited_once()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, expected",
    [
        # 검증 순서: 제목 -> 재료 -> 단계
        ({"title": None, "ingredients": [], "steps": []}, MissingTitleException),
        ({"title": "  ", "ingredients": []}, MissingTitleException),
        ({"ingredients": [], "steps": []}, EmptyIngredientsException),
        ({"ingredients": None}, EmptyIngredientsException),
        ({"steps": []}, EmptyStepsException),
        ({"ingredients": [{"name": " "}]}, InvalidIngredientException),
        ({"title": "T" * 256}, FieldTooLongException),
        ({"ingredients": [{"name": "Salt", "quantity": "q" * 256}]}, FieldTooLongException),
        ({"prep_time": "m" * 256}, FieldTooLongException),
    ],
)
async def test_create_recipe_validation_order(recipe_service, recipe_repo, caller, overrides, expected):
    with pytest.raises(expected):
        await recipe_service.create_recipe(create_request(**overrides), caller)

    recipe_repo.add_recipe.assert_not_called()
    recipe_repo.is_title_taken.assert_not_called()


@pytest.mark.asyncio
async def test_create_recipe_duplicate_title_rolls_back(recipe_service, recipe_repo, caller):
    recipe_repo.is_title_taken.return_value = True

    with pytest.raises(DuplicateTitleException) as excinfo:
        await recipe_service.create_recipe(create_request(), caller)

    assert excinfo.value.field == "title"
    recipe_repo.add_recipe.assert_not_called()
    recipe_repo.session.rollback.assert_awaited_once()
    recipe_repo.session.commit.assert_not_called()


@pytest.mark.asyncio
async def test_create_recipe_without_groups_skips_lookup(recipe_service, recipe_repo, group_repo, caller):
    recipe_repo.is_title_taken.return_value = False
    recipe_repo.add_recipe.side_effect = lambda r: (setattr(r, "id", 1), r)[1]
    recipe_repo.get_recipe.return_value = make_aggregate()

    await recipe_service.create_recipe(create_request(), caller)

    group_repo.get_owned_groups.assert_not_called()
    recipe_repo.link_groups.assert_not_called()


# --- read ---
@pytest.mark.asyncio
async def test_get_recipe_not_found(recipe_service, recipe_repo):
    recipe_repo.get_recipe.return_value = None

    with pytest.raises(RecipeNotFoundException):
        await recipe_service.get_recipe(1)


@pytest.mark.asyncio
async def test_get_recipes_mine_only_for_authenticated(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipes.return_value = [make_aggregate()]

    await recipe_service.get_recipes(caller, mine=True, search="ta")
    recipe_repo.get_recipes.assert_awaited_with(user_id=OWNER_ID, search="ta")

    await recipe_service.get_recipes(Anonymous(), mine=True)
    recipe_repo.get_recipes.assert_awaited_with(user_id=None, search=None)

    await recipe_service.get_recipes(caller, mine=False)
    recipe_repo.get_recipes.assert_awaited_with(user_id=None, search=None)


# --- update ---
@pytest.mark.asyncio
async def test_update_recipe_forbidden_before_any_write(recipe_service, recipe_repo, stranger):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)

    with pytest.raises(RecipeForbiddenException):
        await recipe_service.update_recipe(1, UpdateRecipeRequest(title="Mine now"), stranger)

    recipe_repo.update_recipe.assert_not_called()
    recipe_repo.replace_ingredients.assert_not_called()


@pytest.mark.asyncio
async def test_update_recipe_not_found(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = None

    with pytest.raises(RecipeNotFoundException):
        await recipe_service.update_recipe(1, UpdateRecipeRequest(), caller)


@pytest.mark.asyncio
async def test_update_recipe_empty_steps_rejected(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)

    with pytest.raises(EmptyStepsException):
        await recipe_service.update_recipe(
            1, UpdateRecipeRequest(ingredients=[{"name": "Corn"}], steps=[]), caller
        )

    recipe_repo.replace_ingredients.assert_not_called()
    recipe_repo.session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_update_recipe_same_title_skips_uniqueness(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)
    recipe_repo.get_recipe.return_value = make_aggregate()

    await recipe_service.update_recipe(1, UpdateRecipeRequest(title="Tacos"), caller)

    recipe_repo.is_title_taken.assert_not_called()


@pytest.mark.asyncio
async def test_update_recipe_duplicate_title(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)
    recipe_repo.is_title_taken.return_value = True

    with pytest.raises(DuplicateTitleException):
        await recipe_service.update_recipe(1, UpdateRecipeRequest(title="Burritos"), caller)

    recipe_repo.is_title_taken.assert_awaited_once_with("Burritos", exclude_id=1)


@pytest.mark.asyncio
async def test_update_recipe_partial_fields(recipe_service, recipe_repo, group_repo, caller):
    recipe = Recipe(id=1, title="Tacos", user_id=OWNER_ID, description="old", servings=2, image_url="custom")
    recipe_repo.get_recipe_row.return_value = recipe
    recipe_repo.get_recipe.return_value = make_aggregate()
    group_repo.get_owned_groups.return_value = []

    await recipe_service.update_recipe(
        1, UpdateRecipeRequest(servings=4, image_url=None, group_ids=[]), caller
    )

    assert recipe.servings == 4
    assert recipe.description == "old"
    assert recipe.image_url == settings.DEFAULT_IMAGE_URL
    recipe_repo.replace_ingredients.assert_not_called()
    recipe_repo.replace_steps.assert_not_called()
    # 빈 배열은 모든 그룹 연결 해제
    recipe_repo.replace_groups.assert_awaited_once_with(1, [])


@pytest.mark.asyncio
async def test_update_recipe_database_error_rolls_back(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)
    recipe_repo.replace_steps.side_effect = DatabaseException()

    with pytest.raises(DatabaseException):
        await recipe_service.update_recipe(
            1,
            UpdateRecipeRequest(ingredients=[{"name": "Corn"}], steps=[{"description": "Grill"}]),
            caller,
        )

    recipe_repo.session.rollback.assert_awaited_once()
    recipe_repo.session.commit.assert_not_called()


# --- delete / groups ---
@pytest.mark.asyncio
async def test_delete_recipe_forbidden(recipe_service, recipe_repo, stranger):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)

    with pytest.raises(RecipeForbiddenException):
        await recipe_service.delete_recipe(1, stranger)

    recipe_repo.delete_recipes.assert_not_called()


@pytest.mark.asyncio
async def test_delete_recipe_success(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)

    await recipe_service.delete_recipe(1, caller)

    recipe_repo.delete_recipes.assert_awaited_once_with([1])
    recipe_repo.session.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_attach_to_groups_empty(recipe_service, recipe_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)

    with pytest.raises(EmptyGroupIdsException):
        await recipe_service.attach_to_groups(1, AttachGroupsRequest(group_ids=[]), caller)


@pytest.mark.asyncio
async def test_attach_to_groups_counts_owned_groups(recipe_service, recipe_repo, group_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)
    group_repo.get_owned_groups.return_value = [
        Group(id=3, name="A", user_id=OWNER_ID),
        Group(id=4, name="B", user_id=OWNER_ID),
    ]

    response = await recipe_service.attach_to_groups(1, AttachGroupsRequest(group_ids=[3, 4, 99]), caller)

    assert response.attached_count == 2
    recipe_repo.link_groups.assert_awaited_once_with(1, [3, 4])


@pytest.mark.asyncio
async def test_detach_from_missing_group(recipe_service, recipe_repo, group_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)
    group_repo.get_group.return_value = None

    with pytest.raises(GroupNotFoundException):
        await recipe_service.detach_from_group(1, 5, caller)

    recipe_repo.unlink_group.assert_not_called()


@pytest.mark.asyncio
async def test_detach_unlinked_pair_is_noop(recipe_service, recipe_repo, group_repo, caller):
    recipe_repo.get_recipe_row.return_value = Recipe(id=1, title="Tacos", user_id=OWNER_ID)
    group_repo.get_group.return_value = Group(id=5, name="G", user_id=OWNER_ID)
    recipe_repo.unlink_group.return_value = 0

    await recipe_service.detach_from_group(1, 5, caller)

    recipe_repo.unlink_group.assert_awaited_once_with(1, 5)
