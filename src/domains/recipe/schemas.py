from datetime import datetime
from uuid import UUID

from pydantic import Field

from core.schemas import CamelModel


# --- Request ---
class IngredientRequest(CamelModel):
    name: str = ""
    quantity: str | None = ""


class StepRequest(CamelModel):
    description: str = ""


class CreateRecipeRequest(CamelModel):
    # 필수 여부는 서비스에서 순서대로 검증한다 (제목 -> 재료 -> 단계 -> 제목 중복)
    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    prep_time: str | None = None
    servings: int | None = None
    ingredients: list[IngredientRequest] | None = None
    steps: list[StepRequest] | None = None
    group_ids: list[int] = Field(default_factory=list)


class UpdateRecipeRequest(CamelModel):
    """보낸 필드만 반영된다 (model_fields_set 기준)."""

    title: str | None = None
    description: str | None = None
    image_url: str | None = None
    prep_time: str | None = None
    servings: int | None = None
    ingredients: list[IngredientRequest] | None = None
    steps: list[StepRequest] | None = None
    group_ids: list[int] | None = None


class AttachGroupsRequest(CamelModel):
    group_ids: list[int] | None = None


# --- Response ---
class IngredientResponse(CamelModel):
    id: int
    name: str
    quantity: str
    position: int


class StepResponse(CamelModel):
    id: int
    description: str
    position: int


class RecipeGroupResponse(CamelModel):
    id: int
    name: str


class OwnerResponse(CamelModel):
    id: UUID
    username: str


class RecipeResponse(CamelModel):
    id: int
    title: str
    description: str | None = None
    image_url: str
    prep_time: str | None = None
    servings: int | None = None
    user_id: UUID
    created_at: datetime | None = None
    ingredients: list[IngredientResponse]
    steps: list[StepResponse]
    groups: list[RecipeGroupResponse]
    user: OwnerResponse


class AttachGroupsResponse(CamelModel):
    message: str
    attached_count: int
