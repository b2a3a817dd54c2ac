from core.exception.exceptions import (
    ConflictException,
    ForbiddenException,
    NotFoundException,
    ValidationException,
)


class RecipeNotFoundException(NotFoundException):
    def __init__(self, detail: str = "레시피를 찾을 수 없습니다."):
        super().__init__(detail=detail, code="RECIPE_NOT_FOUND")


class RecipeForbiddenException(ForbiddenException):
    def __init__(self, detail: str = "이 레시피에 대한 권한이 없습니다."):
        super().__init__(detail=detail, code="RECIPE_FORBIDDEN")


class DuplicateTitleException(ConflictException):
    def __init__(self, detail: str = "이미 같은 제목의 레시피가 존재합니다."):
        super().__init__(detail=detail, code="TITLE_CONFLICT", field="title")


class MissingTitleException(ValidationException):
    def __init__(self, detail: str = "레시피 제목은 필수입니다."):
        super().__init__(detail=detail, code="MISSING_TITLE", field="title")


class EmptyIngredientsException(ValidationException):
    def __init__(self, detail: str = "재료를 하나 이상 입력해야 합니다."):
        super().__init__(detail=detail, code="EMPTY_INGREDIENTS", field="ingredients")


class EmptyStepsException(ValidationException):
    def __init__(self, detail: str = "조리 단계를 하나 이상 입력해야 합니다."):
        super().__init__(detail=detail, code="EMPTY_STEPS", field="steps")


class EmptyGroupIdsException(ValidationException):
    def __init__(self, detail: str = "groupId 를 하나 이상 보내야 합니다."):
        super().__init__(detail=detail, code="EMPTY_GROUP_IDS", field="groupIds")


class InvalidIngredientException(ValidationException):
    def __init__(self, detail: str = "재료 이름은 비어 있을 수 없습니다."):
        super().__init__(detail=detail, code="INVALID_INGREDIENT", field="ingredients")


class InvalidStepException(ValidationException):
    def __init__(self, detail: str = "조리 단계 설명은 비어 있을 수 없습니다."):
        super().__init__(detail=detail, code="INVALID_STEP", field="steps")


class FieldTooLongException(ValidationException):
    def __init__(self, field: str = "title", limit: int = 255, detail: str | None = None):
        super().__init__(
            detail=detail or f"{field} 은(는) {limit}자 이하여야 합니다.",
            code="FIELD_TOO_LONG",
            field=field,
        )
