from core.exception.exceptions import (
    ForbiddenException,
    NotFoundException,
    ValidationException,
)


class GroupNotFoundException(NotFoundException):
    def __init__(self, detail: str = "그룹을 찾을 수 없습니다."):
        super().__init__(detail=detail, code="GROUP_NOT_FOUND")


class GroupForbiddenException(ForbiddenException):
    def __init__(self, detail: str = "이 그룹에 대한 권한이 없습니다."):
        super().__init__(detail=detail, code="GROUP_FORBIDDEN")


class InvalidGroupNameException(ValidationException):
    def __init__(self, detail: str = "그룹 이름은 필수입니다."):
        super().__init__(detail=detail, code="INVALID_GROUP_NAME", field="name")
