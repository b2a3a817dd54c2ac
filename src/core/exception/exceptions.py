# src/core/exception/exceptions.py
from pydantic import BaseModel, Field
from typing import Any


class BaseCustomException(Exception):
    def __init__(self, status_code: int, code: str, detail: str, field: str | None = None):
        self.status_code = status_code
        self.code = code
        self.detail = detail
        self.field = field
        super().__init__(detail)


# --- 도메인 공통 분류 ---
class ValidationException(BaseCustomException):
    def __init__(self, detail: str = "입력값이 올바르지 않습니다.", code: str = "VALIDATION_ERROR", field: str | None = None):
        super().__init__(status_code=400, code=code, detail=detail, field=field)


class UnauthenticatedException(BaseCustomException):
    def __init__(self, detail: str = "인증이 필요합니다.", code: str = "UNAUTHENTICATED"):
        super().__init__(status_code=401, code=code, detail=detail)


class ForbiddenException(BaseCustomException):
    def __init__(self, detail: str = "권한이 없습니다.", code: str = "FORBIDDEN"):
        super().__init__(status_code=403, code=code, detail=detail)


class NotFoundException(BaseCustomException):
    def __init__(self, detail: str = "데이터가 없습니다.", code: str = "NOT_FOUND"):
        super().__init__(status_code=404, code=code, detail=detail)


class ConflictException(BaseCustomException):
    def __init__(self, detail: str = "이미 존재하는 값입니다.", code: str = "CONFLICT", field: str | None = None):
        super().__init__(status_code=409, code=code, detail=detail, field=field)


# --- 시스템 ---
class DatabaseException(BaseCustomException):
    def __init__(self, detail: str = "데이터베이스 에러"):
        super().__init__(status_code=500, code="DB_ERROR", detail=detail)


class UnexpectedException(BaseCustomException):
    def __init__(self, detail: str = "서버 내부 오류"):
        super().__init__(status_code=500, code="SERVER_ERROR", detail=detail)


class GlobalErrorResponse(BaseModel):
    status_code: int = Field(..., examples=[400])
    code: str = Field(..., examples=["ERROR_CODE_STRING"])
    detail: str = Field(..., examples=["에러에 대한 상세 메시지입니다."])
    field: str | None = Field(None, description="충돌/검증 실패가 발생한 필드")
    errors: list[Any] | None = Field(None, description="유효성 검사 에러 시 상세 내용")
