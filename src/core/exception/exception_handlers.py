import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exception.exceptions import BaseCustomException

logger = logging.getLogger(__name__)


async def custom_exception_handler(request: Request, exc: BaseCustomException):
    content = {
        "status_code": exc.status_code,
        "code": exc.code,
        "detail": exc.detail,
    }
    if exc.field:
        content["field"] = exc.field

    if exc.status_code >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.detail)

    return JSONResponse(status_code=exc.status_code, content=content)


async def system_exception_handler(request: Request, exc: Exception):
    logger.exception("처리되지 않은 예외: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "status_code": 500,
            "code": "INTERNAL_SERVER_ERROR",
            "detail": "서버 내부 오류가 발생했습니다. 관리자에게 문의하세요.",
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "status_code": exc.status_code,
            "code": "HTTP_ERROR",
            "detail": exc.detail,
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    for error in errors:
        if "ctx" in error:
            for key, value in error["ctx"].items():
                if isinstance(value, Exception):
                    error["ctx"][key] = str(value)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(
            {
                "status_code": 400,
                "code": "VALIDATION_ERROR",
                "detail": "입력값이 올바르지 않습니다.",
                "errors": errors,
            }
        ),
    )
