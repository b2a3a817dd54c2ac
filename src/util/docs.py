# src/util/docs.py
from typing import Type
from core.exception.exceptions import BaseCustomException, GlobalErrorResponse


# Exception 클래스들을 받아서 Swagger responses 명세를 자동으로 생성해주는 함수
def create_error_response(*exception_classes: Type[BaseCustomException]):
    responses = {}

    for exc_class in exception_classes:
        # 예외 클래스를 인스턴스화해서 default 값 추출
        exc = exc_class()

        status_code = exc.status_code

        if status_code not in responses:
            responses[status_code] = {
                "model": GlobalErrorResponse,
                "content": {"application/json": {"examples": {}}},
            }

        value = {
            "status_code": status_code,
            "code": exc.code,
            "detail": exc.detail,
        }
        if exc.field:
            value["field"] = exc.field

        responses[status_code]["content"]["application/json"]["examples"][exc_class.__name__] = {
            "summary": exc.detail,  # Swagger UI 드롭다운에 표시될 이름
            "value": value,
        }

    return responses
