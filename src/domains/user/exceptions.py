from core.exception.exceptions import (
    ConflictException,
    NotFoundException,
    UnauthenticatedException,
    ValidationException,
)


class InvalidCredentialsException(UnauthenticatedException):
    def __init__(self, detail: str = "이메일 또는 비밀번호가 올바르지 않습니다."):
        super().__init__(detail=detail, code="INVALID_CREDENTIALS")


class UnauthorizedException(UnauthenticatedException):
    def __init__(self, detail: str = "토큰이 제공되지 않았습니다."):
        super().__init__(detail=detail, code="TOKEN_NOT_PROVIDED")


class TokenExpiredException(UnauthenticatedException):
    def __init__(self, detail: str = "유효하지 않거나 만료된 토큰입니다."):
        super().__init__(detail=detail, code="INVALID_TOKEN")


class UserNotFoundException(NotFoundException):
    def __init__(self, detail: str = "유저를 찾을 수 없습니다."):
        super().__init__(detail=detail, code="USER_NOT_FOUND")


class DuplicateEmailException(ConflictException):
    def __init__(self, detail: str = "이미 등록된 이메일입니다."):
        super().__init__(detail=detail, code="EMAIL_CONFLICT", field="email")


class DuplicateUsernameException(ConflictException):
    def __init__(self, detail: str = "이미 등록된 username 입니다."):
        super().__init__(detail=detail, code="USERNAME_CONFLICT", field="username")


class InvalidUsernameException(ValidationException):
    def __init__(self, detail: str = "username 은 3자 이상이어야 합니다."):
        super().__init__(detail=detail, code="INVALID_USERNAME", field="username")


class InvalidPasswordException(ValidationException):
    def __init__(self, detail: str = "비밀번호는 6자 이상이어야 합니다."):
        super().__init__(detail=detail, code="INVALID_PASSWORD", field="password")


class InvalidEmailException(ValidationException):
    def __init__(self, detail: str = "이메일 형식이 올바르지 않습니다."):
        super().__init__(detail=detail, code="INVALID_EMAIL", field="email")
