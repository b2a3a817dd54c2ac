import logging
import re

from core import security
from core.database import atomic
from core.security import Authenticated
from domains.user.exceptions import (
    DuplicateEmailException,
    DuplicateUsernameException,
    InvalidCredentialsException,
    InvalidEmailException,
    InvalidPasswordException,
    InvalidUsernameException,
    UserNotFoundException,
)
from domains.user.models import User
from domains.user.repository import UserRepository
from domains.user.schemas import (
    AuthResponse,
    LogInRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_USERNAME_LENGTH = 3
MIN_PASSWORD_LENGTH = 6
MAX_FIELD_LENGTH = 255


def _validate_username(username: str) -> None:
    if len(username) < MIN_USERNAME_LENGTH:
        raise InvalidUsernameException()
    if len(username) > MAX_FIELD_LENGTH:
        raise InvalidUsernameException(detail=f"username 은 {MAX_FIELD_LENGTH}자 이하여야 합니다.")


def _validate_email(email: str) -> None:
    if not EMAIL_PATTERN.match(email):
        raise InvalidEmailException()
    if len(email) > MAX_FIELD_LENGTH:
        raise InvalidEmailException(detail=f"이메일은 {MAX_FIELD_LENGTH}자 이하여야 합니다.")


class UserService:
    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def get_caller_by_token(self, access_token: str) -> Authenticated:
        caller = security.decode_jwt(access_token)
        user: User | None = await self.user_repo.get_user_by_id(caller.user_id)

        # 탈퇴한 유저의 토큰
        if not user:
            raise InvalidCredentialsException(detail="유효하지 않은 토큰입니다.")
        return Authenticated(user_id=user.id, username=user.username, email=user.email)

    def _issue(self, user: User) -> AuthResponse:
        token = security.create_jwt(user_id=user.id, username=user.username, email=user.email)
        return AuthResponse(token=token, user=UserResponse.model_validate(user))

    async def register(self, request: RegisterRequest) -> AuthResponse:
        _validate_username(request.username)
        if len(request.password) < MIN_PASSWORD_LENGTH:
            raise InvalidPasswordException()
        _validate_email(request.email)

        existing = await self.user_repo.find_conflicting_user(
            username=request.username, email=request.email
        )
        if existing:
            if existing.email == request.email:
                raise DuplicateEmailException()
            raise DuplicateUsernameException()

        user = User(
            username=request.username,
            email=request.email,
            password=security.hash_password(request.password),
        )
        async with atomic(self.user_repo.session):
            saved_user = await self.user_repo.save_user(user)
        logger.info("회원가입 완료: user_id=%s", saved_user.id)

        return self._issue(saved_user)

    async def log_in(self, request: LogInRequest) -> AuthResponse:
        user = await self.user_repo.get_user_by_email(request.email)

        if not user:
            security.dummy_verify()
            raise InvalidCredentialsException()

        if not security.verify_password(request.password, user.password):
            raise InvalidCredentialsException()

        return self._issue(user)

    async def get_profile(self, user_id) -> UserResponse:
        user = await self.user_repo.get_user_by_id(user_id)

        if not user:
            raise UserNotFoundException()

        return UserResponse.model_validate(user)

    async def update_profile(self, request: UpdateProfileRequest, user_id) -> UserResponse:
        user = await self.user_repo.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundException()

        if request.username is not None:
            _validate_username(request.username)
        if request.email is not None:
            _validate_email(request.email)

        conflict = await self.user_repo.find_conflicting_user(
            username=request.username, email=request.email, exclude_id=user.id
        )
        if conflict:
            if request.username is not None and conflict.username == request.username:
                raise DuplicateUsernameException(detail="다른 유저가 사용 중인 username 입니다.")
            raise DuplicateEmailException(detail="다른 유저가 사용 중인 이메일입니다.")

        if request.username is not None:
            user.username = request.username
        if request.email is not None:
            user.email = request.email

        async with atomic(self.user_repo.session):
            await self.user_repo.update_user(user)
        return UserResponse.model_validate(user)
