from fastapi import APIRouter, Depends

from core.di import get_user_service, get_current_caller, get_consistency_service
from core.security import Authenticated
from domains.consistency.service import ConsistencyService
from domains.user.exceptions import (
    DuplicateEmailException,
    DuplicateUsernameException,
    InvalidCredentialsException,
    InvalidEmailException,
    InvalidPasswordException,
    InvalidUsernameException,
    TokenExpiredException,
    UnauthorizedException,
    UserNotFoundException,
)
from domains.user.schemas import (
    AuthResponse,
    DeleteAccountResponse,
    LogInRequest,
    ProfileResponse,
    RegisterRequest,
    UpdateProfileRequest,
)
from domains.user.service import UserService
from util.docs import create_error_response

router = APIRouter()


@router.post(
    "/register",
    status_code=201,
    summary="회원가입 API",
    response_model=AuthResponse,
    responses=create_error_response(
        InvalidUsernameException,
        InvalidPasswordException,
        InvalidEmailException,
        DuplicateEmailException,
        DuplicateUsernameException,
    ),
)
async def register(request: RegisterRequest, user_service: UserService = Depends(get_user_service)):
    return await user_service.register(request)


@router.post(
    "/login",
    status_code=200,
    summary="로그인 API",
    response_model=AuthResponse,
    responses=create_error_response(InvalidCredentialsException),
)
async def log_in(request: LogInRequest, user_service: UserService = Depends(get_user_service)):
    return await user_service.log_in(request)


@router.get(
    "/profile",
    status_code=200,
    summary="내 정보 조회 API",
    response_model=ProfileResponse,
    responses=create_error_response(UnauthorizedException, TokenExpiredException, UserNotFoundException),
)
async def get_profile(
    caller: Authenticated = Depends(get_current_caller),
    user_service: UserService = Depends(get_user_service),
):
    user = await user_service.get_profile(caller.user_id)
    return ProfileResponse(user=user)


@router.put(
    "/profile",
    status_code=200,
    summary="내 정보 수정 API",
    response_model=ProfileResponse,
    responses=create_error_response(
        InvalidUsernameException,
        InvalidEmailException,
        DuplicateEmailException,
        DuplicateUsernameException,
        UserNotFoundException,
    ),
)
async def update_profile(
    request: UpdateProfileRequest,
    caller: Authenticated = Depends(get_current_caller),
    user_service: UserService = Depends(get_user_service),
):
    user = await user_service.update_profile(request, caller.user_id)
    return ProfileResponse(user=user)


@router.delete(
    "/account",
    status_code=200,
    summary="회원 탈퇴 API",
    response_model=DeleteAccountResponse,
    responses=create_error_response(UserNotFoundException),
)
async def delete_account(
    caller: Authenticated = Depends(get_current_caller),
    service: ConsistencyService = Depends(get_consistency_service),
):
    """
    그룹, 레시피(재료/단계/그룹 연결 포함)를 모두 지운 뒤 계정을 삭제한다.
    """
    return await service.delete_user(caller.user_id)
