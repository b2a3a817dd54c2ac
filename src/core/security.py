from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from passlib.context import CryptContext
from jose import jwt, JWTError

from core.config import settings
from domains.user.exceptions import TokenExpiredException, UnauthorizedException

JWT_ALGORITHM = "HS256"
JWT_SECRET_KEY = settings.JWT_SECRET_KEY.get_secret_value()

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
security_scheme = HTTPBearer(auto_error=False)


# --- 호출자 ---
@dataclass(frozen=True)
class Anonymous:
    pass


@dataclass(frozen=True)
class Authenticated:
    user_id: UUID
    username: str
    email: str


Caller = Anonymous | Authenticated


# --- 비밀번호 관련 ---
def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    # 존재하지 않는 계정도 해시 비교 시간만큼 소모
    pwd_context.dummy_verify()


# --- JWT 토큰 관련 ---
def create_jwt(user_id, username: str, email: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "id": str(user_id),
        "username": username,
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=settings.JWT_EXPIRE_DAYS),
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_jwt(access_token: str) -> Authenticated:
    try:
        payload = jwt.decode(access_token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError:
        raise TokenExpiredException()

    user_id = payload.get("sub")
    if user_id is None:
        raise TokenExpiredException()

    try:
        return Authenticated(
            user_id=UUID(user_id),
            username=payload.get("username", ""),
            email=payload.get("email", ""),
        )
    except ValueError:
        raise TokenExpiredException()


# --- 토큰 ---
def get_access_token(
    auth_header: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> str:
    if auth_header is None:
        raise UnauthorizedException()
    return auth_header.credentials


def get_optional_access_token(
    auth_header: HTTPAuthorizationCredentials | None = Depends(security_scheme),
) -> str | None:
    if auth_header is None:
        return None
    return auth_header.credentials
