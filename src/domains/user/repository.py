from sqlalchemy import select, delete, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio.session import AsyncSession

from core.exception.exceptions import DatabaseException, UnexpectedException
from domains.user.exceptions import DuplicateEmailException, DuplicateUsernameException
from domains.user.models import User


def _unique_violation(e: IntegrityError, action: str) -> Exception:
    # 동시 가입 등으로 사전 중복 검사를 통과한 경우 unique 인덱스가 막는다
    message = str(e.orig)
    if "email" in message:
        return DuplicateEmailException()
    if "username" in message:
        return DuplicateUsernameException()
    return DatabaseException(detail=f"{action} 실패: 제약조건 위반")


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def save_user(self, user: User) -> User:
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
            return user
        except IntegrityError as e:
            raise _unique_violation(e, "유저 저장")
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"유저 저장 실패: {str(e)}")

    async def _get_one(self, *where_conditions) -> User | None:
        try:
            stmt = select(User).where(*where_conditions).limit(1)
            result = await self.session.execute(stmt)
            return result.scalars().first()
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"DB 조회 오류: {str(e)}")
        except Exception as e:
            raise UnexpectedException(detail=f"예기치 못한 에러: {str(e)}")

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._get_one(User.email == email)

    async def get_user_by_username(self, username: str) -> User | None:
        return await self._get_one(User.username == username)

    async def get_user_by_id(self, user_id) -> User | None:
        return await self._get_one(User.id == user_id)

    async def find_conflicting_user(
        self, username: str | None = None, email: str | None = None, exclude_id=None
    ) -> User | None:
        """username 또는 email 이 겹치는 유저를 한 번의 OR 쿼리로 찾는다."""
        conditions = []
        if username is not None:
            conditions.append(User.username == username)
        if email is not None:
            conditions.append(User.email == email)
        if not conditions:
            return None

        where = [or_(*conditions)]
        if exclude_id is not None:
            where.append(User.id != exclude_id)
        return await self._get_one(*where)

    async def update_user(self, user: User) -> None:
        try:
            self.session.add(user)
            await self.session.flush()
            await self.session.refresh(user)
        except IntegrityError as e:
            raise _unique_violation(e, "데이터 업데이트")
        except SQLAlchemyError as e:
            raise DatabaseException(detail=f"데이터 업데이트 실패: {str(e)}")

    async def delete_user(self, user_id) -> int:
        # commit 은 호출하는 서비스의 트랜잭션에서
        result = await self.session.execute(delete(User).where(User.id == user_id))
        return result.rowcount
