from contextlib import asynccontextmanager

from sqlalchemy import BigInteger, Integer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import DeclarativeBase

from core.config import settings
from core.exception.exceptions import DatabaseException

POSTGRES_DATABASE_URL = settings.POSTGRES_DATABASE_URL

engine = create_async_engine(
    POSTGRES_DATABASE_URL,
    echo=settings.DB_ECHO,
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


class Base(DeclarativeBase):
    pass


async def get_db():
    async with async_session_factory() as session:
        yield session


@asynccontextmanager
async def atomic(session: AsyncSession):
    """하나의 트랜잭션 경계. 성공 시 commit, 어떤 예외든 rollback 후 다시 던진다.

    레포지토리는 flush 까지만 하고 commit 은 여기서만 일어난다.
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        raise DatabaseException(detail=f"트랜잭션 처리 실패: {str(e)}")
    except Exception:
        await session.rollback()
        raise


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# sqlite 는 INTEGER PRIMARY KEY 만 autoincrement 된다
BigIntPK = BigInteger().with_variant(Integer, "sqlite")
