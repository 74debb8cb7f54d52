"""데이터베이스 엔진, 세션, 트랜잭션 경계 모듈.

Database engine, session, and transaction boundary module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class.
Services only flush; commits happen inside ``transaction``.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from prosn.config import settings

# 비동기 데이터베이스 엔진: Async database engine
# pool_pre_ping=True: 커넥션 풀에서 꺼낸 연결의 유효성을 사전 확인
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    pool_pre_ping=True,
)

# 비동기 세션 팩토리 (expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """비동기 데이터베이스 세션을 생성하고 요청 종료 시 닫습니다.

    FastAPI dependency that yields an async database session.
    Uncommitted work is discarded when the session closes.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        finally:
            await session.close()


@asynccontextmanager
async def transaction(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """명시적 트랜잭션 경계 — 성공 시 커밋, 예외 시 롤백.

    Explicit transaction scope around one service call.
    Commits when the block exits normally; rolls back every write made
    inside the block and re-raises when any exception escapes it.

    Args:
        db: 비동기 DB 세션 (Async database session)

    Yields:
        AsyncSession: 같은 세션 (The same session)
    """
    try:
        yield db
    except BaseException:
        await db.rollback()
        raise
    else:
        await db.commit()
