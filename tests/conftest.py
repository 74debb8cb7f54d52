"""테스트 인프라 — 인메모리 SQLite DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — In-memory SQLite (aiosqlite) database, session,
and httpx client fixtures. Every test gets a fresh schema.
Fixture data is committed so rollback tests only discard their own writes.
"""

from collections.abc import AsyncGenerator
from datetime import date

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from prosn.database import Base, get_db
from prosn.main import app
from prosn.models import *  # noqa: F401,F403  (register all models with metadata)
from prosn.models.post import Information, PostTag, Problem, Tag
from prosn.models.study import StudyGroup, StudyTag, UserStudy
from prosn.models.user import User
from prosn.utils.jwt import create_access_token

TEST_DATABASE_URL = "sqlite+aiosqlite://"


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진 — 테스트마다 새 인메모리 스키마."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
async def _add(db: AsyncSession, obj):
    db.add(obj)
    await db.commit()
    return obj


@pytest_asyncio.fixture
async def author(db: AsyncSession) -> User:
    """게시글/스터디 작성자."""
    return await _add(db, User(name="author", point=0))


@pytest_asyncio.fixture
async def reader(db: AsyncSession) -> User:
    """작성자가 아닌 다른 사용자."""
    return await _add(db, User(name="reader", point=0))


@pytest_asyncio.fixture
async def third_user(db: AsyncSession) -> User:
    """세 번째 사용자."""
    return await _add(db, User(name="third", point=0))


@pytest_asyncio.fixture
async def tags(db: AsyncSession) -> dict[str, Tag]:
    """기본 태그 3개 (ALGO, DB, NET)."""
    result: dict[str, Tag] = {}
    for code, name in [("ALGO", "Algorithm"), ("DB", "Database"), ("NET", "Network")]:
        tag = Tag(code=code, name=name)
        db.add(tag)
        result[code] = tag
    await db.commit()
    return result


@pytest_asyncio.fixture
async def problem(db: AsyncSession, author: User, tags: dict[str, Tag]) -> Problem:
    """ALGO 태그가 붙은 문제 게시글."""
    p = await _add(db, Problem(
        user=author,
        title="Binary search bound",
        main_text="What is the complexity of binary search?",
        answer="O(log n)",
        example1="O(1)",
        example2="O(log n)",
        example3="O(n)",
        example4="O(n log n)",
    ))
    await _add(db, PostTag(post_id=p.id, tag_id=tags["ALGO"].id))
    return p


@pytest_asyncio.fixture
async def information(db: AsyncSession, author: User, tags: dict[str, Tag]) -> Information:
    """DB 태그가 붙은 정보 게시글."""
    info = await _add(db, Information(
        user=author,
        title="Index basics",
        main_text="B-tree indexes keep keys sorted.",
    ))
    await _add(db, PostTag(post_id=info.id, tag_id=tags["DB"].id))
    return info


@pytest_asyncio.fixture
async def study(db: AsyncSession, author: User, tags: dict[str, Tag]) -> StudyGroup:
    """작성자가 유일한 멤버인 정원 3명 스터디."""
    group = await _add(db, StudyGroup(
        user_id=author.id,
        title="Algorithm study",
        main_text="Weekly problem solving",
        secret_text="https://meet.example.com/algo",
        max_person=3,
        current_person=1,
        place="Library",
        expired_date=date(2026, 12, 31),
    ))
    db.add(UserStudy(user_id=author.id, study_group_id=group.id))
    db.add(StudyTag(study_group_id=group.id, tag_id=tags["ALGO"].id))
    await db.commit()
    return group


async def count_rows(db: AsyncSession, model, *criteria) -> int:
    """조건에 맞는 행 수를 셉니다."""
    query = select(func.count()).select_from(model)
    if criteria:
        query = query.where(*criteria)
    return (await db.execute(query)).scalar() or 0


def make_token(user: User) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({"sub": str(user.id)})


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
