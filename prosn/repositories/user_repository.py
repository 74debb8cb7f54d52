"""사용자 레포지토리 — 사용자 조회 쿼리.

User Repository — Lookup queries for users.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.models.user import User
from prosn.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(User)

    async def get_for_update(
        self,
        db: AsyncSession,
        user_id: int,
    ) -> User | None:
        """포인트 변경을 위해 사용자 행을 잠금 조회합니다.

        Load a user row with a row lock (SELECT ... FOR UPDATE) so point
        updates from concurrent solves serialize. The identity-map copy is
        overwritten with the locked row so a stale balance is never reused.
        """
        query: Select = (
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스: Singleton instance
user_repository: UserRepository = UserRepository()
