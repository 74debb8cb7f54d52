"""태그 레포지토리 — 태그 코드 조회.

Tag Repository — Resolves tag codes against the tags reference table.
"""

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.models.post import Tag
from prosn.repositories.base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """태그 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Tag)

    async def get_by_code(
        self,
        db: AsyncSession,
        code: str,
    ) -> Tag | None:
        """태그 코드로 태그를 조회합니다.

        Retrieve a tag by its unique code.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            code: 태그 코드 (Tag code)

        Returns:
            Tag | None: 태그 또는 None (Tag or None)
        """
        query: Select = select(Tag).where(Tag.code == code)
        result = await db.execute(query)
        return result.scalar_one_or_none()


# 싱글턴 인스턴스: Singleton instance
tag_repository: TagRepository = TagRepository()
