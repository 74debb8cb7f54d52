"""스터디 레포지토리 — 스터디 그룹, 스터디-태그, 멤버십 쿼리.

Study Repository — Queries for study groups, their tag associations,
and memberships.
"""

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.models.post import Tag
from prosn.models.study import StudyGroup, StudyTag, UserStudy
from prosn.models.user import User
from prosn.repositories.base import BaseRepository


class StudyGroupRepository(BaseRepository[StudyGroup]):
    """스터디 그룹 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(StudyGroup)

    async def get_for_update(
        self,
        db: AsyncSession,
        study_group_id: int,
    ) -> StudyGroup | None:
        """인원 변경을 위해 스터디 그룹 행을 잠금 조회합니다.

        Load a study group with a row lock (SELECT ... FOR UPDATE) so
        concurrent joins and leaves serialize on ``current_person``.
        Already-loaded instances are refreshed from the locked row.
        """
        query: Select = (
            select(StudyGroup)
            .where(StudyGroup.id == study_group_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_member_names(
        self,
        db: AsyncSession,
        study_group_id: int,
    ) -> list[str]:
        """스터디 멤버 이름을 가입 순서대로 조회합니다."""
        query: Select = (
            select(User.name)
            .join(UserStudy, UserStudy.user_id == User.id)
            .where(UserStudy.study_group_id == study_group_id)
            .order_by(UserStudy.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())


class StudyTagRepository(BaseRepository[StudyTag]):
    """스터디-태그 연결 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(StudyTag)

    async def get_tags(
        self,
        db: AsyncSession,
        study_group_id: int,
    ) -> list[Tag]:
        """스터디에 연결된 태그를 등록 순서대로 조회합니다."""
        query: Select = (
            select(Tag)
            .join(StudyTag, StudyTag.tag_id == Tag.id)
            .where(StudyTag.study_group_id == study_group_id)
            .order_by(StudyTag.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def delete_by_study(
        self,
        db: AsyncSession,
        study_group_id: int,
    ) -> None:
        """스터디의 모든 태그 연결을 삭제합니다 (Bulk delete tag links)."""
        await db.execute(
            delete(StudyTag).where(StudyTag.study_group_id == study_group_id)
        )
        await db.flush()


class UserStudyRepository(BaseRepository[UserStudy]):
    """스터디 멤버십 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(UserStudy)

    async def get_membership(
        self,
        db: AsyncSession,
        user_id: int,
        study_group_id: int,
    ) -> UserStudy | None:
        """사용자의 스터디 멤버십을 조회합니다."""
        query: Select = select(UserStudy).where(
            UserStudy.user_id == user_id,
            UserStudy.study_group_id == study_group_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def is_member(
        self,
        db: AsyncSession,
        user_id: int,
        study_group_id: int,
    ) -> bool:
        """사용자가 스터디 멤버인지 확인합니다."""
        return await self.exists(
            db, {"user_id": user_id, "study_group_id": study_group_id}
        )

    async def delete_by_study(
        self,
        db: AsyncSession,
        study_group_id: int,
    ) -> None:
        """스터디의 모든 멤버십을 삭제합니다 (Bulk delete memberships)."""
        await db.execute(
            delete(UserStudy).where(UserStudy.study_group_id == study_group_id)
        )
        await db.flush()


# 싱글턴 인스턴스: Singleton instances
study_group_repository: StudyGroupRepository = StudyGroupRepository()
study_tag_repository: StudyTagRepository = StudyTagRepository()
user_study_repository: UserStudyRepository = UserStudyRepository()
