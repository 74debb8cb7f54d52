"""스터디 서비스 — 스터디 그룹 생성/수정/삭제, 가입/탈퇴, 상세 조회.

Study Service — Business logic for study groups: create/update/delete,
membership management (join/leave), and membership-gated detail views.

Invariant: StudyGroup.current_person equals the number of UserStudy rows
for the group. Join and leave lock the group row before touching it.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from prosn.models.post import Tag
from prosn.models.study import StudyGroup, StudyTag, UserStudy
from prosn.models.user import User
from prosn.repositories.study_repository import (
    study_group_repository,
    study_tag_repository,
    user_study_repository,
)
from prosn.repositories.tag_repository import tag_repository
from prosn.repositories.user_repository import user_repository
from prosn.schemas.common import TagResponse
from prosn.schemas.study import (
    StudyGroupCreate,
    StudyGroupDetailResponse,
    StudyGroupMemberResponse,
    StudyGroupPublicResponse,
    StudyGroupUpdate,
)
from prosn.utils.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError


class StudyService:
    """스터디 그룹 관련 비즈니스 로직을 처리하는 서비스."""

    async def create_study(
        self,
        db: AsyncSession,
        data: StudyGroupCreate,
        user_id: int,
    ) -> StudyGroup:
        """스터디 그룹을 생성합니다 — 개설자가 첫 번째 멤버.

        Create a study group; the owner becomes its first member.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 스터디 생성 데이터 (Study creation data)
            user_id: 개설자 ID (Owner id)

        Returns:
            StudyGroup: 생성된 스터디 그룹 (Created study group)

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 존재하지 않는 태그 코드가 있을 때 (Unknown tag code)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        study_group: StudyGroup = await study_group_repository.create(
            db,
            {
                "user_id": user.id,
                "title": data.title,
                "main_text": data.main_text,
                "secret_text": data.secret_text,
                "max_person": data.max_person,
                "current_person": 0,
                "place": data.place,
                "expired_date": data.expired_date,
            },
        )
        await user_study_repository.create(
            db, {"user_id": user.id, "study_group_id": study_group.id}
        )
        study_group.add_current_person()
        await db.flush()

        await self._replace_tags(db, study_group, data.tags)
        return study_group

    async def update_study(
        self,
        db: AsyncSession,
        study_group_id: int,
        data: StudyGroupUpdate,
        user_id: int,
    ) -> StudyGroup:
        """스터디 그룹 내용을 수정합니다 — 개설자만 가능.

        Replace the group's fields and its whole tag set. Only the owner
        may update, and capacity cannot drop below the current members.

        Raises:
            NotFoundError: 스터디를 찾을 수 없을 때 (Study group not found)
            ForbiddenError: 개설자가 아닐 때 (Requester is not the owner)
            BadRequestError: 최대 인원이 현재 인원보다 작거나 태그가 잘못됐을 때
                             (Capacity below member count, or unknown tag code)
        """
        study_group: StudyGroup = await self._get_owned(db, study_group_id, user_id)
        if data.max_person < study_group.current_person:
            raise BadRequestError("max_person cannot be lower than the current member count")

        study_group.title = data.title
        study_group.main_text = data.main_text
        study_group.secret_text = data.secret_text
        study_group.max_person = data.max_person
        study_group.place = data.place
        study_group.expired_date = data.expired_date
        await db.flush()

        await self._replace_tags(db, study_group, data.tags)
        return study_group

    async def delete_study(
        self,
        db: AsyncSession,
        study_group_id: int,
        user_id: int,
    ) -> None:
        """스터디 그룹을 삭제합니다 — 멤버십, 태그 연결, 그룹 순서.

        Delete memberships, then tag links, then the group itself.

        Raises:
            NotFoundError: 스터디를 찾을 수 없을 때 (Study group not found)
            ForbiddenError: 개설자가 아닐 때 (Requester is not the owner)
        """
        study_group: StudyGroup = await self._get_owned(db, study_group_id, user_id)

        await user_study_repository.delete_by_study(db, study_group.id)
        await study_tag_repository.delete_by_study(db, study_group.id)
        await study_group_repository.delete(db, study_group)

    async def join_study(
        self,
        db: AsyncSession,
        user_id: int,
        study_group_id: int,
    ) -> StudyGroup:
        """스터디에 가입합니다.

        Add ``user_id`` as a member and bump the member counter.

        Raises:
            NotFoundError: 스터디 또는 사용자를 찾을 수 없을 때 (Group or user not found)
            ConflictError: 이미 가입했거나 정원이 찼을 때 (Already a member, or group full)
        """
        study_group: StudyGroup = await self._get_locked(db, study_group_id)
        if await user_study_repository.is_member(db, user_id, study_group.id):
            raise ConflictError("Already joined this study group")

        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        if study_group.is_full():
            raise ConflictError("Study group is full")

        await user_study_repository.create(
            db, {"user_id": user.id, "study_group_id": study_group.id}
        )
        study_group.add_current_person()
        await db.flush()
        return study_group

    async def leave_study(
        self,
        db: AsyncSession,
        user_id: int,
        study_group_id: int,
    ) -> StudyGroup:
        """스터디에서 탈퇴합니다.

        Remove the membership and decrement the member counter.

        Raises:
            NotFoundError: 스터디를 찾을 수 없을 때 (Study group not found)
            ConflictError: 가입하지 않은 스터디일 때 (Not a member)
        """
        study_group: StudyGroup = await self._get_locked(db, study_group_id)
        membership: UserStudy | None = await user_study_repository.get_membership(
            db, user_id, study_group.id
        )
        if membership is None:
            raise ConflictError("Not a member of this study group")

        study_group.remove_current_person()
        await user_study_repository.delete(db, membership)
        return study_group

    async def show_study_group(
        self,
        db: AsyncSession,
        user_id: int,
        study_group_id: int,
    ) -> StudyGroupDetailResponse:
        """스터디 상세를 조회합니다 — 멤버 여부에 따라 응답 형태가 다름.

        Members get the secret text and member names; everyone else gets
        the public fields only.

        Raises:
            NotFoundError: 스터디를 찾을 수 없을 때 (Study group not found)
        """
        study_group: StudyGroup | None = await study_group_repository.get_by_id(db, study_group_id)
        if study_group is None:
            raise NotFoundError("Study group not found")

        tags: list[Tag] = await study_tag_repository.get_tags(db, study_group.id)
        public: dict = {
            "id": study_group.id,
            "title": study_group.title,
            "main_text": study_group.main_text,
            "max_person": study_group.max_person,
            "current_person": study_group.current_person,
            "place": study_group.place,
            "expired_date": study_group.expired_date,
            "tags": [TagResponse(code=t.code, name=t.name) for t in tags],
        }

        if not await user_study_repository.is_member(db, user_id, study_group.id):
            return StudyGroupPublicResponse(**public)

        members: list[str] = await study_group_repository.get_member_names(db, study_group.id)
        return StudyGroupMemberResponse(
            **public,
            secret_text=study_group.secret_text,
            members=members,
        )

    # --- 내부 헬퍼 (Internal helpers) ---

    async def _get_owned(
        self,
        db: AsyncSession,
        study_group_id: int,
        user_id: int,
    ) -> StudyGroup:
        study_group: StudyGroup | None = await study_group_repository.get_by_id(db, study_group_id)
        if study_group is None:
            raise NotFoundError("Study group not found")
        if study_group.user_id != user_id:
            raise ForbiddenError("Only the owner can modify this study group")
        return study_group

    async def _get_locked(self, db: AsyncSession, study_group_id: int) -> StudyGroup:
        study_group: StudyGroup | None = await study_group_repository.get_for_update(
            db, study_group_id
        )
        if study_group is None:
            raise NotFoundError("Study group not found")
        return study_group

    async def _replace_tags(
        self,
        db: AsyncSession,
        study_group: StudyGroup,
        codes: list[str],
    ) -> None:
        """태그 연결을 통째로 교체합니다 — 전체 삭제 후 재삽입.

        Replace the group's tag links: clear the existing set (skipped when
        there is none), then insert one link per resolved code.
        """
        existing: list[Tag] = await study_tag_repository.get_tags(db, study_group.id)
        if existing:
            await study_tag_repository.delete_by_study(db, study_group.id)

        for code in dict.fromkeys(codes):
            tag: Tag | None = await tag_repository.get_by_code(db, code)
            if tag is None:
                raise BadRequestError(f"Invalid tag: {code}")
            await study_tag_repository.save(
                db, StudyTag(study_group_id=study_group.id, tag_id=tag.id)
            )


# 싱글턴 인스턴스: Singleton instance
study_service: StudyService = StudyService()
