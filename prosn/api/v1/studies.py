"""스터디 라우터 — 스터디 생성/수정/삭제, 가입/탈퇴, 상세 엔드포인트.

Study Router — Endpoints for study group lifecycle and membership.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.api.deps import get_current_user
from prosn.database import get_db, transaction
from prosn.models.study import StudyGroup
from prosn.models.user import User
from prosn.schemas.study import (
    MembershipResponse,
    StudyGroupCreate,
    StudyGroupDetailResponse,
    StudyGroupResponse,
    StudyGroupUpdate,
)
from prosn.services.study_service import study_service

router: APIRouter = APIRouter()


def _to_response(study_group: StudyGroup) -> StudyGroupResponse:
    return StudyGroupResponse(
        id=study_group.id,
        title=study_group.title,
        current_person=study_group.current_person,
        max_person=study_group.max_person,
    )


@router.post("", response_model=StudyGroupResponse, status_code=201)
async def create_study(
    data: StudyGroupCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> StudyGroupResponse:
    """스터디 그룹을 생성합니다 (Create a study group)."""
    async with transaction(db):
        study_group: StudyGroup = await study_service.create_study(db, data, current_user.id)
    return _to_response(study_group)


@router.get("/{study_group_id}", response_model=StudyGroupDetailResponse)
async def show_study_group(
    study_group_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> StudyGroupDetailResponse:
    """스터디 상세 — 멤버에게만 비밀 내용과 멤버 목록 공개.

    Study detail; secret text and member names are shown to members only.
    """
    return await study_service.show_study_group(db, current_user.id, study_group_id)


@router.put("/{study_group_id}", response_model=StudyGroupResponse)
async def update_study(
    study_group_id: int,
    data: StudyGroupUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> StudyGroupResponse:
    """스터디 그룹을 수정합니다 — 개설자만 가능 (Owner only)."""
    async with transaction(db):
        study_group: StudyGroup = await study_service.update_study(
            db, study_group_id, data, current_user.id
        )
    return _to_response(study_group)


@router.delete("/{study_group_id}", status_code=204)
async def delete_study(
    study_group_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """스터디 그룹을 삭제합니다 — 개설자만 가능 (Owner only)."""
    async with transaction(db):
        await study_service.delete_study(db, study_group_id, current_user.id)


@router.post("/{study_group_id}/members", response_model=MembershipResponse)
async def join_study(
    study_group_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MembershipResponse:
    """스터디에 가입합니다 (Join a study group)."""
    async with transaction(db):
        study_group: StudyGroup = await study_service.join_study(
            db, current_user.id, study_group_id
        )
    return MembershipResponse(
        study_group_id=study_group.id, current_person=study_group.current_person
    )


@router.delete("/{study_group_id}/members", response_model=MembershipResponse)
async def leave_study(
    study_group_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> MembershipResponse:
    """스터디에서 탈퇴합니다 (Leave a study group)."""
    async with transaction(db):
        study_group: StudyGroup = await study_service.leave_study(
            db, current_user.id, study_group_id
        )
    return MembershipResponse(
        study_group_id=study_group.id, current_person=study_group.current_person
    )
