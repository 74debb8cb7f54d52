"""스터디 그룹 관련 Pydantic 요청/응답 스키마 정의.

Study group Pydantic request/response schema definitions.
The detail view comes in two shapes: members see the secret text and
the member list, everyone else gets the public fields only.
"""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field

from prosn.schemas.common import TagResponse


class StudyGroupCreate(BaseModel):
    """스터디 그룹 생성/수정 요청 스키마.

    Update uses the same shape: every field is replaced, tags included.

    Attributes:
        title: 제목 (Title)
        main_text: 공개 소개글 (Public description)
        secret_text: 멤버 전용 내용 (Members-only text)
        max_person: 최대 인원 (Capacity, at least 1)
        place: 장소 (Meeting place)
        expired_date: 모집 마감일 (Expiry date)
        tags: 태그 코드 목록 (Tag codes)
    """

    title: str = Field(..., min_length=1)
    main_text: str | None = None
    secret_text: str | None = None
    max_person: int = Field(..., ge=1)
    place: str | None = None
    expired_date: date | None = None
    tags: list[str] = Field(default_factory=list)


StudyGroupUpdate = StudyGroupCreate


class StudyGroupResponse(BaseModel):
    """스터디 그룹 생성/수정 결과 응답 스키마."""

    id: int
    title: str
    current_person: int
    max_person: int


class StudyGroupPublicResponse(BaseModel):
    """비멤버용 스터디 상세 — 비밀 내용과 멤버 목록 제외.

    Restricted view for users who are not members.
    """

    view: Literal["public"] = "public"
    id: int
    title: str
    main_text: str | None
    max_person: int
    current_person: int
    place: str | None
    expired_date: date | None
    tags: list[TagResponse]


class StudyGroupMemberResponse(StudyGroupPublicResponse):
    """멤버용 스터디 상세 — 비밀 내용과 멤버 이름 목록 포함.

    Full view for members.
    """

    view: Literal["member"] = "member"
    secret_text: str | None
    members: list[str]


StudyGroupDetailResponse = StudyGroupMemberResponse | StudyGroupPublicResponse


class MembershipResponse(BaseModel):
    """가입/탈퇴 결과 응답 스키마."""

    study_group_id: int
    current_person: int
