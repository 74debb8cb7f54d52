"""게시글 관련 Pydantic 요청/응답 스키마 정의.

Post-related Pydantic request/response schema definitions.
Covers problem/information creation, detail views, paginated listings,
like/dislike clicks, and search.
"""

from typing import Literal

from pydantic import BaseModel, Field

from prosn.schemas.common import TagResponse, UserSummary


# === 작성 (Write) 스키마 ===

class PostCreate(BaseModel):
    """게시글 작성 공통 필드.

    Attributes:
        title: 제목 (Title, required)
        tags: 태그 코드 목록 (Tag codes to attach, each must exist)
    """

    title: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list)


class ProblemCreate(PostCreate):
    """문제 작성 요청 스키마.

    Attributes:
        main_text: 문제 본문 (Problem statement)
        answer: 정답 (Answer text)
        example1~4: 보기 1~4 (Four example choices)
    """

    main_text: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    example1: str | None = None
    example2: str | None = None
    example3: str | None = None
    example4: str | None = None


class InformationCreate(PostCreate):
    """정보 게시글 작성 요청 스키마."""

    main_text: str = Field(..., min_length=1)


class PostCreatedResponse(BaseModel):
    """게시글 작성 결과 응답 스키마 (Created post reference)."""

    id: int
    type: str
    title: str


# === 상세 (Detail) 스키마 ===

class PostDetailBase(BaseModel):
    """게시글 상세 공통 필드.

    Attributes:
        id: 게시글 ID (Post id)
        title: 제목 (Title)
        user: 작성자 요약 (Owner summary)
        main_text: 본문 (Main text)
        views: 조회수 (View counter)
        num_of_likes: 좋아요 수 (Like count)
        num_of_dislikes: 싫어요 수 (Dislike count)
        tags: 태그 목록 (Attached tags)
    """

    id: int
    title: str
    user: UserSummary
    main_text: str | None
    views: int
    num_of_likes: int
    num_of_dislikes: int
    tags: list[TagResponse]


class ProblemDetailResponse(PostDetailBase):
    """문제 상세 응답 스키마 — 정답과 보기 포함."""

    type: Literal["problem"] = "problem"
    answer: str | None
    example1: str | None
    example2: str | None
    example3: str | None
    example4: str | None


class InformationDetailResponse(PostDetailBase):
    """정보 게시글 상세 응답 스키마."""

    type: Literal["information"] = "information"


PostDetailResponse = ProblemDetailResponse | InformationDetailResponse


# === 목록 (Listing) 스키마 ===

class PostSummary(BaseModel):
    """게시글 목록/검색 항목 스키마.

    Lightweight row used by listings and search results.
    """

    id: int
    user: UserSummary
    title: str
    views: int
    num_of_likes: int
    num_of_dislikes: int


class PostPageResponse(BaseModel):
    """게시글 페이지 응답 스키마.

    Attributes:
        items: 현재 페이지 항목 (Items for the current page)
        total: 전체 항목 수 (Total element count)
        pages: 전체 페이지 수 (Total page count)
        page: 현재 페이지 번호, 1부터 시작 (Current page, 1-indexed)
        per_page: 페이지당 항목 수 (Items per page)
    """

    items: list[PostSummary]
    total: int
    pages: int
    page: int
    per_page: int


# === 좋아요/싫어요 (Like/Dislike) 스키마 ===

class LikeDislikeRequest(BaseModel):
    """좋아요/싫어요 클릭 요청 스키마.

    Attributes:
        post_id: 대상 게시글 ID (Target post)
        is_like: True=좋아요, False=싫어요 (Like or dislike button)
    """

    post_id: int
    is_like: bool


class LikeDislikeResponse(BaseModel):
    """클릭 이후 현재 반응 상태 (Reaction state after the click).

    ``reaction`` is None when the click cleared the previous reaction.
    """

    post_id: int
    reaction: Literal["like", "dislike"] | None


# === 검색 (Search) 스키마 ===

class PostSearchRequest(BaseModel):
    """게시글 검색 조건 — 제목 부분 일치 및/또는 태그 코드."""

    title: str | None = None
    code: str | None = None
