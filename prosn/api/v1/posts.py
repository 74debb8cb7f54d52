"""게시글 라우터 — 작성, 삭제, 상세, 목록, 좋아요/싫어요, 검색 엔드포인트.

Post Router — Endpoints for writing, deleting, viewing, listing,
reacting to, and searching posts.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.api.deps import get_current_user, get_page_params
from prosn.database import get_db, transaction
from prosn.models.post import Post
from prosn.models.user import User
from prosn.schemas.post import (
    InformationCreate,
    LikeDislikeRequest,
    LikeDislikeResponse,
    PostCreatedResponse,
    PostDetailResponse,
    PostPageResponse,
    PostSearchRequest,
    PostSummary,
    ProblemCreate,
)
from prosn.services.post_service import post_service
from prosn.utils.pagination import PageParams

router: APIRouter = APIRouter()


def _created(post: Post) -> PostCreatedResponse:
    return PostCreatedResponse(id=post.id, type=post.post_type, title=post.title)


@router.post("/problems", response_model=PostCreatedResponse, status_code=201)
async def write_problem(
    data: ProblemCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PostCreatedResponse:
    """문제 게시글을 작성합니다 (Create a problem post)."""
    async with transaction(db):
        post: Post = await post_service.write_problem(db, data, current_user.id)
    return _created(post)


@router.post("/information", response_model=PostCreatedResponse, status_code=201)
async def write_information(
    data: InformationCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> PostCreatedResponse:
    """정보 게시글을 작성합니다 (Create an information post)."""
    async with transaction(db):
        post: Post = await post_service.write_information(db, data, current_user.id)
    return _created(post)


@router.get("", response_model=PostPageResponse)
async def list_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[PageParams, Depends(get_page_params)],
) -> PostPageResponse:
    """삭제되지 않은 전체 게시글 목록 (All posts, newest first)."""
    return await post_service.list_posts(db, params)


@router.get("/problems", response_model=PostPageResponse)
async def list_problems(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[PageParams, Depends(get_page_params)],
) -> PostPageResponse:
    """문제 목록 (Problems, newest first)."""
    return await post_service.list_problems(db, params)


@router.get("/information", response_model=PostPageResponse)
async def list_information(
    db: Annotated[AsyncSession, Depends(get_db)],
    params: Annotated[PageParams, Depends(get_page_params)],
) -> PostPageResponse:
    """정보 게시글 목록 (Information posts, newest first)."""
    return await post_service.list_information(db, params)


@router.get("/search", response_model=list[PostSummary])
async def search_posts(
    db: Annotated[AsyncSession, Depends(get_db)],
    title: str | None = None,
    code: str | None = None,
) -> list[PostSummary]:
    """제목 및/또는 태그 코드로 게시글을 검색합니다.

    Search posts by title substring and/or tag code.
    """
    return await post_service.search_posts(db, PostSearchRequest(title=title, code=code))


@router.post("/like-dislike", response_model=LikeDislikeResponse)
async def like_dislike_click(
    data: LikeDislikeRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> LikeDislikeResponse:
    """좋아요/싫어요 버튼 클릭 — 생성, 해제, 전환.

    Like/dislike click: create, clear, or flip the user's reaction.
    """
    async with transaction(db):
        state: bool | None = await post_service.like_dislike_click(db, data, current_user.id)

    reaction: str | None = None if state is None else ("like" if state else "dislike")
    return LikeDislikeResponse(post_id=data.post_id, reaction=reaction)


@router.get("/{post_id}", response_model=PostDetailResponse)
async def show_post_detail(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PostDetailResponse:
    """게시글 상세를 조회합니다 (Post detail by type)."""
    return await post_service.show_post_detail(db, post_id)


@router.delete("/{post_id}", status_code=204)
async def delete_post(
    post_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> None:
    """게시글을 소프트 삭제합니다 — 작성자만 가능 (Soft delete, owner only)."""
    async with transaction(db):
        await post_service.delete_post(db, post_id, current_user.id)
