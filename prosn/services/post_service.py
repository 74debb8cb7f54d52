"""게시글 서비스 — 문제/정보 게시글 작성, 삭제, 조회, 좋아요/싫어요, 검색.

Post Service — Business logic for problem/information posts.
Handles writing posts with tags, soft deletion, detail views,
paginated listings, the like/dislike toggle, and search.
"""

from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from prosn.models.post import Information, LikeDislike, Post, PostTag, PostType, Problem, Tag
from prosn.models.user import User
from prosn.repositories.post_repository import (
    like_dislike_repository,
    post_repository,
    post_tag_repository,
)
from prosn.repositories.tag_repository import tag_repository
from prosn.repositories.user_repository import user_repository
from prosn.schemas.common import TagResponse, UserSummary
from prosn.schemas.post import (
    InformationCreate,
    InformationDetailResponse,
    LikeDislikeRequest,
    PostCreate,
    PostDetailResponse,
    PostPageResponse,
    PostSearchRequest,
    PostSummary,
    ProblemCreate,
    ProblemDetailResponse,
)
from prosn.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from prosn.utils.pagination import PageParams, total_pages


class PostService:
    """게시글 관련 비즈니스 로직을 처리하는 서비스.

    Service handling post business logic. Every write happens on the
    caller's session; nothing here commits.
    """

    # --- 작성 (Write) ---

    async def write_problem(
        self,
        db: AsyncSession,
        data: ProblemCreate,
        user_id: int,
    ) -> Problem:
        """문제 게시글을 작성합니다.

        Create a Problem owned by ``user_id`` and attach its tags.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 문제 작성 데이터 (Problem creation data)
            user_id: 작성자 ID (Author id)

        Returns:
            Problem: 저장된 문제 (Persisted problem)

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 존재하지 않는 태그 코드가 있을 때 (Unknown tag code)
        """
        user: User = await self._get_user(db, user_id)
        problem = Problem(
            user=user,
            title=data.title,
            main_text=data.main_text,
            answer=data.answer,
            example1=data.example1,
            example2=data.example2,
            example3=data.example3,
            example4=data.example4,
        )
        await self._save_post(db, data, problem)
        return problem

    async def write_information(
        self,
        db: AsyncSession,
        data: InformationCreate,
        user_id: int,
    ) -> Information:
        """정보 게시글을 작성합니다.

        Create an Information post owned by ``user_id`` and attach its tags.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
            BadRequestError: 존재하지 않는 태그 코드가 있을 때 (Unknown tag code)
        """
        user: User = await self._get_user(db, user_id)
        information = Information(
            user=user,
            title=data.title,
            main_text=data.main_text,
        )
        await self._save_post(db, data, information)
        return information

    # --- 삭제 (Delete) ---

    async def delete_post(
        self,
        db: AsyncSession,
        post_id: int,
        user_id: int,
    ) -> None:
        """게시글을 소프트 삭제합니다 — 작성자만 가능.

        Soft-delete a post. Only the owner may delete; deleting an
        already-deleted post again is a no-op.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
            ForbiddenError: 작성자가 아닐 때 (Requester is not the owner)
        """
        post: Post | None = await post_repository.get_by_id(db, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        if post.user_id != user_id:
            raise ForbiddenError("Only the author can delete this post")

        post.remove()
        await db.flush()

    # --- 상세 (Detail) ---

    async def show_post_detail(
        self,
        db: AsyncSession,
        post_id: int,
    ) -> PostDetailResponse:
        """게시글 상세를 유형별로 조회합니다.

        Build the detail view for a post, dispatching on its type.
        Every known type is handled explicitly; anything else is rejected.

        Raises:
            NotFoundError: 게시글을 찾을 수 없을 때 (Post not found)
            BadRequestError: 삭제된 게시글이거나 지원하지 않는 유형일 때
                             (Soft-deleted post or unsupported post type)
        """
        post: Post | None = await post_repository.get_with_user(db, post_id)
        if post is None:
            raise NotFoundError("Post not found")

        post_type: PostType = self._post_type(post)
        if post.is_deleted:
            raise BadRequestError("Deleted post")

        tags: list[Tag] = await post_tag_repository.get_tags(db, post.id)
        likes: int = await like_dislike_repository.count_by_post_and_type(db, post.id, True)
        dislikes: int = await like_dislike_repository.count_by_post_and_type(db, post.id, False)
        common: dict = {
            "id": post.id,
            "title": post.title,
            "user": UserSummary(id=post.user.id, name=post.user.name),
            "main_text": post.main_text,
            "views": post.views,
            "num_of_likes": likes,
            "num_of_dislikes": dislikes,
            "tags": [TagResponse(code=t.code, name=t.name) for t in tags],
        }

        if post_type is PostType.PROBLEM:
            return ProblemDetailResponse(
                **common,
                answer=post.answer,
                example1=post.example1,
                example2=post.example2,
                example3=post.example3,
                example4=post.example4,
            )
        if post_type is PostType.INFORMATION:
            return InformationDetailResponse(**common)
        raise BadRequestError(f"Unsupported post type: {post_type.value}")

    # --- 목록 (Listing) ---

    async def list_posts(self, db: AsyncSession, params: PageParams) -> PostPageResponse:
        """삭제되지 않은 전체 게시글 목록 (All non-deleted posts)."""
        return await self._list(db, Post, params)

    async def list_problems(self, db: AsyncSession, params: PageParams) -> PostPageResponse:
        """삭제되지 않은 문제 목록 (Non-deleted problems)."""
        return await self._list(db, Problem, params)

    async def list_information(self, db: AsyncSession, params: PageParams) -> PostPageResponse:
        """삭제되지 않은 정보 게시글 목록 (Non-deleted information posts)."""
        return await self._list(db, Information, params)

    # --- 좋아요/싫어요 (Like/Dislike) ---

    async def like_dislike_click(
        self,
        db: AsyncSession,
        data: LikeDislikeRequest,
        user_id: int,
    ) -> bool | None:
        """좋아요/싫어요 버튼 클릭을 처리합니다.

        Three-state toggle per (user, post):
            - 반응 없음 -> 새 반응 생성 (no reaction: create one)
            - 같은 버튼 재클릭 -> 반응 삭제 (same button again: clear it)
            - 반대 버튼 클릭 -> 반응 전환 (opposite button: flip it)

        Returns:
            bool | None: 클릭 후 상태 — True=좋아요, False=싫어요, None=없음
                         (Reaction after the click)

        Raises:
            NotFoundError: 사용자 또는 게시글을 찾을 수 없을 때 (User or post not found)
        """
        user: User = await self._get_user(db, user_id)
        post: Post | None = await post_repository.get_by_id(db, data.post_id)
        if post is None:
            raise NotFoundError("Post not found")

        existing: LikeDislike | None = await like_dislike_repository.get_by_user_and_post(
            db, user.id, post.id
        )
        if existing is None:
            await like_dislike_repository.create(
                db, {"user_id": user.id, "post_id": post.id, "is_like": data.is_like}
            )
            return data.is_like

        if existing.is_like == data.is_like:
            await like_dislike_repository.delete(db, existing)
            return None

        existing.change()
        await db.flush()
        return existing.is_like

    # --- 검색 (Search) ---

    async def search_posts(
        self,
        db: AsyncSession,
        data: PostSearchRequest,
    ) -> list[PostSummary]:
        """제목 및/또는 태그 코드로 게시글을 검색합니다.

        Posts matching through several tags are reported once, in the
        order of their first match.
        """
        matches: list[Post] = await post_repository.search(db, data.title, data.code)

        seen: set[int] = set()
        posts: list[Post] = []
        for post in matches:
            if post.id in seen:
                continue
            seen.add(post.id)
            posts.append(post)

        return await self._to_summaries(db, posts)

    # --- 내부 헬퍼 (Internal helpers) ---

    async def _get_user(self, db: AsyncSession, user_id: int) -> User:
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def _save_post(
        self,
        db: AsyncSession,
        data: PostCreate,
        post: Post,
    ) -> None:
        """게시글을 저장하고 태그 코드를 해석하여 연결합니다.

        Persist the post, then resolve every tag code and link it.
        An unknown code raises after the post row was flushed; the
        enclosing transaction discards both.
        """
        await post_repository.save(db, post)
        for code in dict.fromkeys(data.tags):
            tag: Tag | None = await tag_repository.get_by_code(db, code)
            if tag is None:
                raise BadRequestError(f"Invalid tag: {code}")
            await post_tag_repository.save(db, PostTag(post_id=post.id, tag_id=tag.id))

    def _post_type(self, post: Post) -> PostType:
        """판별자 값을 PostType으로 변환합니다.

        Rows loaded from the database always carry a mapped discriminator
        (the mapper rejects unknown ones on load), so only an in-memory
        post with a hand-set ``post_type`` reaches the error branch.
        """
        try:
            return PostType(post.post_type)
        except ValueError:
            raise BadRequestError(f"Unsupported post type: {post.post_type}") from None

    async def _list(
        self,
        db: AsyncSession,
        model: type[Post],
        params: PageParams,
    ) -> PostPageResponse:
        posts, total = await post_repository.get_active_page(db, model, params)
        return PostPageResponse(
            items=await self._to_summaries(db, posts),
            total=total,
            pages=total_pages(total, params.per_page),
            page=params.page,
            per_page=params.per_page,
        )

    async def _to_summaries(
        self,
        db: AsyncSession,
        posts: Sequence[Post],
    ) -> list[PostSummary]:
        counts: dict[int, tuple[int, int]] = await like_dislike_repository.count_for_posts(
            db, [p.id for p in posts]
        )
        return [
            PostSummary(
                id=p.id,
                user=UserSummary(id=p.user.id, name=p.user.name),
                title=p.title,
                views=p.views,
                num_of_likes=counts[p.id][0],
                num_of_dislikes=counts[p.id][1],
            )
            for p in posts
        ]


# 싱글턴 인스턴스: Singleton instance
post_service: PostService = PostService()
