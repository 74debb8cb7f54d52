"""게시글 레포지토리 — 게시글, 게시글-태그, 좋아요/싫어요 쿼리.

Post Repository — Queries for posts, their tag associations, and
like/dislike reactions. Listing queries eager-load the owner so the
service layer never triggers lazy loads on an async session.
"""

from typing import Sequence

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from prosn.models.post import LikeDislike, Post, PostTag, Problem, Tag
from prosn.repositories.base import BaseRepository
from prosn.utils.pagination import PageParams


class PostRepository(BaseRepository[Post]):
    """게시글 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the posts table.
    ``Post`` queries return the concrete variant (Problem/Information).
    """

    def __init__(self) -> None:
        super().__init__(Post)

    async def get_with_user(
        self,
        db: AsyncSession,
        post_id: int,
    ) -> Post | None:
        """작성자를 함께 로드하여 게시글을 조회합니다.

        Retrieve a post (any variant) with its owner eagerly loaded.
        """
        query: Select = (
            select(Post)
            .options(selectinload(Post.user))
            .where(Post.id == post_id)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_problem(
        self,
        db: AsyncSession,
        problem_id: int,
    ) -> Problem | None:
        """문제 게시글만 조회합니다 (Retrieve a post only if it is a Problem)."""
        query: Select = select(Problem).where(Problem.id == problem_id)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_active_page(
        self,
        db: AsyncSession,
        model: type[Post],
        params: PageParams,
    ) -> tuple[Sequence[Post], int]:
        """삭제되지 않은 게시글을 최신순으로 페이지 조회합니다.

        Page through non-deleted posts of ``model`` (Post, Problem or
        Information), newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            model: 조회할 게시글 클래스 (Post class to list)
            params: 페이지 파라미터 (Page parameters)

        Returns:
            tuple[Sequence[Post], int]: (게시글 목록, 전체 개수)
        """
        query: Select = (
            select(model)
            .options(selectinload(model.user))
            .where(model.is_deleted.is_(False))
            .order_by(model.id.desc())
        )
        return await self.get_paginated(db, query, params)

    async def search(
        self,
        db: AsyncSession,
        title: str | None,
        code: str | None,
    ) -> list[Post]:
        """제목 부분 일치 및/또는 태그 코드로 게시글을 검색합니다.

        Search non-deleted posts by title substring and/or tag code.
        One row is returned per matching post-tag association, so a post
        may appear more than once; callers decide how to collapse them.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            title: 제목 검색어 (Title substring, optional)
            code: 태그 코드 (Tag code, optional)

        Returns:
            list[Post]: 일치하는 게시글 (Matching posts, possibly repeated)
        """
        query: Select = (
            select(Post)
            .options(selectinload(Post.user))
            .outerjoin(PostTag, PostTag.post_id == Post.id)
            .outerjoin(Tag, Tag.id == PostTag.tag_id)
            .where(Post.is_deleted.is_(False))
        )
        if title:
            query = query.where(Post.title.contains(title, autoescape=True))
        if code:
            query = query.where(Tag.code == code)

        query = query.order_by(Post.id.desc(), PostTag.id)
        result = await db.execute(query)
        return list(result.scalars().all())


class PostTagRepository(BaseRepository[PostTag]):
    """게시글-태그 연결 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(PostTag)

    async def get_tags(
        self,
        db: AsyncSession,
        post_id: int,
    ) -> list[Tag]:
        """게시글에 연결된 태그를 등록 순서대로 조회합니다.

        Retrieve the tags attached to a post in insertion order.
        """
        query: Select = (
            select(Tag)
            .join(PostTag, PostTag.tag_id == Tag.id)
            .where(PostTag.post_id == post_id)
            .order_by(PostTag.id)
        )
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_tags_for_posts(
        self,
        db: AsyncSession,
        post_ids: list[int],
    ) -> dict[int, list[Tag]]:
        """여러 게시글의 태그를 한 번에 조회합니다.

        Batch variant of ``get_tags`` keyed by post id.
        """
        tags_by_post: dict[int, list[Tag]] = {post_id: [] for post_id in post_ids}
        if not post_ids:
            return tags_by_post

        query: Select = (
            select(PostTag)
            .options(selectinload(PostTag.tag))
            .where(PostTag.post_id.in_(post_ids))
            .order_by(PostTag.id)
        )
        result = await db.execute(query)
        for post_tag in result.scalars().all():
            tags_by_post[post_tag.post_id].append(post_tag.tag)
        return tags_by_post


class LikeDislikeRepository(BaseRepository[LikeDislike]):
    """좋아요/싫어요 테이블 레포지토리."""

    def __init__(self) -> None:
        super().__init__(LikeDislike)

    async def get_by_user_and_post(
        self,
        db: AsyncSession,
        user_id: int,
        post_id: int,
    ) -> LikeDislike | None:
        """사용자의 특정 게시글 반응을 조회합니다 (User's reaction to a post)."""
        query: Select = select(LikeDislike).where(
            LikeDislike.user_id == user_id,
            LikeDislike.post_id == post_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_by_post_and_type(
        self,
        db: AsyncSession,
        post_id: int,
        is_like: bool,
    ) -> int:
        """게시글의 좋아요(True) 또는 싫어요(False) 수를 셉니다."""
        query: Select = select(func.count()).select_from(LikeDislike).where(
            LikeDislike.post_id == post_id,
            LikeDislike.is_like.is_(is_like),
        )
        return (await db.execute(query)).scalar() or 0

    async def count_for_posts(
        self,
        db: AsyncSession,
        post_ids: list[int],
    ) -> dict[int, tuple[int, int]]:
        """여러 게시글의 (좋아요 수, 싫어요 수)를 한 번의 집계로 조회합니다.

        Aggregate like/dislike counts for many posts in one GROUP BY query.

        Returns:
            dict[int, tuple[int, int]]: {post_id: (likes, dislikes)}
        """
        counts: dict[int, tuple[int, int]] = {post_id: (0, 0) for post_id in post_ids}
        if not post_ids:
            return counts

        query: Select = (
            select(
                LikeDislike.post_id,
                func.sum(case((LikeDislike.is_like.is_(True), 1), else_=0)),
                func.sum(case((LikeDislike.is_like.is_(False), 1), else_=0)),
            )
            .where(LikeDislike.post_id.in_(post_ids))
            .group_by(LikeDislike.post_id)
        )
        result = await db.execute(query)
        for post_id, likes, dislikes in result.all():
            counts[post_id] = (int(likes or 0), int(dislikes or 0))
        return counts


# 싱글턴 인스턴스: Singleton instances
post_repository: PostRepository = PostRepository()
post_tag_repository: PostTagRepository = PostTagRepository()
like_dislike_repository: LikeDislikeRepository = LikeDislikeRepository()
