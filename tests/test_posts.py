"""게시글 서비스 및 API 테스트.

Post tests — Writing problems/information with tags, soft deletion,
detail views, listings, the like/dislike toggle, and search.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.database import transaction
from prosn.models.post import LikeDislike, Post, PostTag, Problem
from prosn.schemas.post import (
    InformationCreate,
    InformationDetailResponse,
    LikeDislikeRequest,
    PostSearchRequest,
    ProblemCreate,
    ProblemDetailResponse,
)
from prosn.services.post_service import post_service
from prosn.utils.exceptions import BadRequestError, ForbiddenError, NotFoundError
from prosn.utils.pagination import page_params
from tests.conftest import auth_header, count_rows, make_token

URL = "/api/v1/posts"


def _problem_data(**overrides) -> ProblemCreate:
    data = {
        "title": "Stack or queue",
        "main_text": "Which structure is LIFO?",
        "answer": "stack",
        "example1": "stack",
        "example2": "queue",
        "tags": ["ALGO"],
    }
    data.update(overrides)
    return ProblemCreate(**data)


class TestWritePost:
    """게시글 작성 테스트."""

    async def test_write_problem_with_tags(self, db: AsyncSession, author, tags):
        """문제 작성 — 태그가 순서대로 연결된다."""
        problem = await post_service.write_problem(
            db, _problem_data(tags=["ALGO", "DB"]), author.id
        )
        assert problem.id is not None
        assert problem.user_id == author.id
        assert problem.post_type == "problem"
        assert problem.is_deleted is False

        detail = await post_service.show_post_detail(db, problem.id)
        assert [t.code for t in detail.tags] == ["ALGO", "DB"]

    async def test_write_information(self, db: AsyncSession, author, tags):
        """정보 게시글 작성."""
        info = await post_service.write_information(
            db, InformationCreate(title="Normal forms", main_text="1NF, 2NF, 3NF"), author.id
        )
        assert info.post_type == "information"
        assert await count_rows(db, PostTag, PostTag.post_id == info.id) == 0

    async def test_duplicate_tag_codes_linked_once(self, db: AsyncSession, author, tags):
        """같은 태그 코드를 여러 번 보내도 한 번만 연결."""
        problem = await post_service.write_problem(
            db, _problem_data(tags=["ALGO", "ALGO"]), author.id
        )
        assert await count_rows(db, PostTag, PostTag.post_id == problem.id) == 1

    async def test_unknown_tag_rolls_back_post(self, db: AsyncSession, author, tags):
        """존재하지 않는 태그 — 게시글도 함께 롤백된다."""
        author_id = author.id
        with pytest.raises(BadRequestError) as exc:
            async with transaction(db):
                await post_service.write_problem(
                    db, _problem_data(tags=["ALGO", "NOPE"]), author_id
                )
        assert exc.value.detail == "Invalid tag: NOPE"
        assert await count_rows(db, Post) == 0
        assert await count_rows(db, PostTag) == 0

    async def test_write_unknown_user(self, db: AsyncSession, tags):
        """존재하지 않는 사용자 — 404."""
        with pytest.raises(NotFoundError):
            await post_service.write_problem(db, _problem_data(), 9999)


class TestDeletePost:
    """게시글 삭제 테스트."""

    async def test_owner_soft_deletes(self, db: AsyncSession, author, problem):
        """작성자 삭제 — 행은 남고 플래그만 설정."""
        await post_service.delete_post(db, problem.id, author.id)
        assert problem.is_deleted is True
        assert await count_rows(db, Post, Post.id == problem.id) == 1

    async def test_delete_is_idempotent(self, db: AsyncSession, author, problem):
        """이미 삭제된 게시글 재삭제는 에러 없이 통과."""
        await post_service.delete_post(db, problem.id, author.id)
        await post_service.delete_post(db, problem.id, author.id)
        assert problem.is_deleted is True

    async def test_non_owner_forbidden(self, db: AsyncSession, reader, problem):
        """작성자가 아니면 403, 게시글은 그대로."""
        with pytest.raises(ForbiddenError):
            await post_service.delete_post(db, problem.id, reader.id)
        assert problem.is_deleted is False

    async def test_delete_missing_post(self, db: AsyncSession, author):
        """존재하지 않는 게시글 — 404."""
        with pytest.raises(NotFoundError):
            await post_service.delete_post(db, 9999, author.id)


class TestShowPostDetail:
    """게시글 상세 테스트."""

    async def test_problem_detail(self, db: AsyncSession, problem, reader):
        """문제 상세 — 정답, 보기, 좋아요/싫어요 수 포함."""
        await post_service.like_dislike_click(
            db, LikeDislikeRequest(post_id=problem.id, is_like=False), reader.id
        )
        detail = await post_service.show_post_detail(db, problem.id)

        assert isinstance(detail, ProblemDetailResponse)
        assert detail.type == "problem"
        assert detail.answer == "O(log n)"
        assert detail.example4 == "O(n log n)"
        assert detail.user.name == "author"
        assert detail.num_of_likes == 0
        assert detail.num_of_dislikes == 1
        assert [t.code for t in detail.tags] == ["ALGO"]

    async def test_information_detail(self, db: AsyncSession, information):
        """정보 게시글 상세 — 정답 필드 없음."""
        detail = await post_service.show_post_detail(db, information.id)
        assert isinstance(detail, InformationDetailResponse)
        assert detail.type == "information"
        assert not hasattr(detail, "answer")

    async def test_deleted_post_rejected(self, db: AsyncSession, author, problem):
        """삭제된 게시글 상세 — 400 "Deleted post"."""
        await post_service.delete_post(db, problem.id, author.id)
        with pytest.raises(BadRequestError) as exc:
            await post_service.show_post_detail(db, problem.id)
        assert exc.value.detail == "Deleted post"

    async def test_missing_post(self, db: AsyncSession):
        """존재하지 않는 게시글 — 404."""
        with pytest.raises(NotFoundError):
            await post_service.show_post_detail(db, 9999)

    async def test_unknown_post_type_rejected(self):
        """알 수 없는 판별자 값 — 400, 원래 ValueError는 연결하지 않음."""
        post = Problem(title="Odd", main_text="...")
        post.post_type = "video"

        with pytest.raises(BadRequestError) as exc:
            post_service._post_type(post)
        assert exc.value.detail == "Unsupported post type: video"
        assert exc.value.__cause__ is None
        assert exc.value.__suppress_context__ is True


class TestListPosts:
    """게시글 목록 테스트."""

    async def test_lists_exclude_deleted(self, db: AsyncSession, author, problem, information):
        """삭제된 게시글은 모든 목록에서 제외."""
        await post_service.delete_post(db, information.id, author.id)
        params = page_params()

        all_posts = await post_service.list_posts(db, params)
        problems = await post_service.list_problems(db, params)
        infos = await post_service.list_information(db, params)

        assert [p.id for p in all_posts.items] == [problem.id]
        assert all_posts.total == 1
        assert problems.total == 1
        assert infos.total == 0
        assert infos.pages == 0

    async def test_pagination_newest_first(self, db: AsyncSession, author, tags):
        """페이지네이션 — 최신순, 전체 개수/페이지 수."""
        ids = []
        for i in range(5):
            info = await post_service.write_information(
                db, InformationCreate(title=f"Note {i}", main_text="..."), author.id
            )
            ids.append(info.id)

        page = await post_service.list_information(db, page_params(2, 2))
        assert page.total == 5
        assert page.pages == 3
        assert page.page == 2
        assert [p.id for p in page.items] == [ids[2], ids[1]]

    async def test_summary_counts(self, db: AsyncSession, problem, author, reader):
        """목록 항목에 좋아요/싫어요 수가 집계된다."""
        await post_service.like_dislike_click(
            db, LikeDislikeRequest(post_id=problem.id, is_like=True), author.id
        )
        await post_service.like_dislike_click(
            db, LikeDislikeRequest(post_id=problem.id, is_like=True), reader.id
        )
        page = await post_service.list_problems(db, page_params())
        assert page.items[0].num_of_likes == 2
        assert page.items[0].num_of_dislikes == 0


class TestLikeDislike:
    """좋아요/싫어요 토글 테스트."""

    async def test_click_creates_reaction(self, db: AsyncSession, problem, reader):
        """첫 클릭 — 반응 생성."""
        state = await post_service.like_dislike_click(
            db, LikeDislikeRequest(post_id=problem.id, is_like=True), reader.id
        )
        assert state is True
        assert await count_rows(db, LikeDislike) == 1

    async def test_same_click_twice_clears(self, db: AsyncSession, problem, reader):
        """같은 버튼 두 번 — 반응 없음으로 복귀."""
        request = LikeDislikeRequest(post_id=problem.id, is_like=True)
        await post_service.like_dislike_click(db, request, reader.id)
        state = await post_service.like_dislike_click(db, request, reader.id)
        assert state is None
        assert await count_rows(db, LikeDislike) == 0

        # 세 번째 클릭은 다시 생성
        state = await post_service.like_dislike_click(db, request, reader.id)
        assert state is True

    async def test_opposite_click_flips(self, db: AsyncSession, problem, reader):
        """반대 버튼 — 행 하나를 유지한 채 전환."""
        await post_service.like_dislike_click(
            db, LikeDislikeRequest(post_id=problem.id, is_like=True), reader.id
        )
        state = await post_service.like_dislike_click(
            db, LikeDislikeRequest(post_id=problem.id, is_like=False), reader.id
        )
        assert state is False
        assert await count_rows(db, LikeDislike) == 1
        assert await count_rows(db, LikeDislike, LikeDislike.is_like.is_(False)) == 1

    async def test_missing_post(self, db: AsyncSession, reader):
        """존재하지 않는 게시글 — 404."""
        with pytest.raises(NotFoundError):
            await post_service.like_dislike_click(
                db, LikeDislikeRequest(post_id=9999, is_like=True), reader.id
            )


class TestSearchPosts:
    """게시글 검색 테스트."""

    async def test_title_search_dedupes_multi_tag_post(self, db: AsyncSession, author, tags):
        """태그가 여러 개인 게시글도 결과에 한 번만."""
        problem = await post_service.write_problem(
            db, _problem_data(title="Graph traversal", tags=["ALGO", "DB", "NET"]), author.id
        )
        results = await post_service.search_posts(db, PostSearchRequest(title="traversal"))
        assert [r.id for r in results] == [problem.id]

    async def test_search_by_code(self, db: AsyncSession, problem, information):
        """태그 코드 검색."""
        results = await post_service.search_posts(db, PostSearchRequest(code="DB"))
        assert [r.id for r in results] == [information.id]

    async def test_search_title_and_code(self, db: AsyncSession, problem, information):
        """제목과 코드 모두 일치해야 함."""
        results = await post_service.search_posts(
            db, PostSearchRequest(title="Binary", code="DB")
        )
        assert results == []

    async def test_search_excludes_deleted(self, db: AsyncSession, author, problem):
        """삭제된 게시글은 검색되지 않음."""
        await post_service.delete_post(db, problem.id, author.id)
        results = await post_service.search_posts(db, PostSearchRequest(code="ALGO"))
        assert results == []

    async def test_title_wildcards_are_literal(self, db: AsyncSession, problem):
        """검색어의 % 문자는 와일드카드로 취급하지 않음."""
        results = await post_service.search_posts(db, PostSearchRequest(title="%"))
        assert results == []


class TestPostApi:
    """게시글 API 테스트."""

    async def test_write_requires_auth(self, client: AsyncClient, tags):
        """인증 없이 작성 시 401."""
        res = await client.post(f"{URL}/problems", json={
            "title": "X", "main_text": "Y", "answer": "Z",
        })
        assert res.status_code == 401

    async def test_write_and_read_problem(self, client: AsyncClient, author, tags):
        """문제 작성 후 상세 조회."""
        token = make_token(author)
        res = await client.post(f"{URL}/problems", json={
            "title": "Hash collision",
            "main_text": "Name one resolution strategy",
            "answer": "chaining",
            "tags": ["ALGO"],
        }, headers=auth_header(token))
        assert res.status_code == 201
        created = res.json()
        assert created["type"] == "problem"

        res = await client.get(f"{URL}/{created['id']}")
        assert res.status_code == 200
        data = res.json()
        assert data["answer"] == "chaining"
        assert data["user"]["name"] == "author"
        assert data["tags"] == [{"code": "ALGO", "name": "Algorithm"}]

    async def test_write_unknown_tag_commits_nothing(self, client: AsyncClient, db: AsyncSession, author, tags):
        """잘못된 태그 — 400, 게시글 미생성."""
        token = make_token(author)
        res = await client.post(f"{URL}/information", json={
            "title": "Broken", "main_text": "...", "tags": ["NOPE"],
        }, headers=auth_header(token))
        assert res.status_code == 400
        assert await count_rows(db, Post) == 0

    async def test_delete_flow(self, client: AsyncClient, author, reader, problem):
        """타인 삭제 403, 작성자 삭제 204, 이후 상세 400."""
        post_id = problem.id
        owner_headers = auth_header(make_token(author))
        reader_headers = auth_header(make_token(reader))

        res = await client.delete(f"{URL}/{post_id}", headers=reader_headers)
        assert res.status_code == 403

        res = await client.delete(f"{URL}/{post_id}", headers=owner_headers)
        assert res.status_code == 204

        res = await client.get(f"{URL}/{post_id}")
        assert res.status_code == 400
        assert res.json()["detail"] == "Deleted post"

    async def test_like_dislike_endpoint(self, client: AsyncClient, reader, problem):
        """좋아요 클릭 후 재클릭 — like -> null."""
        headers = auth_header(make_token(reader))
        body = {"post_id": problem.id, "is_like": True}

        res = await client.post(f"{URL}/like-dislike", json=body, headers=headers)
        assert res.status_code == 200
        assert res.json()["reaction"] == "like"

        res = await client.post(f"{URL}/like-dislike", json=body, headers=headers)
        assert res.json()["reaction"] is None

    async def test_list_and_search_endpoints(self, client: AsyncClient, problem, information):
        """목록/검색 엔드포인트."""
        res = await client.get(URL, params={"per_page": 1})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 2
        assert data["pages"] == 2
        assert data["items"][0]["id"] == information.id

        res = await client.get(f"{URL}/problems")
        assert [p["id"] for p in res.json()["items"]] == [problem.id]

        res = await client.get(f"{URL}/search", params={"code": "ALGO"})
        assert [p["id"] for p in res.json()] == [problem.id]

    async def test_invalid_page(self, client: AsyncClient):
        """page=0 요청 시 422."""
        res = await client.get(URL, params={"page": 0})
        assert res.status_code == 422
