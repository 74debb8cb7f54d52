"""문제 풀이 테스트.

Solving tests — Point awarding state machine, solving history,
and first-attempt success rates.
"""

import jwt
import pytest
from httpx import AsyncClient
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.config import settings
from prosn.models.solving import Solving
from prosn.models.user import User
from prosn.schemas.solving import SolvingRequest
from prosn.services.solving_service import solving_service
from prosn.utils.exceptions import NotFoundError
from tests.conftest import auth_header, count_rows, make_token

URL = "/api/v1/solvings"


class TestSolveProblem:
    """풀이 제출 및 포인트 지급 테스트."""

    async def test_first_right_awards_points(self, db: AsyncSession, reader, problem):
        """첫 제출 정답 — 포인트 지급."""
        result = await solving_service.solve_problem(
            db, reader.id, SolvingRequest(problem_id=problem.id, is_right=True)
        )
        assert result.is_right is True
        assert result.first_is_right is True
        assert result.points_awarded == settings.SOLVE_POINT
        assert reader.point == settings.SOLVE_POINT

    async def test_wrong_then_right(self, db: AsyncSession, reader, problem):
        """오답(0) -> 정답(+10) -> 정답(0)."""
        wrong = SolvingRequest(problem_id=problem.id, is_right=False)
        right = SolvingRequest(problem_id=problem.id, is_right=True)

        first = await solving_service.solve_problem(db, reader.id, wrong)
        assert first.points_awarded == 0
        assert first.first_is_right is False

        second = await solving_service.solve_problem(db, reader.id, right)
        assert second.points_awarded == settings.SOLVE_POINT
        assert second.is_right is True
        assert second.first_is_right is False

        third = await solving_service.solve_problem(db, reader.id, right)
        assert third.points_awarded == 0
        assert third.point_balance == settings.SOLVE_POINT
        assert await count_rows(db, Solving) == 1

    async def test_right_then_wrong_keeps_state(self, db: AsyncSession, reader, problem):
        """정답 이후 오답 제출은 상태를 바꾸지 않음."""
        await solving_service.solve_problem(
            db, reader.id, SolvingRequest(problem_id=problem.id, is_right=True)
        )
        result = await solving_service.solve_problem(
            db, reader.id, SolvingRequest(problem_id=problem.id, is_right=False)
        )
        assert result.is_right is True
        assert result.points_awarded == 0
        assert reader.point == settings.SOLVE_POINT

    async def test_repeated_wrong(self, db: AsyncSession, reader, problem):
        """오답 반복 — 포인트 없음, 기록 하나."""
        wrong = SolvingRequest(problem_id=problem.id, is_right=False)
        await solving_service.solve_problem(db, reader.id, wrong)
        result = await solving_service.solve_problem(db, reader.id, wrong)
        assert result.is_right is False
        assert reader.point == 0

    async def test_information_is_not_a_problem(self, db: AsyncSession, reader, information):
        """정보 게시글에는 풀이 불가 — 404."""
        with pytest.raises(NotFoundError):
            await solving_service.solve_problem(
                db, reader.id, SolvingRequest(problem_id=information.id, is_right=True)
            )

    async def test_unknown_user(self, db: AsyncSession, problem):
        """존재하지 않는 사용자 — 404."""
        with pytest.raises(NotFoundError):
            await solving_service.solve_problem(
                db, 9999, SolvingRequest(problem_id=problem.id, is_right=True)
            )

    async def test_award_uses_latest_balance(self, db: AsyncSession, reader, problem):
        """세션에 로드된 사용자보다 DB 잔액이 최신이면 DB 값 기준으로 지급."""
        reader_id = reader.id
        await db.execute(
            text("UPDATE users SET point = 100 WHERE id = :id"), {"id": reader_id}
        )

        result = await solving_service.solve_problem(
            db, reader_id, SolvingRequest(problem_id=problem.id, is_right=True)
        )
        assert result.point_balance == 100 + settings.SOLVE_POINT

        stored = await db.execute(select(User.point).where(User.id == reader_id))
        assert stored.scalar_one() == 100 + settings.SOLVE_POINT


class TestListSolvings:
    """풀이 기록 조회 테스트."""

    async def test_history_with_title_and_tags(self, db: AsyncSession, reader, problem):
        """풀이 기록에 문제 제목/태그 포함."""
        await solving_service.solve_problem(
            db, reader.id, SolvingRequest(problem_id=problem.id, is_right=False)
        )
        history = await solving_service.list_solvings(db, reader.id)

        assert len(history) == 1
        assert history[0].problem_id == problem.id
        assert history[0].title == "Binary search bound"
        assert [t.code for t in history[0].tags] == ["ALGO"]
        assert history[0].is_right is False

    async def test_empty_history(self, db: AsyncSession, reader):
        """풀이 기록이 없으면 빈 목록."""
        assert await solving_service.list_solvings(db, reader.id) == []


class TestGetRate:
    """정답률 테스트."""

    async def test_rate_two_of_three(self, db: AsyncSession, author, reader, third_user, problem):
        """3명 중 2명 첫 제출 정답 — 66.67%."""
        for user, is_right in [(author, True), (reader, False), (third_user, True)]:
            await solving_service.solve_problem(
                db, user.id, SolvingRequest(problem_id=problem.id, is_right=is_right)
            )
        # 재풀이 정답은 첫 제출 기준 정답률에 반영되지 않음
        await solving_service.solve_problem(
            db, reader.id, SolvingRequest(problem_id=problem.id, is_right=True)
        )

        rate = await solving_service.get_rate(db, problem.id)
        assert rate.rate == 66.67
        assert rate.submit_count == 3

    async def test_rate_without_submissions(self, db: AsyncSession, problem):
        """제출이 없으면 0.0."""
        rate = await solving_service.get_rate(db, problem.id)
        assert rate.rate == 0.0
        assert rate.submit_count == 0

    async def test_rate_missing_problem(self, db: AsyncSession):
        """존재하지 않는 문제 — 404."""
        with pytest.raises(NotFoundError):
            await solving_service.get_rate(db, 9999)


class TestSolvingApi:
    """풀이 API 테스트."""

    async def test_submit_and_history(self, client: AsyncClient, reader, problem):
        """제출 후 내 기록과 정답률 조회."""
        headers = auth_header(make_token(reader))
        problem_id = problem.id

        res = await client.post(URL, json={"problem_id": problem_id, "is_right": True}, headers=headers)
        assert res.status_code == 200
        assert res.json()["points_awarded"] == settings.SOLVE_POINT
        assert res.json()["point_balance"] == settings.SOLVE_POINT

        res = await client.get(f"{URL}/me", headers=headers)
        assert res.status_code == 200
        assert [s["problem_id"] for s in res.json()] == [problem_id]

        res = await client.get(f"{URL}/rate/{problem_id}")
        assert res.json() == {"rate": 100.0, "submit_count": 1}

    async def test_history_requires_auth(self, client: AsyncClient):
        """인증 없이 기록 조회 시 401."""
        res = await client.get(f"{URL}/me")
        assert res.status_code == 401

    async def test_non_access_token_rejected(self, client: AsyncClient, reader):
        """액세스 토큰이 아닌 토큰 — 401."""
        token = jwt.encode(
            {"sub": str(reader.id), "type": "refresh"},
            settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
        res = await client.get(f"{URL}/me", headers=auth_header(token))
        assert res.status_code == 401
