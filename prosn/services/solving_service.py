"""문제 풀이 서비스 — 풀이 기록, 포인트 지급, 정답률 계산.

Solving Service — Records whether a user solved a problem, awards points
on the first correct (or corrected) solve, and computes success rates.

Per (user, problem) state:
    미풀이 (unsolved) -> 오답 (solved-wrong) | 정답 + 포인트 (solved-right)
    오답 -> 정답 + 포인트 (a corrected resubmission)
    정답 상태에서는 추가 포인트 없음 (solved-right awards nothing further)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from prosn.config import settings
from prosn.models.post import Problem, Tag
from prosn.models.solving import Solving
from prosn.models.user import User
from prosn.repositories.post_repository import post_repository, post_tag_repository
from prosn.repositories.solving_repository import solving_repository
from prosn.repositories.user_repository import user_repository
from prosn.schemas.common import TagResponse
from prosn.schemas.solving import (
    RateResponse,
    SolvingRequest,
    SolvingResponse,
    SolvingResultResponse,
)
from prosn.utils.exceptions import NotFoundError


class SolvingService:
    """문제 풀이 관련 비즈니스 로직을 처리하는 서비스."""

    async def list_solvings(
        self,
        db: AsyncSession,
        user_id: int,
    ) -> list[SolvingResponse]:
        """사용자의 모든 풀이 기록을 문제 제목/태그와 함께 조회합니다.

        List every solving record of a user, enriched with the problem's
        title and tags and the current correctness flag.
        """
        rows: list[tuple[Solving, str]] = await solving_repository.get_by_user(db, user_id)
        tags_by_post: dict[int, list[Tag]] = await post_tag_repository.get_tags_for_posts(
            db, [s.problem_id for s, _ in rows]
        )
        return [
            SolvingResponse(
                problem_id=s.problem_id,
                title=title,
                tags=[TagResponse(code=t.code, name=t.name) for t in tags_by_post[s.problem_id]],
                is_right=s.is_right,
            )
            for s, title in rows
        ]

    async def solve_problem(
        self,
        db: AsyncSession,
        user_id: int,
        data: SolvingRequest,
    ) -> SolvingResultResponse:
        """문제 풀이 결과를 기록하고 필요 시 포인트를 지급합니다.

        Record a submission. Points are awarded exactly once per
        (user, problem): on a correct first submission, or on the first
        correct resubmission after a wrong one.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 풀이한 사용자 ID (Solving user id)
            data: 제출 데이터 (Submission data)

        Returns:
            SolvingResultResponse: 제출 후 상태와 지급 포인트
                                   (State after submission and points granted)

        Raises:
            NotFoundError: 사용자 또는 문제를 찾을 수 없을 때 (User or problem not found)
        """
        user: User | None = await user_repository.get_for_update(db, user_id)
        if user is None:
            raise NotFoundError("User not found")
        problem: Problem | None = await post_repository.get_problem(db, data.problem_id)
        if problem is None:
            raise NotFoundError("Problem not found")

        awarded: int = 0
        solving: Solving | None = await solving_repository.get_by_user_and_problem(
            db, user.id, problem.id
        )
        if solving is not None:
            # 오답 -> 재풀이 정답인 경우에만 포인트 지급
            if not solving.is_right and data.is_right:
                solving.correct_answer()
                awarded = settings.SOLVE_POINT
        else:
            solving = await solving_repository.create(
                db,
                {
                    "user_id": user.id,
                    "problem_id": problem.id,
                    "is_right": data.is_right,
                    "first_is_right": data.is_right,
                },
            )
            if data.is_right:
                awarded = settings.SOLVE_POINT

        if awarded:
            user.earn_points(awarded)
        await db.flush()

        return SolvingResultResponse(
            problem_id=problem.id,
            is_right=solving.is_right,
            first_is_right=solving.first_is_right,
            points_awarded=awarded,
            point_balance=user.point,
        )

    async def get_rate(
        self,
        db: AsyncSession,
        problem_id: int,
    ) -> RateResponse:
        """문제의 첫 제출 정답률을 계산합니다.

        Percentage of solving records whose first attempt was right,
        rounded to two decimals. A problem nobody submitted reports 0.0.

        Raises:
            NotFoundError: 문제를 찾을 수 없을 때 (Problem not found)
        """
        problem: Problem | None = await post_repository.get_problem(db, problem_id)
        if problem is None:
            raise NotFoundError("Problem not found")

        submitted, first_right = await solving_repository.count_first_right(db, problem.id)
        if submitted == 0:
            return RateResponse(rate=0.0, submit_count=0)
        return RateResponse(
            rate=round(first_right / submitted * 100, 2),
            submit_count=submitted,
        )


# 싱글턴 인스턴스: Singleton instance
solving_service: SolvingService = SolvingService()
