"""문제 풀이 레포지토리 — 풀이 기록 조회 및 집계.

Solving Repository — Lookup and aggregation queries for solving records.
"""

from sqlalchemy import Select, case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.models.post import Problem
from prosn.models.solving import Solving
from prosn.repositories.base import BaseRepository


class SolvingRepository(BaseRepository[Solving]):
    """풀이 기록 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리."""

    def __init__(self) -> None:
        super().__init__(Solving)

    async def get_by_user_and_problem(
        self,
        db: AsyncSession,
        user_id: int,
        problem_id: int,
    ) -> Solving | None:
        """사용자-문제 쌍의 풀이 기록을 조회합니다."""
        query: Select = select(Solving).where(
            Solving.user_id == user_id,
            Solving.problem_id == problem_id,
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_user(
        self,
        db: AsyncSession,
        user_id: int,
    ) -> list[tuple[Solving, str]]:
        """사용자의 모든 풀이 기록을 문제 제목과 함께 조회합니다.

        Retrieve every solving record of a user paired with the problem
        title, oldest first.

        Returns:
            list[tuple[Solving, str]]: (풀이 기록, 문제 제목) 목록
        """
        query: Select = (
            select(Solving, Problem.title)
            .join(Problem, Problem.id == Solving.problem_id)
            .where(Solving.user_id == user_id)
            .order_by(Solving.id)
        )
        result = await db.execute(query)
        return [(solving, title) for solving, title in result.all()]

    async def count_first_right(
        self,
        db: AsyncSession,
        problem_id: int,
    ) -> tuple[int, int]:
        """문제의 (전체 제출 수, 첫 제출 정답 수)를 집계합니다.

        Count submissions for a problem and how many were right on the
        first attempt.

        Returns:
            tuple[int, int]: (submit_count, first_right_count)
        """
        query: Select = select(
            func.count(Solving.id),
            func.sum(case((Solving.first_is_right.is_(True), 1), else_=0)),
        ).where(Solving.problem_id == problem_id)
        submitted, first_right = (await db.execute(query)).one()
        return int(submitted or 0), int(first_right or 0)


# 싱글턴 인스턴스: Singleton instance
solving_repository: SolvingRepository = SolvingRepository()
