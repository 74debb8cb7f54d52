"""문제 풀이 라우터 — 풀이 제출, 내 풀이 기록, 정답률 엔드포인트.

Solving Router — Submit solutions, list my solvings, and read
per-problem success rates.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.api.deps import get_current_user
from prosn.database import get_db, transaction
from prosn.models.user import User
from prosn.schemas.solving import (
    RateResponse,
    SolvingRequest,
    SolvingResponse,
    SolvingResultResponse,
)
from prosn.services.solving_service import solving_service

router: APIRouter = APIRouter()


@router.get("/me", response_model=list[SolvingResponse])
async def list_my_solvings(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> list[SolvingResponse]:
    """내 풀이 기록 목록 (My solving records)."""
    return await solving_service.list_solvings(db, current_user.id)


@router.post("", response_model=SolvingResultResponse)
async def solve_problem(
    data: SolvingRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(get_current_user)],
) -> SolvingResultResponse:
    """문제 풀이 결과를 제출합니다 (Submit a solving result)."""
    async with transaction(db):
        result: SolvingResultResponse = await solving_service.solve_problem(
            db, current_user.id, data
        )
    return result


@router.get("/rate/{problem_id}", response_model=RateResponse)
async def get_rate(
    problem_id: int,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RateResponse:
    """문제의 첫 제출 정답률 (First-attempt success rate)."""
    return await solving_service.get_rate(db, problem_id)
