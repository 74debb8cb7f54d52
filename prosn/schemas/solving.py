"""문제 풀이 관련 Pydantic 요청/응답 스키마 정의.

Solving Pydantic request/response schema definitions.
"""

from pydantic import BaseModel

from prosn.schemas.common import TagResponse


class SolvingRequest(BaseModel):
    """문제 풀이 제출 요청 스키마.

    Attributes:
        problem_id: 문제 ID (Problem post id)
        is_right: 정답 여부 (Whether the submission was correct)
    """

    problem_id: int
    is_right: bool


class SolvingResultResponse(BaseModel):
    """풀이 제출 결과 응답 스키마.

    Attributes:
        problem_id: 문제 ID (Problem post id)
        is_right: 현재 정답 여부 (Current correctness)
        first_is_right: 첫 제출 정답 여부 (First-attempt correctness)
        points_awarded: 이번 제출로 지급된 포인트 (Points granted by this call)
        point_balance: 제출 후 사용자 포인트 (User balance afterwards)
    """

    problem_id: int
    is_right: bool
    first_is_right: bool
    points_awarded: int
    point_balance: int


class SolvingResponse(BaseModel):
    """사용자 풀이 기록 항목 스키마."""

    problem_id: int
    title: str
    tags: list[TagResponse]
    is_right: bool


class RateResponse(BaseModel):
    """문제 정답률 응답 스키마.

    Attributes:
        rate: 첫 제출 정답률 %, 소수점 둘째 자리 (First-attempt success %, 2 decimals)
        submit_count: 제출 인원 수 (Number of solving records)
    """

    rate: float
    submit_count: int
