"""문제 풀이 기록 SQLAlchemy ORM 모델 정의.

Solving record model — outcome of a user's attempts on a Problem.

Tables:
    - solvings: 사용자-문제 풀이 기록 (One row per user/problem pair)
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from prosn.database import Base


class Solving(Base):
    """문제 풀이 기록.

    Attributes:
        id: 고유 식별자 (Primary key)
        user_id: 풀이한 사용자 FK (Solving user)
        problem_id: 문제 게시글 FK (Problem post)
        is_right: 현재 정답 여부 (Current correctness)
        first_is_right: 첫 제출 정답 여부 — 최초 기록 후 불변
                        (Correctness of the first attempt, never changes)
        created_at: 최초 제출 일시 (First submission timestamp)
    """

    __tablename__ = "solvings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    problem_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    is_right: Mapped[bool] = mapped_column(Boolean, nullable=False)
    first_is_right: Mapped[bool] = mapped_column(Boolean, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("user_id", "problem_id", name="uq_solving_user_problem"),
    )

    def correct_answer(self) -> None:
        """재풀이 정답 처리 — first_is_right는 건드리지 않음."""
        self.is_right = True
