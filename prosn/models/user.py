"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.

Tables:
    - users: 사용자 계정 (User accounts with a point balance)
"""

from datetime import datetime, timezone
from sqlalchemy import String, DateTime, Integer
from sqlalchemy.orm import Mapped, mapped_column

from prosn.database import Base


class User(Base):
    """사용자 모델 — 게시글/스터디의 작성자이자 문제 풀이 주체.

    User model — Author of posts and study groups, and the subject of solvings.
    The point balance changes only when a problem is solved correctly.

    Attributes:
        id: 고유 식별자 (Surrogate primary key)
        name: 사용자 이름 (Display name)
        point: 포인트 잔액 (Point balance)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    # 포인트 잔액: 정답 처리 시에만 증가 (Only raised by correct solves)
    point: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def earn_points(self, amount: int) -> None:
        """포인트를 적립합니다 (Add points to the balance)."""
        self.point += amount
