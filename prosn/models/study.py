"""스터디 그룹 관련 SQLAlchemy ORM 모델 정의.

Study group SQLAlchemy ORM model definitions.

Tables:
    - study_groups: 스터디 그룹 (Study groups with capacity and secret text)
    - study_tags: 스터디-태그 연결 (StudyGroup-Tag association)
    - user_studies: 스터디 멤버십 (Membership: one row per user/group pair)
"""

from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from prosn.database import Base


class StudyGroup(Base):
    """스터디 그룹 모델.

    Study group owned by a user. ``current_person`` always equals the
    number of user_studies rows referencing the group.

    Attributes:
        id: 고유 식별자 (Primary key)
        user_id: 개설자 FK (Owner)
        title: 제목 (Title)
        main_text: 공개 소개글 (Public description)
        secret_text: 멤버 전용 내용 (Members-only text, e.g. meeting link)
        max_person: 최대 인원 (Capacity)
        current_person: 현재 인원 (Current member count)
        place: 장소 (Meeting place)
        expired_date: 모집 마감일 (Expiry date)
        created_at: 생성 일시 UTC (Creation timestamp)
    """

    __tablename__ = "study_groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    main_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    secret_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_person: Mapped[int] = mapped_column(Integer, nullable=False)
    current_person: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    place: Mapped[str | None] = mapped_column(String(255), nullable=True)
    expired_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    def add_current_person(self) -> None:
        self.current_person += 1

    def remove_current_person(self) -> None:
        self.current_person -= 1

    def is_full(self) -> bool:
        return self.current_person >= self.max_person


class StudyTag(Base):
    """스터디-태그 연결 테이블 (StudyGroup-Tag association)."""

    __tablename__ = "study_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    study_group_id: Mapped[int] = mapped_column(Integer, ForeignKey("study_groups.id"), nullable=False)
    tag_id: Mapped[int] = mapped_column(Integer, ForeignKey("tags.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("study_group_id", "tag_id", name="uq_study_tag"),
    )


class UserStudy(Base):
    """스터디 멤버십 — 사용자당 스터디당 최대 1행.

    Membership join row; at most one per (user, study group) pair.
    """

    __tablename__ = "user_studies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    study_group_id: Mapped[int] = mapped_column(Integer, ForeignKey("study_groups.id"), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (
        UniqueConstraint("user_id", "study_group_id", name="uq_user_study"),
    )
