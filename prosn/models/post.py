"""게시글 관련 SQLAlchemy ORM 모델 정의.

Post-related SQLAlchemy ORM model definitions.
Problem and Information share the posts table (single-table inheritance)
distinguished by the ``post_type`` discriminator column.

Tables:
    - tags: 태그 참조 데이터 (Tag reference data)
    - posts: 게시글 — 문제/정보 (Posts: problems and information)
    - post_tags: 게시글-태그 연결 (Post-Tag association)
    - like_dislikes: 좋아요/싫어요 (One reaction per user per post)
"""

import enum
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from prosn.database import Base


class PostType(str, enum.Enum):
    """게시글 유형 — posts.post_type 판별자 값.

    Post variant discriminator values.
    """

    PROBLEM = "problem"
    INFORMATION = "information"


class Tag(Base):
    """태그 모델 — 게시글과 스터디에 붙는 참조 데이터.

    Tag reference data attachable to posts and study groups.

    Attributes:
        id: 고유 식별자 (Primary key)
        code: 고유 태그 코드 (Unique tag code, e.g. "ALGO")
        name: 표시 이름 (Display label)
    """

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)


class Post(Base):
    """게시글 기본 모델 — 문제(Problem)와 정보(Information)의 공통 부모.

    Base post model. Never instantiated directly; rows are always one of
    the registered variants.

    Attributes:
        id: 고유 식별자 (Primary key)
        post_type: 게시글 유형 판별자 (Variant discriminator)
        user_id: 작성자 FK — 생성 후 변경 불가 (Owner, immutable after creation)
        title: 제목 (Title)
        main_text: 본문 (Main text)
        is_deleted: 소프트 삭제 플래그 (Soft-delete flag)
        views: 조회수 (View counter)
        created_at: 생성 일시 UTC (Creation timestamp)

    Relationships:
        user: 작성자 (Owning user)
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_type: Mapped[str] = mapped_column(String(20), nullable=False)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    main_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 소프트 삭제: 행을 지우지 않고 숨김 처리 (Hidden, never physically removed)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    user = relationship("User")

    __mapper_args__ = {"polymorphic_on": "post_type"}

    def remove(self) -> None:
        """게시글을 소프트 삭제합니다 (Mark the post as soft-deleted)."""
        self.is_deleted = True


class Problem(Post):
    """문제 게시글 — 정답과 4개의 보기를 가진 퀴즈형 게시글.

    Quiz-style post with an answer and four example choices.
    """

    answer: Mapped[str | None] = mapped_column(Text, nullable=True)
    example1: Mapped[str | None] = mapped_column(Text, nullable=True)
    example2: Mapped[str | None] = mapped_column(Text, nullable=True)
    example3: Mapped[str | None] = mapped_column(Text, nullable=True)
    example4: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Post 조회 시에도 문제 컬럼을 함께 로드 (no lazy column loads on async sessions)
    __mapper_args__ = {
        "polymorphic_identity": PostType.PROBLEM.value,
        "polymorphic_load": "inline",
    }


class Information(Post):
    """정보 게시글 — 본문만 가진 아티클형 게시글.

    Article-style post carrying only the main text.
    """

    __mapper_args__ = {"polymorphic_identity": PostType.INFORMATION.value}


class PostTag(Base):
    """게시글-태그 연결 테이블.

    Post-Tag association table for many-to-many relationships.
    """

    __tablename__ = "post_tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    tag_id: Mapped[int] = mapped_column(Integer, ForeignKey("tags.id"), nullable=False)

    __table_args__ = (
        UniqueConstraint("post_id", "tag_id", name="uq_post_tag"),
    )

    tag = relationship("Tag")


class LikeDislike(Base):
    """좋아요/싫어요 모델 — 사용자당 게시글당 최대 1행.

    Like/dislike reaction. At most one row exists per (user, post) pair;
    ``is_like`` True means like, False means dislike.
    """

    __tablename__ = "like_dislikes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    post_id: Mapped[int] = mapped_column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    is_like: Mapped[bool] = mapped_column(Boolean, nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_like_dislike_user_post"),
    )

    def change(self) -> None:
        """반응을 반대로 전환합니다 (like <-> dislike)."""
        self.is_like = not self.is_like
