"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package registers every model with the metadata,
which relationship resolution and Alembic both rely on.

Modules:
    user: 사용자 (User with point balance)
    post: 태그, 게시글(문제/정보), 게시글-태그, 좋아요/싫어요 (Tag, Post variants, PostTag, LikeDislike)
    solving: 문제 풀이 기록 (Solving records)
    study: 스터디 그룹, 스터디-태그, 멤버십 (StudyGroup, StudyTag, UserStudy)
"""

from prosn.models.user import User
from prosn.models.post import Tag, Post, PostType, Problem, Information, PostTag, LikeDislike
from prosn.models.solving import Solving
from prosn.models.study import StudyGroup, StudyTag, UserStudy

__all__ = [
    "User",
    "Tag", "Post", "PostType", "Problem", "Information", "PostTag", "LikeDislike",
    "Solving",
    "StudyGroup", "StudyTag", "UserStudy",
]
