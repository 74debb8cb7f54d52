"""공통 Pydantic 응답 스키마 정의.

Common Pydantic response schema definitions shared by posts, solvings,
and study groups.
"""

from pydantic import BaseModel


class UserSummary(BaseModel):
    """작성자 요약 응답 스키마 (Owner summary)."""

    id: int
    name: str


class TagResponse(BaseModel):
    """태그 응답 스키마.

    Attributes:
        code: 태그 코드 (Tag code)
        name: 표시 이름 (Display label)
    """

    code: str
    name: str

