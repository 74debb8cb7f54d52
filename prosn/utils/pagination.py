"""페이지네이션 유틸리티 모듈.

Pagination utility module for SQLAlchemy async queries.
Provides page parameter normalisation and page-count arithmetic
shared by every listing endpoint.
"""

import math
from dataclasses import dataclass

from prosn.config import settings


@dataclass(frozen=True)
class PageParams:
    """페이지 요청 파라미터 (1부터 시작).

    Page request parameters, 1-indexed.

    Attributes:
        page: 요청 페이지 번호 (Requested page number)
        per_page: 페이지당 항목 수 (Items per page)
    """

    page: int = 1
    per_page: int = settings.DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page


def page_params(page: int = 1, per_page: int | None = None) -> PageParams:
    """요청 값을 허용 범위로 보정하여 PageParams를 생성합니다.

    Clamp raw query values into the allowed range.
    """
    size: int = per_page if per_page is not None else settings.DEFAULT_PAGE_SIZE
    size = max(1, min(size, settings.MAX_PAGE_SIZE))
    return PageParams(page=max(1, page), per_page=size)


def total_pages(total: int, per_page: int) -> int:
    """전체 페이지 수 — ceil(total / per_page), 항목이 없으면 0."""
    if total == 0:
        return 0
    return math.ceil(total / per_page)
