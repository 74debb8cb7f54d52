"""FastAPI 의존성 주입 모듈 — 인증 및 페이지 파라미터.

FastAPI dependency injection module — Authentication and paging.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송
       (Client sends Authorization: Bearer <token> header)
    2. user_id_from_token()이 JWT를 검증하고 사용자 ID를 반환
       (user_id_from_token verifies the JWT and returns the user id)
    3. 해당 ID로 DB에서 사용자를 조회
       (User is fetched from DB by that id)
"""

from typing import Annotated

import jwt
from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from prosn.database import get_db
from prosn.models.user import User
from prosn.repositories.user_repository import user_repository
from prosn.utils.exceptions import UnauthorizedError
from prosn.utils.jwt import user_id_from_token
from prosn.utils.pagination import PageParams, page_params

# HTTP Bearer 토큰 추출기: auto_error=False: 누락 시 401을 직접 발생
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User:
    """JWT 토큰에서 현재 인증된 사용자를 추출합니다.

    Decode the bearer token and return the authenticated user.

    Raises:
        UnauthorizedError: 토큰 누락/만료/위조 또는 사용자 없음
                           (Missing, expired, or invalid token; unknown user)
    """
    if credentials is None:
        raise UnauthorizedError()

    try:
        user_id: int = user_id_from_token(credentials.credentials)
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid or expired token")

    user: User | None = await user_repository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError("User not found")
    return user


def get_page_params(
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int | None, Query(ge=1)] = None,
) -> PageParams:
    """쿼리 문자열의 page/per_page를 PageParams로 변환합니다."""
    return page_params(page, per_page)
