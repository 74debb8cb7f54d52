"""JWT 토큰 생성 및 검증 유틸리티 모듈.

JWT token creation and verification utility module.
Tokens are issued by the external auth service with the shared secret;
this module verifies them and can mint access tokens for tooling/tests.

JWT Payload Structure:
    {
        "sub": "42",             # 사용자 ID (User identifier, stringified int)
        "exp": 1234567890,       # 만료 시간 UNIX timestamp (Expiration)
        "type": "access"         # 토큰 유형 (Token type discriminator)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from prosn.config import settings


def create_access_token(data: dict[str, Any]) -> str:
    """JWT 액세스 토큰을 생성합니다.

    Generate a JWT access token with the given payload data.
    Token expires after JWT_ACCESS_TOKEN_EXPIRE_MINUTES.

    Args:
        data: JWT 페이로드 데이터, 일반적으로 {"sub": str(user_id)}

    Returns:
        str: 인코딩된 JWT 문자열 (Encoded JWT token string)
    """
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """JWT 토큰을 디코딩하고 검증합니다.

    Decode and verify a JWT token string.

    Raises:
        jwt.ExpiredSignatureError: 토큰 만료 시 (When token has expired)
        jwt.InvalidTokenError: 유효하지 않은 토큰 (When token is invalid)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


def user_id_from_token(token: str) -> int:
    """액세스 토큰에서 사용자 ID를 추출합니다.

    Verify an access token and return the integer user id from ``sub``.

    Raises:
        jwt.InvalidTokenError: 서명/만료 오류, 토큰 유형 불일치, sub 누락 또는 정수가 아님
                               (Bad signature or expiry, non-access token, missing/non-int sub)
    """
    payload: dict[str, Any] = decode_token(token)
    if payload.get("type") != "access":
        raise jwt.InvalidTokenError("Invalid token type")
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise jwt.InvalidTokenError("Invalid subject claim")
