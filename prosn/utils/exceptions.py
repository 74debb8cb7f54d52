"""커스텀 HTTP 예외 클래스 모듈.

Custom HTTP exception classes module.
Services raise these directly; FastAPI turns them into responses with
the matching status code, so no extra exception handlers are needed.

Usage:
    from prosn.utils.exceptions import NotFoundError, ConflictError
    raise NotFoundError("User not found")
    raise ConflictError("Already joined this study group")
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 사용자/게시글/문제/스터디를 찾을 수 없을 때.

    Raised when a lookup by identifier finds no row.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 유효하지 않은 입력 시 사용.

    Raised for input the schema layer cannot catch: unknown tag codes,
    soft-deleted posts, unsupported post types.

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ForbiddenError(HTTPException):
    """403 Forbidden 예외 — 리소스 소유자가 아닐 때 사용.

    Raised when the requesting user does not own the post or study group.

    Args:
        detail: 오류 메시지 (Error message, default: "Insufficient permissions")
    """

    def __init__(self, detail: str = "Insufficient permissions") -> None:
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class ConflictError(HTTPException):
    """409 Conflict 예외 — 현재 상태와 충돌하는 요청 시 사용.

    Raised for duplicate joins, leaving a group the user never joined,
    and joining a full group.

    Args:
        detail: 오류 메시지 (Error message, default: "Conflict")
    """

    def __init__(self, detail: str = "Conflict") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    Raised when the bearer token is missing, invalid, or expired.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)
