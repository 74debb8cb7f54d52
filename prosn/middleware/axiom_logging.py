"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Ships one structured event per API request to Axiom: method, path,
params, masked JSON body, status code, duration, and the error detail
of 4xx/5xx responses. Without a token/dataset it is a pass-through.
"""

import json
import re
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from prosn.config import settings

# 마스킹 대상 필드 패턴: Fields to mask in request bodies and params
_SENSITIVE_KEYS = re.compile(
    r"(password|secret|token|authorization|api_key|credential)",
    re.IGNORECASE,
)

# 로깅 제외 경로: Paths excluded from logging
_SKIP_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}

_MAX_DETAIL = 500


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """민감 필드 자동 마스킹 — 중첩 dict/list를 재귀적으로 처리.

    Recursively mask sensitive keys. ``secret_text`` of a study group is
    masked as well since it matches the pattern.
    """
    if depth > 5:
        return "..."
    if isinstance(data, dict):
        return {
            k: "***" if _SENSITIVE_KEYS.search(k) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:20]]
    if isinstance(data, str) and len(data) > 2000:
        return data[:2000] + "...(truncated)"
    return data


def error_detail_from_body(body: bytes) -> str:
    """에러 응답 body에서 사유를 추출합니다 (FastAPI {"detail": ...} 형식)."""
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return body.decode("utf-8", errors="replace")[:_MAX_DETAIL]
    detail = payload.get("detail", payload) if isinstance(payload, dict) else payload
    text = detail if isinstance(detail, str) else json.dumps(detail, ensure_ascii=False)
    return text[:_MAX_DETAIL]


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어."""

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET

        if settings.AXIOM_API_TOKEN and settings.AXIOM_DATASET:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or request.url.path in _SKIP_PATHS:
            return await call_next(request)

        started: float = time.perf_counter()
        event: dict[str, Any] = {
            "method": request.method,
            "path": request.url.path,
            "status_code": 500,
        }
        if request.query_params:
            event["query_params"] = mask_sensitive(dict(request.query_params))
        if request.method in ("POST", "PUT", "PATCH"):
            event["request_body"] = await self._read_body(request)

        try:
            response = await call_next(request)
            event["status_code"] = response.status_code
            if response.status_code >= 400:
                response = await self._capture_error(response, event)
        except Exception as exc:
            event["error"] = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            if request.path_params:
                event["path_params"] = dict(request.path_params)
            event["duration_ms"] = round((time.perf_counter() - started) * 1000, 2)
            self._ingest(event)

        return response

    async def _read_body(self, request: Request) -> Any:
        body: bytes = await request.body()
        if not body:
            return None
        try:
            return mask_sensitive(json.loads(body))
        except (json.JSONDecodeError, UnicodeDecodeError):
            return "(non-json body)"

    async def _capture_error(self, response: Response, event: dict[str, Any]) -> Response:
        """에러 응답 body를 읽어 사유를 기록하고 같은 내용으로 다시 감쌉니다."""
        body: bytes = b""
        async for chunk in response.body_iterator:
            body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
        event["error"] = error_detail_from_body(body)
        return Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
        )

    def _ingest(self, event: dict[str, Any]) -> None:
        try:
            self._client.ingest_events(self._dataset, [event])
        except Exception:
            # 로깅 실패가 요청 처리에 영향주지 않도록: Never break a request on log failure
            pass
