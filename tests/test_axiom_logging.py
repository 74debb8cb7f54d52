"""Axiom 로깅 미들웨어 헬퍼 테스트.

Axiom logging helper tests — Sensitive field masking and error detail
extraction from FastAPI error bodies.
"""

import json

from prosn.middleware.axiom_logging import error_detail_from_body, mask_sensitive


class TestMaskSensitive:
    """민감 필드 마스킹 테스트."""

    def test_masks_nested_keys(self):
        """중첩 dict/list 안의 민감 키도 마스킹."""
        masked = mask_sensitive({
            "title": "Algorithm study",
            "secret_text": "room code",
            "members": [{"name": "reader", "access_token": "abc"}],
        })
        assert masked == {
            "title": "Algorithm study",
            "secret_text": "***",
            "members": [{"name": "reader", "access_token": "***"}],
        }

    def test_truncates_long_values(self):
        """긴 문자열과 긴 리스트는 잘라서 기록."""
        masked = mask_sensitive({"main_text": "x" * 2500, "tags": list(range(30))})
        assert masked["main_text"].endswith("...(truncated)")
        assert len(masked["main_text"]) == 2000 + len("...(truncated)")
        assert len(masked["tags"]) == 20

    def test_depth_limit(self):
        """너무 깊은 중첩은 "..."으로 대체."""
        data: dict = {"v": 1}
        for _ in range(8):
            data = {"inner": data}
        masked = mask_sensitive(data)
        for _ in range(6):
            masked = masked["inner"]
        assert masked == "..."


class TestErrorDetailFromBody:
    """에러 사유 추출 테스트."""

    def test_string_detail(self):
        """{"detail": "..."} 형식에서 메시지 추출."""
        assert error_detail_from_body(b'{"detail": "Deleted post"}') == "Deleted post"

    def test_validation_detail_serialized(self):
        """422 검증 오류 목록은 JSON 문자열로 기록."""
        detail = [{"loc": ["query", "page"], "msg": "Input should be greater than or equal to 1"}]
        body = json.dumps({"detail": detail}).encode()
        assert json.loads(error_detail_from_body(body)) == detail

    def test_non_json_body(self):
        """JSON이 아닌 body는 원문 그대로 (최대 500자)."""
        assert error_detail_from_body(b"Internal Server Error") == "Internal Server Error"
        assert len(error_detail_from_body(b"e" * 800)) == 500
