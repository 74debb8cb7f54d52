"""v1 API 라우터 패키지 — 모든 엔드포인트 통합.

v1 API Router package — Aggregates every endpoint into one router
for inclusion in the FastAPI application.

Included routers:
    - posts: 게시글 작성/조회/삭제, 좋아요/싫어요, 검색 (Posts)
    - solvings: 문제 풀이 기록 및 정답률 (Solvings)
    - studies: 스터디 그룹 및 멤버십 (Study groups)
"""

from fastapi import APIRouter

from prosn.api.v1.posts import router as posts_router
from prosn.api.v1.solvings import router as solvings_router
from prosn.api.v1.studies import router as studies_router

api_router: APIRouter = APIRouter()

api_router.include_router(posts_router, prefix="/posts", tags=["Posts"])
api_router.include_router(solvings_router, prefix="/solvings", tags=["Solvings"])
api_router.include_router(studies_router, prefix="/studies", tags=["Studies"])
