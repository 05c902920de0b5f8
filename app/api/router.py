"""
API 라우터 설정 파일입니다.
각 기능별로 나누어진 API 주소들을 하나로 모으는 역할을 합니다.
"""

from fastapi import APIRouter

from app.api.endpoints import health, estimate, export

# 메인 API 라우터 생성
api_router = APIRouter()

# 헬스 체크 엔드포인트: 서버 상태 확인용 (/health)
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"]
)

# 추정 엔드포인트: 작업/일정/비용/리스크/제안서 생성 (/estimate)
api_router.include_router(
    estimate.router,
    prefix="/estimate",
    tags=["estimate"]
)

# 내보내기 엔드포인트: PDF / DOCX 다운로드 (/export)
api_router.include_router(
    export.router,
    prefix="/export",
    tags=["export"]
)
