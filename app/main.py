"""
프로젝트 추정 시스템의 메인 진입점 파일입니다.
웹 서버 애플리케이션을 생성하고 설정하는 역할을 담당합니다.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.api.router import api_router
from app.exceptions import EstimatorError, ExportError, InputValidationError
from app.models import ErrorResponse

logger = logging.getLogger(__name__)

CLIENT_ERRORS = (InputValidationError, ExportError)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션의 생명주기(시작과 종료)를 관리하는 함수입니다.

    서버가 시작될 때 설정을 불러오고 시작 로그를 출력합니다.
    서버가 종료될 때 종료 로그를 출력합니다.
    """
    settings = get_settings()
    logger.info(f"프로젝트 추정기가 다음 주소에서 시작됩니다: {settings.host}:{settings.port}")
    if settings.simulate_malformed_model_output:
        logger.warning("SIMULATE_MALFORMED_MODEL_OUTPUT 활성화: 첫 번째 작업 분해 시도가 실패합니다")

    yield

    logger.info("프로젝트 추정기가 종료됩니다")


def _error_response(status_code: int, error_code: str, message: str, details=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error_code=error_code, message=message, details=details).to_content(),
    )


def create_app() -> FastAPI:
    """
    FastAPI 웹 애플리케이션을 생성하고 설정하는 함수입니다.

    주요 기능:
    1. 로깅 설정 (settings.log_level)
    2. CORS 설정 (프론트엔드와의 통신 허용 설정)
    3. 예외 핸들러 등록 (구조화된 JSON 에러 응답)
    4. API 라우터 연결 (/api/v1)
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="프로젝트 추정 시스템",
        description="프로젝트 설명/예산/마감일로부터 작업, 일정, 비용, 리스크, 제안서를 생성",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",  # 개발자용 문서 주소
        redoc_url="/redoc",
    )

    # CORS 미들웨어 설정: 프론트엔드 웹페이지가 이 서버에 접속할 수 있도록 허용하는 설정입니다.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 글로벌 예외 핸들러: 커스텀 예외를 구조화된 JSON 응답으로 변환
    @app.exception_handler(EstimatorError)
    async def estimator_error_handler(request: Request, exc: EstimatorError):
        status_code = 400 if isinstance(exc, CLIENT_ERRORS) else 500
        if status_code == 500:
            logger.error(f"[API] {exc.error_code}: {exc.message}")
        return _error_response(status_code, exc.error_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, "ERR_INPUT_001", "Invalid JSON body.")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return _error_response(404, "ERR_NOT_FOUND", "Route not found.")
        return _error_response(exc.status_code, f"ERR_HTTP_{exc.status_code}", str(exc.detail))

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.error(f"처리되지 않은 예외: {exc}", exc_info=True)
        return _error_response(500, "ERR_INTERNAL", "내부 서버 오류가 발생했습니다")

    # API 라우터 포함: /api/v1 주소 아래에 모든 기능을 연결합니다.
    app.include_router(api_router, prefix="/api/v1")

    return app


# 애플리케이션 인스턴스 생성
app = create_app()


@app.get("/")
async def root():
    """
    루트 엔드포인트: 서버의 기본 정보를 반환합니다.
    """
    return {
        "name": "프로젝트 추정 시스템",
        "version": "1.0.0",
        "description": "프로젝트 설명/예산/마감일 → 추정 결과와 제안서",
        "docs": "/docs",
        "api": "/api/v1",
    }


# 이 파일을 직접 실행했을 때 서버를 구동시키는 코드입니다.
if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,  # 코드가 변경되면 자동으로 재시작 (개발 모드)
    )
