from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    이미 설정된 환경 변수가 .env 파일 값보다 우선합니다.
    """

    # 서버 설정: 서버가 실행될 주소와 포트 번호
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origins: list[str] = ["*"]  # CORS 허용 주소 목록

    # 로깅 설정
    log_level: str = "INFO"

    # 추정 로직 설정
    team_velocity_hours_per_week: float = 30.0  # 팀이 주당 처리할 수 있는 작업 시간
    proposal_template_path: Optional[str] = None  # 비어있으면 내장 템플릿 사용

    # 진단용: 첫 번째 생성 시도에서 일부러 깨진 JSON을 반환 (재시도 경로 점검)
    simulate_malformed_model_output: bool = False

    class Config:
        # 설정을 읽어올 파일 지정
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    테스트에서 환경 변수를 바꿨다면 get_settings.cache_clear()를 먼저 호출하세요.
    """
    return Settings()
