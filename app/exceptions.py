"""
프로젝트 추정 시스템 커스텀 예외 계층입니다.
각 레이어/서비스별 구조화된 에러 코드와 메시지를 제공합니다.
"""

from typing import Optional, Any


class EstimatorError(Exception):
    """추정 시스템 기본 예외 클래스."""

    def __init__(
        self,
        message: str,
        error_code: str = "ERR_UNKNOWN",
        details: Optional[Any] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class GenerationError(EstimatorError):
    """Layer 2: 생성 단계 출력이 스키마와 맞지 않을 때의 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_GEN_001", details=details)


class TemplateError(EstimatorError):
    """Layer 4: 제안서 템플릿 로딩 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_TMPL_001", details=details)


class ExportError(EstimatorError):
    """Layer 5: PDF/DOCX 내보내기 에러."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_EXPORT_001", details=details)


class InputValidationError(EstimatorError):
    """입력 유효성 검증 에러 (400 응답)."""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message, error_code="ERR_INPUT_001", details=details)
