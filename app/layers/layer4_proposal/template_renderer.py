"""Markdown template renderer.

{{key}} 자리표시자 치환과 마크다운 → 일반 텍스트 변환을 담당합니다.
완전한 마크다운 파서가 아니라 아래 네 가지 패턴만 처리하는 줄 단위 변환입니다.
- 줄 앞 # 제목 표시
- **굵게** 표시
- 줄 앞 - 목록 표시
- 3개 이상 연속 줄바꿈
"""

import logging
import re
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional

from app.exceptions import TemplateError

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_PATH = Path(__file__).parent / "templates" / "proposal_template.md"

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")
_HEADING_MARKER = re.compile(r"^[ \t]*#+[ \t]*", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.+?)\*\*")
_LIST_MARKER = re.compile(r"^[ \t]*-[ \t]+", re.MULTILINE)
_EXTRA_BLANK_LINES = re.compile(r"\n{3,}")


def render_template(template: str, variables: Mapping[str, Any]) -> str:
    """
    템플릿의 모든 {{key}}를 variables[key] 문자열로 치환.

    variables에 없는 키의 자리표시자는 그대로 남깁니다 (에러 아님).
    """
    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in variables:
            return match.group(0)
        return str(variables[key])

    return _PLACEHOLDER.sub(_replace, template)


def markdown_to_plain_text(markdown: str) -> str:
    """마크다운 제안서를 일반 텍스트로 변환 (손실 변환)."""
    text = _HEADING_MARKER.sub("", markdown or "")
    text = _BOLD.sub(r"\1", text)
    text = _LIST_MARKER.sub("", text)
    text = _EXTRA_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def load_proposal_template(path: Optional[str] = None) -> str:
    """
    제안서 템플릿 파일 로드.

    Args:
        path: 템플릿 경로. None이면 패키지 내장 템플릿 사용

    Raises:
        TemplateError: 파일이 없거나 읽을 수 없음
    """
    return _read_template(str(path or DEFAULT_TEMPLATE_PATH))


@lru_cache(maxsize=8)
def _read_template(path: str) -> str:
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(
            f"제안서 템플릿을 읽을 수 없습니다: {path}",
            details={"path": path, "reason": str(e)},
        ) from e

    logger.debug(f"[TemplateRenderer] 템플릿 로드: {path} ({len(content)} chars)")
    return content
