"""Structured stage runner - retry / validate / fallback harness.

모든 생성 단계(작업 분해, 일정, 비용, 리스크 재검증)가 공통으로 사용하는
실행기입니다. 생성 함수가 무엇을 하는지와 무관하게 동작하므로,
지금의 결정적 휴리스틱 대신 언어 모델 같은 비결정적 백엔드를
generate 자리에 끼워 넣어도 호출자는 바뀌지 않습니다.

실행 전략:
┌──────────────────────────────────────────────────────────┐
│ 시도 │ 동작                                              │
├──────────────────────────────────────────────────────────┤
│ 1차  │ generate → (JSON 문자열이면 파싱) → validate      │
│ 2차  │ 1차 실패 시 동일하게 재시도                       │
│ 실패 │ fallback + _fallbackReason 반환 (예외 없음)       │
└──────────────────────────────────────────────────────────┘

- JSON 파싱 실패는 에러가 아니라 None으로 취급 (검증 단계에서 실패 처리)
- generate가 던진 예외도 시도 1회를 소모하는 실패로 취급
- 재시도는 순차적이며 대기 시간 없음
"""

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any, Callable, Optional, TypeVar

from app.exceptions import GenerationError

ContextT = TypeVar("ContextT")  # 생성 함수에 넘길 컨텍스트 타입
OutputT = TypeVar("OutputT")    # 단계 출력(및 폴백) 타입

MAX_ATTEMPTS = 2
FALLBACK_REASON_KEY = "_fallbackReason"

logger = logging.getLogger(__name__)


def safe_json_parse(value: Any) -> Any:
    """
    생성 결과가 문자열이면 JSON으로 파싱.

    Returns:
        파싱된 값. 문자열이 아니면 그대로, 파싱 실패 시 None.
    """
    if not isinstance(value, str):
        return value

    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return None


def run_stage(
    stage_name: str,
    context: ContextT,
    generate: Callable[[ContextT, int], Any],
    validate: Callable[[Any], bool],
    fallback: OutputT,
    max_attempts: int = MAX_ATTEMPTS,
) -> OutputT:
    """
    생성 단계를 재시도/검증/폴백 규칙으로 실행.

    Args:
        stage_name: 로깅 및 에러 메시지용 단계 이름
        context: generate에 그대로 전달되는 입력
        generate: (context, attempt) → 값 또는 JSON 문자열. attempt는 1부터 시작
        validate: 파싱된 값이 단계 스키마를 만족하는지 판정
        fallback: 모든 시도가 실패했을 때 반환할 기본값
        max_attempts: 최대 시도 횟수 (기본값 2)

    Returns:
        검증을 통과한 생성 결과, 또는 _fallbackReason이 붙은 폴백 값
    """
    last_error: Optional[Exception] = None

    for attempt in range(1, max_attempts + 1):
        try:
            output = safe_json_parse(generate(context, attempt))

            if not validate(output):
                raise GenerationError(
                    f"{stage_name} output did not match schema.",
                    details={"stage": stage_name, "attempt": attempt},
                )

            if attempt > 1:
                logger.info(f"[StageRunner:{stage_name}] 시도 {attempt}/{max_attempts} 성공")
            return output

        except Exception as e:
            last_error = e
            logger.warning(
                f"[StageRunner:{stage_name}] 시도 {attempt}/{max_attempts} 실패: "
                f"{type(e).__name__}: {e}"
            )

    reason = (str(last_error) if last_error else "") or f"{stage_name} failed."
    logger.warning(f"[StageRunner:{stage_name}] 모든 시도 실패, 폴백 사용: {reason}")
    return _with_fallback_reason(fallback, reason)


def _with_fallback_reason(fallback: Any, reason: str) -> Any:
    """
    폴백 값 복사본에 실패 사유를 붙여 반환.

    매핑이면 _fallbackReason 키를 추가하고, 목록이면 복사본만 반환합니다
    (목록에는 키를 붙일 자리가 없으므로 사유는 로그로만 남습니다).
    """
    if isinstance(fallback, Mapping):
        return {**copy.deepcopy(dict(fallback)), FALLBACK_REASON_KEY: reason}
    if isinstance(fallback, (list, tuple)):
        return [copy.deepcopy(item) for item in fallback]
    return copy.deepcopy(fallback)
