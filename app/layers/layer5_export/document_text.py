"""Flattened document text shared by the PDF and DOCX exporters.

추정 결과를 하나의 일반 텍스트 문서로 펼칩니다.
섹션 순서: 헤더 → 프로젝트 개요 → 작업 분해 → 일정 → 비용 → 리스크 → 제안서
비어있는 섹션은 "N/A"로 표시합니다.
"""

import re
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from app.exceptions import ExportError
from app.models import EstimateResult
from app.utils.dates import to_iso_date, utc_now
from app.utils.formatting import format_number

ESTIMATE_KEYS = ("normalizedInput", "taskBreakdown", "timeline", "costEstimate", "riskFlags")
RAW_INPUT_KEYS = ("projectDescription", "budget", "deadline")

_LINE_BREAKS = re.compile(r"\r\n|\r")
_NON_PRINTABLE = re.compile(r"[^\x09\x0A\x20-\x7E]")


def export_filename(extension: str, now: Optional[datetime] = None) -> str:
    """project-estimate-YYYY-MM-DD.<ext> (UTC 날짜 기준)"""
    return f"project-estimate-{to_iso_date(now or utc_now())}.{extension}"


def resolve_estimate_data(payload: Any) -> dict:
    """
    내보내기 입력을 추정 결과 딕셔너리(camelCase)로 변환.

    허용 형태:
    - EstimateResult 객체
    - 추정 결과 딕셔너리 (클라이언트가 되돌려 보낸 응답 등)
    - {"estimateData": {...}} 로 감싼 추정 결과
    - 원시 추정 입력 (projectDescription/budget/deadline) → 추정기 실행

    Raises:
        ExportError: 매핑도 EstimateResult도 아닌 값
    """
    if isinstance(payload, EstimateResult):
        return payload.to_dict()

    if not isinstance(payload, Mapping):
        raise ExportError(
            "Export payload must be an estimate or estimator input.",
            details={"type": type(payload).__name__},
        )

    wrapped = payload.get("estimateData")
    if isinstance(wrapped, (Mapping, EstimateResult)):
        return resolve_estimate_data(wrapped)

    if any(key in payload for key in ESTIMATE_KEYS):
        return dict(payload)

    if any(key in payload for key in RAW_INPUT_KEYS):
        # 순환 참조를 피하기 위해 함수 안에서 import 합니다.
        from app.services.estimator import create_estimate
        return create_estimate(payload).to_dict()

    return dict(payload)


def _value_or_na(value: Any) -> str:
    return "N/A" if value is None else format_number(value)


def _amount_line(label: str, value: Any, currency: str) -> str:
    return f"{label}: {_value_or_na(value)} {currency}".strip()


def to_document_text(estimate: Mapping) -> str:
    """추정 결과 딕셔너리를 평문 문서로 변환."""
    summary = estimate.get("normalizedInput") or estimate.get("input") or estimate
    if not isinstance(summary, Mapping):
        summary = {}

    description = summary.get("projectDescription") or "N/A"
    deadline = summary.get("deadline") or "N/A"
    budget = summary.get("budget") if isinstance(summary.get("budget"), Mapping) else {}
    budget_text = f"{_value_or_na(budget.get('amount'))} {budget.get('currency') or ''}".strip()

    task_breakdown = "\n".join(
        f"- {task.get('task')} ({_value_or_na(task.get('estimatedHours'))}h): {task.get('description')}"
        for task in estimate.get("taskBreakdown") or []
        if isinstance(task, Mapping)
    )

    timeline = "\n".join(
        f"- {item.get('date')}: {item.get('milestone')}"
        for item in estimate.get("timeline") or []
        if isinstance(item, Mapping)
    )

    cost = estimate.get("costEstimate") if isinstance(estimate.get("costEstimate"), Mapping) else {}
    currency = cost.get("currency") or ""

    risks = "\n".join(
        f"- [{str(risk.get('severity') or '').upper()}] {risk.get('issue')} | Mitigation: {risk.get('mitigation')}"
        for risk in estimate.get("riskFlags") or []
        if isinstance(risk, Mapping)
    )

    proposal = (
        estimate.get("proposalMarkdown")
        or estimate.get("proposalPlainText")
        or estimate.get("proposalDraft")
        or "N/A"
    )

    return "\n".join([
        "Project Estimate Export",
        "",
        "Project Overview",
        f"Description: {description}",
        f"Deadline: {deadline}",
        f"Budget: {budget_text}",
        "",
        "Task Breakdown",
        task_breakdown or "- N/A",
        "",
        "Timeline",
        timeline or "- N/A",
        "",
        "Cost Estimate",
        _amount_line("Subtotal", cost.get("subtotal"), currency),
        _amount_line("Contingency", cost.get("contingency"), currency),
        _amount_line("Total", cost.get("total"), currency),
        "",
        "Risk Flags",
        risks or "- N/A",
        "",
        "Proposal",
        str(proposal),
    ])


def normalize_text(text: Any) -> str:
    """
    내보내기용 텍스트 정규화.

    - CRLF / CR → LF
    - 탭, 줄바꿈, 출력 가능한 ASCII 외 모든 문자 → "?"
    """
    normalized = _LINE_BREAKS.sub("\n", str(text or ""))
    return _NON_PRINTABLE.sub("?", normalized)
