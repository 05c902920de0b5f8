"""
프로젝트 추정 API입니다.
설명/예산/마감일을 받아 작업 분해, 일정, 비용, 리스크, 제안서를 반환합니다.
"""

from typing import Any

from fastapi import APIRouter, Body

from app.services.estimator import create_estimate
from app.utils.validation import validate_estimate_input

router = APIRouter()


@router.post("")
def estimate(body: Any = Body(...)) -> dict:
    """
    추정 생성 API.

    요청 예시:
        {"projectDescription": "...", "budget": {"amount": 18000, "currency": "USD"}, "deadline": "2030-06-15"}

    응답에는 요청 원문(input)과 EstimateResult 필드가 함께 포함됩니다.
    """
    validate_estimate_input(body)
    result = create_estimate(body)

    return {
        "input": {
            "projectDescription": body["projectDescription"],
            "budget": body["budget"],
            "deadline": body["deadline"],
        },
        **result.to_dict(),
    }
