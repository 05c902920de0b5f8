"""
헬스 체크(Health Check) 엔드포인트입니다.
서버가 살아서 정상적으로 응답하는지 확인하는 용도입니다.
"""

from fastapi import APIRouter

from app.config import get_settings

router = APIRouter()


@router.get("")
async def health_check():
    """
    기본 상태 확인 함수.
    서버가 켜져 있으면 {"status": "ok"}를 반환합니다.
    """
    return {"status": "ok"}


@router.get("/detail")
async def health_check_detail():
    """
    상세 상태 확인 함수.
    비밀값이 아닌 현재 설정 정보도 같이 보여줍니다.
    """
    settings = get_settings()
    return {
        "status": "ok",
        "config": {
            "team_velocity_hours_per_week": settings.team_velocity_hours_per_week,
            "custom_proposal_template": bool(settings.proposal_template_path),
            "simulate_malformed_model_output": settings.simulate_malformed_model_output,
        }
    }
