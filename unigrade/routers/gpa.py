"""
GPA 시뮬레이터 API 라우터
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import List, Literal, Optional

from ..config.logging_config import setup_logger
from ..dependencies import get_gpa_simulator
from ..services.errors import (
    ComputationInvalidInput,
    ComputationUnavailable,
    TargetImpossibleError,
    ValidationFailure,
)
from ..services.gpa_simulator import GpaSimulatorClient
from ..services.transcript.projector import validate_plan

router = APIRouter()
logger = setup_logger('gpa_router')


class HistoryItem(BaseModel):
    term_id: str
    credits: float = Field(..., ge=0.1)
    achieved_avg: float = Field(..., ge=0)


class TermItem(BaseModel):
    id: str
    type: Literal["regular", "summer"]
    planned_credits: float = Field(..., ge=0.1)
    max_credits: Optional[float] = Field(None, ge=0.1)


class SimulationRequest(BaseModel):
    """시뮬레이션 입력 (시뮬레이터 JSON 규격 그대로)"""
    scale_max: float = Field(..., ge=0.1)
    G_t: float = Field(..., ge=0.1, le=5.0, description="목표 GPA")
    C_tot: float = Field(..., ge=1, description="목표 총 학점")
    history: List[HistoryItem]
    terms: List[TermItem]


@router.get("/health")
async def health_check(simulator: GpaSimulatorClient = Depends(get_gpa_simulator)):
    """시뮬레이터 헬스 체크"""
    is_healthy = await simulator.health_check()
    return {
        "service": "GPA Simulator",
        "status": "healthy" if is_healthy else "unhealthy",
    }


@router.post("/simulate")
async def simulate(
    request: SimulationRequest,
    simulator: GpaSimulatorClient = Depends(get_gpa_simulator),
):
    """
    GPA 시뮬레이션

    남은 학기별로 목표 GPA 달성에 필요한 평균(required_avg)을 반환합니다.
    """
    try:
        validate_plan(request.G_t, request.C_tot, request.scale_max)
        results = await simulator.simulate(request.model_dump(exclude_none=True))
        return {
            "success": True,
            "data": results,
            "message": "시뮬레이션이 완료되었습니다",
        }

    except (ValidationFailure, ComputationInvalidInput) as e:
        return {
            "success": False,
            "error": "INVALID_INPUT",
            "message": str(e),
        }
    except TargetImpossibleError as e:
        return {
            "success": False,
            "error": "TARGET_IMPOSSIBLE",
            "message": "목표 GPA를 달성할 수 없습니다. 목표를 낮추거나 계절학기를 추가하세요.",
            "detail": str(e),
        }
    except ComputationUnavailable as e:
        return JSONResponse(
            status_code=503,
            content={
                "success": False,
                "error": "SERVICE_UNAVAILABLE",
                "message": str(e),
            },
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"시뮬레이션 처리 오류: {e}")
        return {
            "success": False,
            "error": "SERVER_ERROR",
            "message": "시뮬레이션 중 오류가 발생했습니다.",
        }
