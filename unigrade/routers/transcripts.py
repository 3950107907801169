"""
성적표 API 라우터
PDF 업로드/분석, 시뮬레이션 입력 변환, 조회/삭제
"""
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from ..config.constants import DEFAULT_SCALE_MAX, MAX_FILE_SIZE_BYTES, MAX_FILE_SIZE_MB
from ..dependencies import get_transcript_service
from ..models import TranscriptRecord
from ..services.errors import (
    ComputationError,
    ComputationUnavailable,
    ExtractionFailure,
    StoreError,
    TargetImpossibleError,
    ValidationFailure,
)
from ..services.transcript_service import TranscriptService

router = APIRouter()


class ConvertRequest(BaseModel):
    """성적표 → 시뮬레이션 입력 변환 요청"""
    transcriptData: TranscriptRecord
    targetGpa: float = Field(..., description="목표 GPA")
    targetTotalCredits: float = Field(..., description="목표 총 학점")
    scaleMax: Optional[float] = Field(None, description="만점 (기본 4.5)")
    futureTerms: Optional[List[Dict[str, Any]]] = Field(None, description="미래 학기 계획 (없으면 8학기 기준 자동 생성)")


@router.post("/upload")
async def upload_transcript(
    file: UploadFile = File(...),
    user_id: Optional[str] = Form(None),
    service: TranscriptService = Depends(get_transcript_service),
):
    """
    PDF 성적표 업로드

    1. Gemini로 PDF 분석 (학생 정보 + 과목별 성적)
    2. transcripts / course_grades 테이블에 저장
    """
    if file.content_type != "application/pdf":
        raise HTTPException(400, "PDF 파일만 업로드 가능합니다.")

    file_bytes = await file.read()
    if not file_bytes:
        raise HTTPException(400, "파일이 없습니다.")
    if len(file_bytes) > MAX_FILE_SIZE_BYTES:
        raise HTTPException(400, f"파일 크기는 {MAX_FILE_SIZE_MB}MB 이하여야 합니다.")

    try:
        return await service.analyze_transcript(file_bytes, file.filename, user_id)
    except ExtractionFailure as e:
        return {
            "success": False,
            "error": str(e) or "OCR 분석 실패",
            "raw_result": e.raw_result,
        }


@router.post("/convert-to-simulation")
async def convert_to_simulation(
    request: ConvertRequest,
    service: TranscriptService = Depends(get_transcript_service),
):
    """성적표를 GPA 시뮬레이션 입력 형식으로 변환"""
    try:
        payload = service.convert_to_simulation(
            request.transcriptData,
            request.targetGpa,
            request.targetTotalCredits,
            scale_max=DEFAULT_SCALE_MAX if request.scaleMax is None else request.scaleMax,
            future_terms=request.futureTerms,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"success": True, "data": payload.to_wire()}


@router.post("/simulate")
async def simulate_transcript(
    request: ConvertRequest,
    service: TranscriptService = Depends(get_transcript_service),
):
    """성적표 변환 후 GPA 시뮬레이터 호출"""
    try:
        results = await service.simulate_transcript(
            request.transcriptData,
            request.targetGpa,
            request.targetTotalCredits,
            scale_max=DEFAULT_SCALE_MAX if request.scaleMax is None else request.scaleMax,
            future_terms=request.futureTerms,
        )
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=str(e))
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
            content={"success": False, "error": "SERVICE_UNAVAILABLE", "message": str(e)},
        )
    except ComputationError as e:
        error = "INVALID_INPUT" if e.status_code == 400 else "SERVER_ERROR"
        return {"success": False, "error": error, "message": str(e)}

    return {"success": True, "data": results}


@router.get("/{user_id}")
async def get_transcript(
    user_id: str,
    service: TranscriptService = Depends(get_transcript_service),
):
    """저장된 성적표 조회"""
    try:
        transcript = await service.get_transcript(user_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"성적표 조회 실패: {str(e)}")

    if transcript is None:
        raise HTTPException(status_code=404, detail="성적표를 찾을 수 없습니다")
    return {"success": True, "data": transcript.model_dump(by_alias=True)}


@router.delete("/{user_id}")
async def delete_transcript(
    user_id: str,
    service: TranscriptService = Depends(get_transcript_service),
):
    """저장된 성적표 삭제"""
    try:
        deleted = await service.delete_transcript(user_id)
    except StoreError as e:
        raise HTTPException(status_code=500, detail=f"성적표 삭제 실패: {str(e)}")
    return {"success": True, "deleted": deleted}
