"""
Gemini 성적표 PDF 분석 서비스
PDF → 학생 정보 + 과목별 성적 JSON
"""
import asyncio
import json
import os
import tempfile
import time
from dataclasses import dataclass, field
from typing import Dict, Optional

import google.generativeai as genai
from pydantic import ValidationError

from ..config import Settings
from ..config.constants import GEMINI_LITE_MODEL
from ..config.logging_config import setup_logger
from ..models import TranscriptRecord
from .errors import ExtractionFailure

logger = setup_logger('extraction')

EXTRACTION_PROMPT = """PDF 성적표에서 학생 정보와 과목별 성적을 추출하세요. 주전공, 복수전공, 부전공을 모두 찾아주세요.
semester는 "2024-1" 형식으로 적어주세요. JSON만 반환:
{"university":"","student_name":"","student_id":"","major":"","double_major":null,"minor":null,"subjects":[{"name":"","credits":0,"grade":"","type":"전공|교양|전필|전선|교필|교선|복수전공|일선","semester":""}],"total_credits":0,"gpa":0.0}"""


def _elapsed_ms(start: float) -> int:
    return int((time.time() - start) * 1000)


@dataclass
class ExtractionResult:
    data: TranscriptRecord
    performance: Dict[str, int] = field(default_factory=dict)


def parse_transcript_json(raw: str) -> TranscriptRecord:
    """
    Gemini 응답 텍스트를 TranscriptRecord로 변환

    Raises:
        ExtractionFailure: JSON이 아니거나 구조가 맞지 않는 경우 (원본 응답 포함)
    """
    text = (raw or "").strip()
    # ```json ... ``` 코드블록 제거
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ExtractionFailure("JSON 파싱 실패", raw_result=raw) from e
    if not isinstance(parsed, dict):
        raise ExtractionFailure("성적표 JSON 구조가 올바르지 않습니다", raw_result=raw)
    try:
        return TranscriptRecord.model_validate(parsed)
    except ValidationError as e:
        raise ExtractionFailure(f"성적표 JSON 구조가 올바르지 않습니다: {e}", raw_result=raw) from e


class GeminiTranscriptExtractor:
    """Gemini를 사용한 성적표 PDF 분석"""

    def __init__(self, api_key: str, model_name: str = GEMINI_LITE_MODEL):
        if not api_key:
            logger.error("GEMINI_API_KEY is not configured")
            raise RuntimeError("GEMINI_API_KEY is not configured")
        genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(model_name)
        logger.info(f"✅ GeminiTranscriptExtractor 초기화 완료: {model_name}")

    @classmethod
    def from_settings(cls, settings: Settings) -> 'GeminiTranscriptExtractor':
        return cls(settings.GEMINI_API_KEY)

    async def extract(self, pdf_bytes: bytes, filename: str) -> ExtractionResult:
        """
        PDF 파일을 Gemini로 분석하여 성적표 데이터 추출

        Args:
            pdf_bytes: PDF 파일 바이트 (디스크에는 임시 파일로만 기록)
            filename: 원본 파일명 (로깅용)

        Returns:
            ExtractionResult (성적표 데이터 + 단계별 소요 시간 ms)

        Raises:
            ExtractionFailure: 업로드/분석/파싱 실패
        """
        start = time.time()
        performance: Dict[str, int] = {}
        logger.info(f"=== PDF 분석 시작: {filename}, 크기: {len(pdf_bytes)} bytes ===")

        tmp_path: Optional[str] = None
        try:
            step = time.time()
            with tempfile.NamedTemporaryFile(delete=False, suffix='.pdf') as tmp_file:
                tmp_file.write(pdf_bytes)
                tmp_path = tmp_file.name
            performance["file_write_time"] = _elapsed_ms(step)

            step = time.time()
            uploaded_file = await asyncio.to_thread(
                genai.upload_file, tmp_path, mime_type='application/pdf'
            )
            performance["upload_time"] = _elapsed_ms(step)
            logger.info(f"⏱️ Gemini 업로드 시간: {performance['upload_time']}ms")

            step = time.time()
            response = await asyncio.to_thread(
                self.model.generate_content,
                [uploaded_file, EXTRACTION_PROMPT],
                generation_config={
                    "response_mime_type": "application/json",
                    "temperature": 0.1,
                    "top_p": 0.9,
                },
            )
            performance["analysis_time"] = _elapsed_ms(step)
            logger.info(f"⏱️ Gemini 분석 시간: {performance['analysis_time']}ms")
            raw = response.text
        except Exception as e:
            logger.error(f"=== OCR 분석 에러 === {e}")
            raise ExtractionFailure(f"성적표 분석 실패: {e}") from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        step = time.time()
        try:
            data = parse_transcript_json(raw)
        except ExtractionFailure:
            logger.error(f"JSON 파싱 실패, 원본 결과: {raw}")
            raise
        performance["json_parse_time"] = _elapsed_ms(step)
        performance["total_time"] = _elapsed_ms(start)

        logger.info(f"⏱️ 전체 처리 시간: {performance['total_time']}ms, 과목 {len(data.subjects)}개")
        return ExtractionResult(data=data, performance=performance)
