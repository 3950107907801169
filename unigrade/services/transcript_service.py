"""
성적표 서비스
PDF 분석 → DB 저장, 시뮬레이션 입력 변환 및 요청, 조회/삭제
"""
import time
import uuid
from typing import Any, Dict, List, Optional, Sequence

from ..config.constants import DEFAULT_SCALE_MAX
from ..config.logging_config import setup_logger
from ..models import ProjectionInputPayload, TranscriptRecord
from .extraction_service import GeminiTranscriptExtractor
from .gpa_simulator import GpaSimulatorClient
from .persistence import TranscriptPersistenceCoordinator, TranscriptReader
from .transcript.projector import to_projection_input

logger = setup_logger('transcript_service')


class TranscriptService:
    """
    성적표 요청 단위 처리

    외부 의존성(추출기, 저장소, 시뮬레이터)은 모두 생성자로 주입받습니다.
    """

    def __init__(
        self,
        extractor: GeminiTranscriptExtractor,
        coordinator: TranscriptPersistenceCoordinator,
        reader: TranscriptReader,
        simulator: GpaSimulatorClient,
    ):
        self.extractor = extractor
        self.coordinator = coordinator
        self.reader = reader
        self.simulator = simulator

    async def analyze_transcript(
        self,
        pdf_bytes: bytes,
        filename: str,
        user_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        PDF 성적표 분석 후 DB 저장

        저장이 일부/전부 실패해도 추출된 성적표 데이터는 그대로 반환합니다.

        Raises:
            ExtractionFailure: PDF 분석 실패
        """
        logger.info("=== 성적표 분석 시작 ===")

        # 로그인 기능이 없으면 가상의 사용자 ID (UUID) 생성
        final_user_id = user_id or str(uuid.uuid4())
        if not user_id:
            logger.info(f"가상 사용자 ID 생성: {final_user_id}")

        extraction = await self.extractor.extract(pdf_bytes, filename)

        db_start = time.time()
        outcome = await self.coordinator.save_transcript(final_user_id, extraction.data)
        logger.info(f"⏱️ DB 저장 시간: {int((time.time() - db_start) * 1000)}ms")

        data = extraction.data.model_dump(by_alias=True)
        data["user_id"] = final_user_id
        data["db_save_result"] = outcome.to_response()
        return {
            "success": True,
            "data": data,
            "performance": extraction.performance,
        }

    def convert_to_simulation(
        self,
        transcript: TranscriptRecord,
        target_gpa: float,
        target_total_credits: float,
        scale_max: float = DEFAULT_SCALE_MAX,
        future_terms: Optional[Sequence[Any]] = None,
    ) -> ProjectionInputPayload:
        """성적표 → 시뮬레이션 입력 (InvalidPlanError는 그대로 전달)"""
        return to_projection_input(
            transcript,
            target_gpa,
            target_total_credits,
            scale_max=scale_max,
            future_terms=future_terms,
        )

    async def simulate_transcript(
        self,
        transcript: TranscriptRecord,
        target_gpa: float,
        target_total_credits: float,
        scale_max: float = DEFAULT_SCALE_MAX,
        future_terms: Optional[Sequence[Any]] = None,
    ) -> List[Dict[str, Any]]:
        """변환 후 시뮬레이터 호출, 결과는 가공하지 않고 반환"""
        payload = self.convert_to_simulation(
            transcript, target_gpa, target_total_credits, scale_max, future_terms
        )
        return await self.simulator.simulate(payload)

    async def get_transcript(self, user_id: str) -> Optional[TranscriptRecord]:
        return await self.reader.get_transcript(user_id)

    async def delete_transcript(self, user_id: str) -> int:
        return await self.reader.delete_transcript(user_id)
