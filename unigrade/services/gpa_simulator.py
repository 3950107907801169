"""
GPA 시뮬레이터 (외부 계산 서버) 클라이언트
"""
import asyncio
import time
from typing import Any, Dict, List, Union

import requests
from pydantic import ValidationError

from ..config import Settings
from ..config.logging_config import setup_logger
from ..models import ProjectionInputPayload, SimulationResult
from .errors import (
    ComputationError,
    ComputationInvalidInput,
    ComputationUnavailable,
    TargetImpossibleError,
)

logger = setup_logger('gpa_simulator')


class GpaSimulatorClient:
    """시뮬레이터 HTTP 호출 (/health, /simulate)"""

    def __init__(self, base_url: str, timeout: float = 5.0, session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> 'GpaSimulatorClient':
        return cls(settings.GPA_SIMULATOR_URL, settings.GPA_SIMULATOR_TIMEOUT)

    async def health_check(self) -> bool:
        try:
            response = await asyncio.to_thread(
                self.session.get, f"{self.base_url}/health", timeout=self.timeout
            )
            data = response.json()
            return isinstance(data, dict) and data.get('status') == 'healthy'
        except (requests.RequestException, ValueError) as e:
            logger.error(f"GPA Simulator health check failed: {e}")
            return False

    async def simulate(
        self,
        payload: Union[ProjectionInputPayload, Dict[str, Any]],
    ) -> List[Dict[str, Any]]:
        """
        시뮬레이션 요청 후 결과를 그대로 반환

        Returns:
            [{"term_id": str, "credits": float, "required_avg": float}, ...]

        Raises:
            ComputationInvalidInput: 400
            TargetImpossibleError: 422
            ComputationError: 그 외 HTTP 오류, 응답 형식 오류
            ComputationUnavailable: 연결 실패/타임아웃
        """
        body = payload.to_wire() if isinstance(payload, ProjectionInputPayload) else payload
        start = time.time()
        logger.info(
            f"GPA simulation request - target_gpa: {body.get('G_t')}, "
            f"total_credits: {body.get('C_tot')}, "
            f"history_terms: {len(body.get('history', []))}, "
            f"remaining_terms: {len(body.get('terms', []))}"
        )

        try:
            response = await asyncio.to_thread(
                self.session.post,
                f"{self.base_url}/simulate",
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Network error connecting to GPA Simulator ({int((time.time() - start) * 1000)}ms): {e}")
            raise ComputationUnavailable("GPA 시뮬레이터 서버에 연결할 수 없습니다") from e

        duration_ms = int((time.time() - start) * 1000)
        if response.status_code >= 400:
            self._raise_for_error(response, duration_ms)

        try:
            results = response.json()
            if not isinstance(results, list):
                raise TypeError(f"list expected, got {type(results).__name__}")
            # 형식만 검증하고 응답은 그대로 반환
            for item in results:
                SimulationResult.model_validate(item)
        except (ValueError, TypeError, ValidationError) as e:
            logger.error(f"Invalid simulation response ({duration_ms}ms): {e}")
            raise ComputationError("시뮬레이터 응답 형식이 올바르지 않습니다", status_code=response.status_code) from e

        logger.info(f"GPA simulation success - duration_ms: {duration_ms}, results_count: {len(results)}")
        return results

    def _raise_for_error(self, response: requests.Response, duration_ms: int) -> None:
        status = response.status_code
        try:
            data = response.json()
            detail = (data.get('detail') if isinstance(data, dict) else data) or 'Unknown error'
        except ValueError:
            detail = response.text or 'Unknown error'

        logger.error(f"Simulation error [{status}] ({duration_ms}ms): {detail}")

        if status == 400:
            raise ComputationInvalidInput(str(detail), status_code=status)
        if status == 422:
            raise TargetImpossibleError(str(detail), status_code=status)
        if status in (502, 503, 504):
            raise ComputationUnavailable("GPA 시뮬레이터 서버에 연결할 수 없습니다")
        raise ComputationError("시뮬레이션 중 오류가 발생했습니다", status_code=status)
