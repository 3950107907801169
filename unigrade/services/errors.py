"""
서비스 계층 예외 정의
"""
from typing import Optional


class ServiceError(Exception):
    """서비스 계층 예외의 기본 클래스"""


class ExtractionFailure(ServiceError):
    """성적표 PDF 분석/파싱 실패 (재시도하지 않음)"""

    def __init__(self, message: str, raw_result: Optional[str] = None):
        super().__init__(message)
        self.raw_result = raw_result


class ValidationFailure(ServiceError):
    """호출자가 전달한 값이 허용 범위를 벗어남 (외부 호출 전에 거부)"""


class InvalidPlanError(ValidationFailure):
    """목표 GPA/학점/만점 조합이 잘못된 시뮬레이션 계획"""


class ComputationError(ServiceError):
    """GPA 시뮬레이터가 오류 응답을 반환함"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ComputationInvalidInput(ComputationError):
    """시뮬레이터가 입력을 거부함 (400)"""


class TargetImpossibleError(ComputationError):
    """남은 학기로는 목표 GPA 달성 불가 (422)"""


class ComputationUnavailable(ServiceError):
    """GPA 시뮬레이터 연결 불가 또는 타임아웃 (재시도 가능)"""


class StoreError(ServiceError):
    """DB 조회/삭제 실패"""


class StoreWriteError(StoreError):
    """DB insert 실패"""


class PartialPersistenceFailure(ServiceError):
    """과목 저장 일부/전체 실패 (strict 모드에서만 raise)"""

    def __init__(self, outcome):
        super().__init__(
            f"과목 저장 실패: {outcome.failed_count}개 실패, {outcome.saved_count}개 성공"
        )
        self.outcome = outcome
