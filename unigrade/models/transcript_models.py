"""
성적표 데이터 모델

- OCR(Gemini) 추출 결과: SubjectRecord, TranscriptRecord
- 학기 집계: SemesterKey, SemesterAggregate
- GPA 시뮬레이터 입출력: SequencedTerm, FutureTermSpec, ProjectionInputPayload, SimulationResult
- DB 저장: PersistenceRow, SaveOutcome
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SubjectRecord(BaseModel):
    """OCR 결과의 과목 한 줄 (신뢰할 수 없는 입력)"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    credits: Optional[float] = None
    grade: str = ""
    course_type: str = Field("", alias="type", description="전공|교양|전필|전선|교필|교선|복수전공|일선")
    semester: str = Field("", description='"2024-1" 또는 "2024학년도 1학기"')

    @field_validator("name", "grade", "course_type", "semester", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator("credits", mode="before")
    @classmethod
    def parse_credits(cls, v):
        # 숫자로 읽을 수 없는 학점은 누락으로 처리
        if v is None or isinstance(v, bool):
            return None
        try:
            credits = float(str(v).strip())
        except ValueError:
            return None
        # NaN, inf도 누락으로 처리
        if not math.isfinite(credits):
            return None
        return credits


class TranscriptRecord(BaseModel):
    """OCR 프롬프트 응답 구조 (성적표 전체)"""

    university: str = ""
    student_name: str = ""
    student_id: str = ""
    major: str = ""
    double_major: Optional[str] = None
    minor: Optional[str] = None
    subjects: List[SubjectRecord] = Field(default_factory=list)
    total_credits: float = 0
    gpa: float = 0.0

    @field_validator("university", "student_name", "student_id", "major", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator("subjects", mode="before")
    @classmethod
    def none_to_list(cls, v):
        return v or []

    @field_validator("total_credits", "gpa", mode="before")
    @classmethod
    def parse_number(cls, v):
        try:
            number = float(v)
        except (TypeError, ValueError):
            return 0
        return number if math.isfinite(number) else 0


@dataclass(frozen=True)
class SemesterKey:
    """
    학기 정규화 키

    연도/학기를 모두 읽은 경우 fallback_label은 None,
    어느 하나라도 못 읽으면 원본 라벨을 fallback_label로 보존해 같은 라벨끼리만 묶습니다.
    """
    year: Optional[int]
    term: Optional[int]
    fallback_label: Optional[str] = None

    @property
    def label(self) -> str:
        if self.fallback_label is not None:
            return self.fallback_label
        return f"{self.year}-{self.term}"


@dataclass
class SemesterAggregate:
    key: SemesterKey
    total_credits: float = 0.0
    weighted_point_sum: float = 0.0
    course_count: int = 0

    @property
    def achieved_average(self) -> float:
        if self.total_credits > 0:
            return self.weighted_point_sum / self.total_credits
        return 0.0


class SequencedTerm(BaseModel):
    """시뮬레이터 history 항목"""
    term_id: str
    credits: float
    achieved_avg: float


class FutureTermSpec(BaseModel):
    """시뮬레이터 terms 항목 (앞으로 수강할 학기)"""
    id: str
    type: Literal["regular", "summer"] = "regular"
    planned_credits: float = Field(..., ge=0.1)
    max_credits: Optional[float] = Field(None, ge=0.1)


class ProjectionInputPayload(BaseModel):
    """GPA 시뮬레이터 입력 (JSON 키는 시뮬레이터 규격을 따름)"""
    model_config = ConfigDict(populate_by_name=True)

    scale_max: float
    target_gpa: float = Field(..., alias="G_t")
    target_total_credits: float = Field(..., alias="C_tot")
    history: List[SequencedTerm] = Field(default_factory=list)
    terms: List[FutureTermSpec] = Field(default_factory=list)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SimulationResult(BaseModel):
    term_id: str
    credits: float
    required_avg: float


class PersistenceRow(BaseModel):
    """course_grades 테이블 한 행"""
    transcript_id: Optional[str] = None
    user_id: Optional[str] = None
    course_name: str = ""  # NOT NULL
    course_code: Optional[str] = None
    credits: Optional[float] = None
    grade: str = ""
    grade_point: Optional[float] = None  # P/NP 등은 None
    semester: str = ""
    year: Optional[int] = None
    course_type: str = ""
    professor: Optional[str] = None


class RowFailure(BaseModel):
    row: PersistenceRow
    cause: str


class SaveOutcome(BaseModel):
    """성적표 저장 결과 요약"""
    success: bool
    parent_record_id: Optional[str] = None
    saved_count: int = 0
    failed_count: int = 0
    failure_detail: List[RowFailure] = Field(default_factory=list)
    stage: str = ""

    def to_response(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "transcriptId": self.parent_record_id,
            "saved": self.saved_count,
            "errors": self.failed_count,
        }
