"""
성적표 → (1) GPA 시뮬레이터 입력, (2) course_grades 저장 행 변환

두 변환 모두 부작용이 없는 순수 함수입니다.
"""
from typing import Any, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from ...config.constants import (
    DEFAULT_MAX_CREDITS,
    DEFAULT_PLANNED_CREDITS,
    DEFAULT_PROGRAM_TERMS,
    DEFAULT_SCALE_MAX,
)
from ...config.logging_config import setup_logger
from ...models import (
    FutureTermSpec,
    PersistenceRow,
    ProjectionInputPayload,
    SubjectRecord,
    TranscriptRecord,
)
from ..errors import InvalidPlanError
from .aggregator import aggregate_semesters
from .grade_scale import map_grade_to_point, normalize_grade_token
from .semester_label import normalize_semester
from .sequencer import build_history, sequence_semesters

logger = setup_logger('projector')

SubjectsInput = Union[TranscriptRecord, Iterable[SubjectRecord]]


def _subjects_of(source: SubjectsInput) -> List[SubjectRecord]:
    if isinstance(source, TranscriptRecord):
        return list(source.subjects)
    return list(source or [])


def default_future_terms(past_term_count: int) -> List[FutureTermSpec]:
    """기본 미래 학기 생성 (4년제 8학기 가정, 남은 학기마다 18학점 / 최대 21학점)"""
    remaining = max(0, DEFAULT_PROGRAM_TERMS - past_term_count)
    return [
        FutureTermSpec(
            id=f"S{past_term_count + i + 1}",
            type="regular",
            planned_credits=DEFAULT_PLANNED_CREDITS,
            max_credits=DEFAULT_MAX_CREDITS,
        )
        for i in range(remaining)
    ]


def validate_plan(target_gpa: float, target_total_credits: float, scale_max: float) -> None:
    """시뮬레이터 호출 전에 목표값 검증"""
    if scale_max is None or scale_max <= 0:
        raise InvalidPlanError(f"만점(scale_max)은 0보다 커야 합니다: {scale_max}")
    if target_gpa is None or target_gpa <= 0:
        raise InvalidPlanError(f"목표 GPA는 0보다 커야 합니다: {target_gpa}")
    if target_gpa > scale_max:
        raise InvalidPlanError(
            f"목표 GPA({target_gpa})가 만점({scale_max})을 초과합니다"
        )
    if target_total_credits is None or target_total_credits < 1:
        raise InvalidPlanError(f"목표 총 학점은 1 이상이어야 합니다: {target_total_credits}")


def _parse_future_terms(future_terms: Sequence[Any]) -> List[FutureTermSpec]:
    try:
        return [
            term if isinstance(term, FutureTermSpec) else FutureTermSpec.model_validate(term)
            for term in future_terms
        ]
    except ValidationError as e:
        raise InvalidPlanError(f"미래 학기 형식이 올바르지 않습니다: {e}") from e


def to_projection_input(
    source: SubjectsInput,
    target_gpa: float,
    target_total_credits: float,
    scale_max: float = DEFAULT_SCALE_MAX,
    future_terms: Optional[Sequence[Any]] = None,
) -> ProjectionInputPayload:
    """
    성적표를 GPA 시뮬레이션 입력 형식으로 변환

    Raises:
        InvalidPlanError: 목표 GPA가 만점을 초과하는 등 계획이 잘못된 경우
    """
    validate_plan(target_gpa, target_total_credits, scale_max)

    subjects = _subjects_of(source)
    sequenced = sequence_semesters(aggregate_semesters(subjects))
    history = build_history(sequenced)

    if future_terms is None:
        terms = default_future_terms(len(history))
    else:
        terms = _parse_future_terms(future_terms)

    payload = ProjectionInputPayload(
        scale_max=scale_max,
        target_gpa=target_gpa,
        target_total_credits=target_total_credits,
        history=history,
        terms=terms,
    )

    logger.info(
        f"시뮬레이션 입력 변환 완료 - 과거 학기: {len(history)}, 미래 학기: {len(terms)}, "
        f"목표 GPA: {target_gpa}, 목표 총 학점: {target_total_credits}"
    )
    return payload


def to_persistence_row(
    subject: SubjectRecord,
    parent_id: Optional[str] = None,
    owner_id: Optional[str] = None,
) -> PersistenceRow:
    key = normalize_semester(subject.semester)
    return PersistenceRow(
        transcript_id=parent_id,
        user_id=owner_id,
        course_name=subject.name or "",
        course_code=None,  # OCR에서 추출 불가
        credits=subject.credits or None,
        grade=normalize_grade_token(subject.grade),
        grade_point=map_grade_to_point(subject.grade),
        semester=key.label,
        year=key.year,
        course_type=subject.course_type or "",
        professor=None,  # OCR에서 추출 불가
    )


def to_persistence_rows(
    source: SubjectsInput,
    parent_id: Optional[str] = None,
    owner_id: Optional[str] = None,
) -> List[PersistenceRow]:
    """과목마다 course_grades 행 1개 (학기 집계와 무관)"""
    return [to_persistence_row(subject, parent_id, owner_id) for subject in _subjects_of(source)]
