"""
성적표 정규화 엔진
등급 변환, 학기 정규화, 학기 집계/정렬, 시뮬레이션 입력 및 저장 행 변환
"""

from .grade_scale import NOT_GRADABLE, map_grade_to_point, normalize_grade_token, is_gradable
from .semester_label import normalize_semester, extract_year, canonical_label, semester_sort_key
from .aggregator import aggregate_semesters
from .sequencer import sequence_semesters, build_history
from .projector import (
    default_future_terms,
    validate_plan,
    to_projection_input,
    to_persistence_row,
    to_persistence_rows,
)

__all__ = [
    'NOT_GRADABLE',
    'map_grade_to_point',
    'normalize_grade_token',
    'is_gradable',
    'normalize_semester',
    'extract_year',
    'canonical_label',
    'semester_sort_key',
    'aggregate_semesters',
    'sequence_semesters',
    'build_history',
    'default_future_terms',
    'validate_plan',
    'to_projection_input',
    'to_persistence_row',
    'to_persistence_rows',
]
