"""
학기별 과목 그룹화 및 학점 가중 평균 계산
"""
from typing import Dict, Iterable

from ...models import SemesterAggregate, SemesterKey, SubjectRecord
from .grade_scale import map_grade_to_point, NOT_GRADABLE
from .semester_label import normalize_semester


def aggregate_semesters(subjects: Iterable[SubjectRecord]) -> Dict[SemesterKey, SemesterAggregate]:
    """
    과목을 학기 키별로 묶어 학점/평점 합계 계산

    - 모든 과목은 course_count에 포함
    - 평점이 있는 등급이고 학점 > 0인 과목만 total_credits, weighted_point_sum에 합산
      (P/NP/S/U 과목이 학기 평균을 끌어내리거나 올리지 않도록)

    Returns:
        학기 키 → SemesterAggregate (처음 등장한 순서 유지)
    """
    aggregates: Dict[SemesterKey, SemesterAggregate] = {}

    for subject in subjects:
        key = normalize_semester(subject.semester)
        aggregate = aggregates.get(key)
        if aggregate is None:
            aggregate = SemesterAggregate(key=key)
            aggregates[key] = aggregate

        aggregate.course_count += 1

        point = map_grade_to_point(subject.grade)
        if point is NOT_GRADABLE or not subject.credits or subject.credits <= 0:
            continue
        aggregate.total_credits += subject.credits
        aggregate.weighted_point_sum += subject.credits * point

    return aggregates
