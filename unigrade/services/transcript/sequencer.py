"""
학기 정렬 및 term_id(S1, S2, ...) 부여
"""
from typing import Dict, List, Tuple

from ...models import SemesterAggregate, SemesterKey, SequencedTerm
from .semester_label import semester_sort_key

SequencedSemester = Tuple[SemesterKey, SemesterAggregate, str]


def sequence_semesters(aggregates: Dict[SemesterKey, SemesterAggregate]) -> List[SequencedSemester]:
    """
    학기를 (연도, 학기) 오름차순으로 정렬하고 S1부터 번호 부여

    정렬은 안정 정렬이라 키가 같은 순위면 처음 등장한 순서를 유지합니다.
    """
    ordered = sorted(aggregates.items(), key=lambda item: semester_sort_key(item[0]))
    return [
        (key, aggregate, f"S{index + 1}")
        for index, (key, aggregate) in enumerate(ordered)
    ]


def build_history(sequenced: List[SequencedSemester]) -> List[SequencedTerm]:
    """시뮬레이터 history 배열 생성 (학기 평균은 소수점 2자리)"""
    return [
        SequencedTerm(
            term_id=term_id,
            credits=aggregate.total_credits,
            achieved_avg=round(aggregate.achieved_average, 2),
        )
        for _key, aggregate, term_id in sequenced
    ]
