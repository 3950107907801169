"""
학기 라벨 정규화

지원 형식:
    - "2019학년도 1학기", "2019 학년도 2 학기"
    - "2019년 1학기", "2019년도 1학기"
    - "2019-1", "2019.2", "2019/1"

모두 SemesterKey(year=2019, term=1)로 변환되며, key.label은 "2019-1"입니다.
"""
import re
from typing import Optional, Tuple

from ...config.constants import MAX_SEMESTER_YEAR, MIN_SEMESTER_YEAR
from ...models import SemesterKey

_YEAR = re.compile(r"(?<!\d)(\d{4})(?!\d)")
_LONG_FORM = re.compile(r"(\d{4})\s*(?:학년도|년도|년)\s*(\d{1,2})\s*학기")
_SHORT_FORM = re.compile(r"^(\d{4})\s*[-./]\s*(\d{1,2})$")


def extract_year(label: Optional[str]) -> Optional[int]:
    """라벨의 첫 4자리 숫자를 연도로 추출 (1900~2100 범위 밖이면 None)"""
    if not label:
        return None
    match = _YEAR.search(label)
    if not match:
        return None
    year = int(match.group(1))
    if MIN_SEMESTER_YEAR <= year <= MAX_SEMESTER_YEAR:
        return year
    return None


def _extract_term(label: str) -> Optional[int]:
    for pattern in (_LONG_FORM, _SHORT_FORM):
        match = pattern.search(label)
        if match:
            return int(match.group(2))
    return None


def normalize_semester(label: Optional[str]) -> SemesterKey:
    """
    학기 라벨을 (연도, 학기) 키로 정규화

    연도나 학기를 읽지 못하면 원본 라벨(공백 정리)을 fallback_label로 보존합니다.
    정규화된 라벨을 다시 넣어도 같은 키가 나옵니다.
    """
    raw = (label or "").strip()
    year = extract_year(raw)
    term = _extract_term(raw)
    if year is not None and term is not None:
        return SemesterKey(year=year, term=term)
    return SemesterKey(year=year, term=term, fallback_label=raw)


def canonical_label(label: Optional[str]) -> str:
    return normalize_semester(label).label


def semester_sort_key(key: SemesterKey) -> Tuple[bool, int, bool, int]:
    """연도 → 학기 오름차순, 연도 없는 학기는 맨 뒤, 학기 번호 없는 학기는 같은 연도 안에서 뒤"""
    return (
        key.year is None,
        key.year or 0,
        key.term is None,
        key.term or 0,
    )
