"""
성적 등급 → 평점 변환 (4.5 만점)
"""
import re
from typing import Optional

from ...config.constants import GRADE_POINTS, NON_GRADABLE_MARKS

# 평점 계산 불가 (P/NP/S/U, 알 수 없는 등급)
NOT_GRADABLE = None

# "A0", "b0" → "A", "B" (등급 뒤 0 표기 통일)
_ZERO_SUFFIX = re.compile(r"^([ABCD])0$")


def normalize_grade_token(token: Optional[str]) -> str:
    """공백 제거 + 대문자 + A0/B0/C0/D0 → A/B/C/D"""
    if not token:
        return ""
    normalized = str(token).strip().upper()
    match = _ZERO_SUFFIX.match(normalized)
    if match:
        return match.group(1)
    return normalized


def map_grade_to_point(token: Optional[str]) -> Optional[float]:
    """
    등급을 평점으로 변환

    Returns:
        평점 (float) 또는 NOT_GRADABLE (None)
        P/NP/S/U와 표에 없는 등급은 0점이 아니라 NOT_GRADABLE
    """
    grade = normalize_grade_token(token)
    if grade in NON_GRADABLE_MARKS:
        return NOT_GRADABLE
    return GRADE_POINTS.get(grade, NOT_GRADABLE)


def is_gradable(token: Optional[str]) -> bool:
    return map_grade_to_point(token) is not NOT_GRADABLE
