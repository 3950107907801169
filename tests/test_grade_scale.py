"""
등급 → 평점 변환 테스트
"""
import pytest

from unigrade.services.transcript.grade_scale import (
    NOT_GRADABLE,
    is_gradable,
    map_grade_to_point,
    normalize_grade_token,
)


@pytest.mark.parametrize("token, point", [
    ("A+", 4.5),
    ("A", 4.0),
    ("A-", 3.7),
    ("B+", 3.5),
    ("B", 3.0),
    ("C-", 1.7),
    ("D+", 1.5),
    ("D-", 0.7),
    ("F", 0.0),
])
def test_letter_grades_on_4_5_scale(token, point):
    assert map_grade_to_point(token) == point


def test_zero_suffix_grades_share_one_table():
    """A0/B0/C0/D0 표기는 A/B/C/D와 같은 평점"""
    for letter in "ABCD":
        assert map_grade_to_point(f"{letter}0") == map_grade_to_point(letter)
    assert normalize_grade_token("a0") == "A"


def test_case_and_whitespace_are_ignored():
    assert map_grade_to_point("  b+ ") == 3.5
    assert map_grade_to_point("a0\n") == 4.0


@pytest.mark.parametrize("token", ["P", "NP", "S", "U", "np"])
def test_pass_fail_marks_are_not_gradable(token):
    """P/NP/S/U는 0점이 아니라 평점 계산 제외"""
    assert map_grade_to_point(token) is NOT_GRADABLE
    assert not is_gradable(token)


@pytest.mark.parametrize("token", ["", None, "W", "A++", "E"])
def test_unknown_tokens_fail_open(token):
    assert map_grade_to_point(token) is NOT_GRADABLE


def test_f_is_gradable_zero():
    assert is_gradable("F")
    assert map_grade_to_point("F") == 0.0
