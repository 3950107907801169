"""
학기 라벨 정규화 테스트
"""
import pytest

from unigrade.models import SemesterKey
from unigrade.services.transcript.semester_label import (
    canonical_label,
    extract_year,
    normalize_semester,
    semester_sort_key,
)


def test_long_and_short_forms_are_the_same_semester():
    """"2019학년도 1학기" == "2019-1" """
    assert normalize_semester("2019학년도 1학기") == normalize_semester("2019-1")
    assert normalize_semester("2019-1") == SemesterKey(year=2019, term=1)


@pytest.mark.parametrize("label", [
    "2020학년도 2학기",
    "2020 학년도 2 학기",
    "2020년 2학기",
    "2020년도 2학기",
    "2020-2",
    " 2020.2 ",
    "2020/2",
])
def test_supported_formats(label):
    assert normalize_semester(label) == SemesterKey(year=2020, term=2)
    assert canonical_label(label) == "2020-2"


@pytest.mark.parametrize("label", ["2019학년도 1학기", "2019-1", "2023 여름학기", "계절학기", ""])
def test_normalization_is_idempotent(label):
    key = normalize_semester(label)
    assert normalize_semester(key.label) == key


def test_label_without_year_keeps_raw_label():
    key = normalize_semester("  계절학기 ")
    assert key.year is None
    assert key.fallback_label == "계절학기"
    assert normalize_semester("계절학기") == key
    assert normalize_semester("계절학기") != normalize_semester("2019-1")


def test_label_with_year_but_no_term_is_not_merged_with_numbered_term():
    summer = normalize_semester("2023 여름학기")
    assert summer.year == 2023
    assert summer.term is None
    assert summer != normalize_semester("2023-1")
    assert summer != normalize_semester("2023 겨울학기")


def test_two_digit_term_ordinal():
    assert normalize_semester("2020-10") == SemesterKey(year=2020, term=10)


def test_extract_year_takes_first_four_digit_run_in_range():
    assert extract_year("2019학년도 1학기") == 2019
    assert extract_year("학번 20190001 기준") is None
    assert extract_year("1850-1") is None
    assert extract_year("3019-1") is None
    assert extract_year(None) is None


def test_sort_key_orders_year_then_term_and_puts_unknown_last():
    keys = [
        normalize_semester("계절학기"),
        normalize_semester("2021-2"),
        normalize_semester("2021 여름학기"),
        normalize_semester("2020-10"),
        normalize_semester("2021-1"),
        normalize_semester("2020-2"),
    ]
    ordered = [key.label for key in sorted(keys, key=semester_sort_key)]
    assert ordered == ["2020-2", "2020-10", "2021-1", "2021-2", "2021 여름학기", "계절학기"]


def test_year_suffix_variants_merge():
    assert normalize_semester("2019년도 1학기") == normalize_semester("2019학년도 1학기")
    assert canonical_label("2019년도 1학기") == "2019-1"
