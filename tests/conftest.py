import pytest

from unigrade.models import TranscriptRecord

from fakes import make_subject


@pytest.fixture
def sample_transcript():
    """3개 학기, P 과목과 A0 표기가 섞인 성적표"""
    return TranscriptRecord(
        university="한국대학교",
        student_name="홍길동",
        student_id="20210001",
        major="컴퓨터공학과",
        subjects=[
            make_subject("자료구조", 3, "A0", "2021학년도 2학기"),
            make_subject("미적분학1", 3, "B+", "2021-1"),
            make_subject("대학영어", 2, "A+", "2021학년도 1학기", "교양"),
            make_subject("채플", 1, "P", "2021-1", "교양"),
            make_subject("운영체제", 3, "A-", "2022-1"),
        ],
        total_credits=12,
        gpa=3.9,
    )
