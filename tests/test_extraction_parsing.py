"""
Gemini 응답 파싱 테스트
"""
import json

import pytest

from unigrade.models import SubjectRecord
from unigrade.services.errors import ExtractionFailure
from unigrade.services.extraction_service import parse_transcript_json
from unigrade.services.transcript.projector import to_projection_input


RAW = (
    '{"university":"한국대학교","student_name":"홍길동","student_id":"20210001",'
    '"major":"컴퓨터공학과","double_major":null,"minor":null,'
    '"subjects":[{"name":"자료구조","credits":3,"grade":"A0","type":"전공","semester":"2021-2"},'
    '{"name":"채플","credits":"1","grade":"P","type":"교양","semester":"2021-1"}],'
    '"total_credits":4,"gpa":4.0}'
)


def test_parse_plain_json():
    record = parse_transcript_json(RAW)

    assert record.university == "한국대학교"
    assert record.double_major is None
    assert len(record.subjects) == 2
    assert record.subjects[0].course_type == "전공"
    assert record.subjects[1].credits == 1.0
    assert record.gpa == 4.0


def test_parse_strips_code_fence():
    record = parse_transcript_json(f"```json\n{RAW}\n```")
    assert record.student_name == "홍길동"


def test_invalid_json_keeps_raw_result():
    with pytest.raises(ExtractionFailure) as exc_info:
        parse_transcript_json("성적표를 읽을 수 없습니다")

    assert exc_info.value.raw_result == "성적표를 읽을 수 없습니다"


def test_non_object_json_is_rejected():
    with pytest.raises(ExtractionFailure):
        parse_transcript_json("[1, 2, 3]")


def test_missing_fields_default_to_empty():
    record = parse_transcript_json('{"subjects": null, "gpa": "N/A"}')

    assert record.university == ""
    assert record.subjects == []
    assert record.gpa == 0


@pytest.mark.parametrize("credits, expected", [
    (3, 3.0),
    ("2.5", 2.5),
    (" 3 ", 3.0),
    ("삼", None),
    (None, None),
])
def test_subject_credits_coercion(credits, expected):
    subject = SubjectRecord.model_validate({"name": "과목", "credits": credits, "grade": "A"})
    assert subject.credits == expected


def test_subject_null_strings_become_empty():
    subject = SubjectRecord.model_validate({"name": None, "grade": None, "type": None, "semester": None})

    assert subject.name == ""
    assert subject.grade == ""
    assert subject.course_type == ""
    assert subject.semester == ""


@pytest.mark.parametrize("credits", ["nan", "inf", "-inf", float("nan"), float("inf")])
def test_non_finite_credits_are_missing(credits):
    subject = SubjectRecord.model_validate({"name": "과목", "credits": credits, "grade": "A"})
    assert subject.credits is None


def test_nan_literal_in_response_does_not_reach_semester_totals():
    """JSON NaN 학점 과목은 제외하고 같은 학기의 정상 과목은 그대로 집계"""
    record = parse_transcript_json(
        '{"subjects":[{"name":"오류","credits":NaN,"grade":"A","semester":"2023-1"},'
        '{"name":"정상","credits":3,"grade":"B","semester":"2023-1"}],"gpa":NaN}'
    )

    payload = to_projection_input(record, target_gpa=4.0, target_total_credits=130)

    assert record.subjects[0].credits is None
    assert record.gpa == 0
    assert payload.history[0].credits == 3
    assert payload.history[0].achieved_avg == 3.0
    json.dumps(payload.to_wire(), allow_nan=False)
