"""
성적표 저장 (부분 실패 허용) / 조회 / 삭제 테스트
"""
import asyncio

import pytest

from unigrade.models import TranscriptRecord
from unigrade.services.errors import PartialPersistenceFailure
from unigrade.services.persistence import (
    RowWriteMode,
    SaveStage,
    TranscriptPersistenceCoordinator,
    TranscriptReader,
)

from fakes import FakeTranscriptStore, make_subject


def five_subjects_with_oversized_name():
    subjects = [make_subject(f"과목{i}", 3, "B+", "2022-1") for i in range(4)]
    subjects.append(make_subject("가" * 200, 3, "A", "2022-1"))
    return TranscriptRecord(university="한국대학교", subjects=subjects)


def test_save_parent_and_rows(sample_transcript):
    store = FakeTranscriptStore()
    coordinator = TranscriptPersistenceCoordinator(store)

    outcome = asyncio.run(coordinator.save_transcript("u-1", sample_transcript))

    assert outcome.success is True
    assert outcome.parent_record_id == "t-1"
    assert outcome.saved_count == 5
    assert outcome.failed_count == 0
    assert outcome.stage == SaveStage.COMPLETED.value
    assert store.insert_calls == 1
    assert all(row["transcript_id"] == "t-1" and row["user_id"] == "u-1" for row in store.course_rows)
    assert store.transcripts[0]["user_id"] == "u-1"
    assert store.transcripts[0]["gpa"] == "3.9"


def test_parent_failure_degrades_to_rows_only(sample_transcript):
    """성적표 생성 실패해도 과목은 transcript_id 없이 저장"""
    store = FakeTranscriptStore(fail_parent=True)
    coordinator = TranscriptPersistenceCoordinator(store)

    outcome = asyncio.run(coordinator.save_transcript("u-1", sample_transcript))

    assert outcome.success is True
    assert outcome.parent_record_id is None
    assert outcome.saved_count == 5
    assert all(row["transcript_id"] is None for row in store.course_rows)


def test_rejected_batch_reports_every_row_failed():
    """5개 중 1개가 길이 제약 위반 → 배치 전체 실패 (0 성공 / 5 실패)"""
    store = FakeTranscriptStore(reject_row=lambda row: len(row["course_name"]) > 100)
    coordinator = TranscriptPersistenceCoordinator(store)

    outcome = asyncio.run(coordinator.save_transcript("u-1", five_subjects_with_oversized_name()))

    assert outcome.success is False
    assert outcome.saved_count == 0
    assert outcome.failed_count == 5
    assert len(outcome.failure_detail) == 5
    assert "too long" in outcome.failure_detail[0].cause
    assert store.course_rows == []


def test_per_row_mode_isolates_failures():
    store = FakeTranscriptStore(reject_row=lambda row: len(row["course_name"]) > 100)
    coordinator = TranscriptPersistenceCoordinator(store, write_mode=RowWriteMode.PER_ROW)

    outcome = asyncio.run(coordinator.save_transcript("u-1", five_subjects_with_oversized_name()))

    assert outcome.success is False
    assert outcome.saved_count == 4
    assert outcome.failed_count == 1
    assert outcome.failure_detail[0].row.course_name == "가" * 200
    assert store.insert_calls == 5


def test_write_mode_accepts_setting_string():
    coordinator = TranscriptPersistenceCoordinator(FakeTranscriptStore(), write_mode="per_row")
    assert coordinator.write_mode is RowWriteMode.PER_ROW


def test_strict_mode_raises_with_outcome():
    store = FakeTranscriptStore(reject_row=lambda row: True)
    coordinator = TranscriptPersistenceCoordinator(store)

    with pytest.raises(PartialPersistenceFailure) as exc_info:
        asyncio.run(coordinator.save_transcript("u-1", five_subjects_with_oversized_name(), strict=True))

    assert exc_info.value.outcome.failed_count == 5


def test_empty_subject_list_is_success():
    store = FakeTranscriptStore()
    coordinator = TranscriptPersistenceCoordinator(store)

    outcome = asyncio.run(coordinator.save_transcript("u-1", TranscriptRecord()))

    assert outcome.success is True
    assert outcome.saved_count == 0
    assert outcome.failed_count == 0
    assert store.insert_calls == 0


def test_read_back_orders_by_normalized_semester():
    """학기 번호 10 이상도 숫자 순서로 정렬"""
    store = FakeTranscriptStore()
    transcript = TranscriptRecord(
        student_name="홍길동",
        gpa=3.5,
        subjects=[
            make_subject("C", 3, "A", "2020-10"),
            make_subject("B", 3, "B", "2020학년도 2학기"),
            make_subject("D", 3, "C", "2021-1"),
            make_subject("A", 3, "A", "2019-2"),
        ],
    )
    asyncio.run(TranscriptPersistenceCoordinator(store).save_transcript("u-1", transcript))

    restored = asyncio.run(TranscriptReader(store).get_transcript("u-1"))

    assert [s.name for s in restored.subjects] == ["A", "B", "C", "D"]
    assert [s.semester for s in restored.subjects] == ["2019-2", "2020-2", "2020-10", "2021-1"]
    assert restored.student_name == "홍길동"
    assert restored.gpa == 3.5
    assert restored.total_credits == 12


def test_read_back_without_parent_uses_owner_rows(sample_transcript):
    store = FakeTranscriptStore(fail_parent=True)
    asyncio.run(TranscriptPersistenceCoordinator(store).save_transcript("u-1", sample_transcript))

    restored = asyncio.run(TranscriptReader(store).get_transcript("u-1"))

    assert len(restored.subjects) == 5
    assert restored.university == ""


def test_read_unknown_owner_returns_none():
    assert asyncio.run(TranscriptReader(FakeTranscriptStore()).get_transcript("nobody")) is None


def test_delete_removes_rows_and_parent(sample_transcript):
    store = FakeTranscriptStore()
    asyncio.run(TranscriptPersistenceCoordinator(store).save_transcript("u-1", sample_transcript))

    deleted = asyncio.run(TranscriptReader(store).delete_transcript("u-1"))

    assert deleted == 1
    assert store.transcripts == []
    assert store.course_rows == []
