"""
성적표 저장/조회/삭제

저장 순서:
    PENDING_PARENT → PARENT_PERSISTED | PARENT_SKIPPED → ROWS_PERSISTING → COMPLETED

- 성적표(transcripts) 생성이 실패해도 중단하지 않고 transcript_id=None으로 과목만 저장
- batch 모드: 과목 행을 한 번에 insert, 실패하면 전체 행을 실패로 보고
  (DB가 어느 행이 실패했는지 알려주지 않음)
- per_row 모드: 과목마다 insert, 행별로 성공/실패 기록 (왕복 횟수 증가)
- 자동 재시도는 하지 않음
"""
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from ..config.logging_config import setup_logger
from ..models import PersistenceRow, RowFailure, SaveOutcome, SubjectRecord, TranscriptRecord
from .errors import PartialPersistenceFailure, StoreWriteError
from .transcript.projector import to_persistence_rows
from .transcript.semester_label import normalize_semester, semester_sort_key

logger = setup_logger('persistence')


class SaveStage(str, Enum):
    PENDING_PARENT = "pending_parent"
    PARENT_PERSISTED = "parent_persisted"
    PARENT_SKIPPED = "parent_skipped"
    ROWS_PERSISTING = "rows_persisting"
    COMPLETED = "completed"


class RowWriteMode(str, Enum):
    BATCH = "batch"
    PER_ROW = "per_row"


class TranscriptStore(Protocol):
    async def insert_transcript(self, data: Dict[str, Any]) -> str: ...

    async def insert_course_rows(self, rows: List[Dict[str, Any]]) -> None: ...

    async def find_latest_transcript(self, user_id: str) -> Optional[Dict[str, Any]]: ...

    async def fetch_course_rows(
        self,
        transcript_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]: ...

    async def delete_user_transcripts(self, user_id: str) -> int: ...


def _advance(current: SaveStage, nxt: SaveStage) -> SaveStage:
    logger.debug(f"저장 단계: {current.value} → {nxt.value}")
    return nxt


def build_transcript_row(owner_id: Optional[str], transcript: TranscriptRecord) -> Dict[str, Any]:
    """transcripts 테이블 insert 데이터"""
    return {
        'user_id': owner_id,
        'university': transcript.university or '',
        'major': transcript.major or '',
        'double_major': transcript.double_major or None,
        'minor': transcript.minor or None,
        'student_id': transcript.student_id or '',
        'student_name': transcript.student_name or '',
        'gpa': str(transcript.gpa or 0.0),
    }


class TranscriptPersistenceCoordinator:
    """성적표 + 과목 저장 (부분 실패 허용)"""

    def __init__(self, store: TranscriptStore, write_mode: RowWriteMode = RowWriteMode.BATCH):
        self.store = store
        self.write_mode = RowWriteMode(write_mode)

    async def save_transcript(
        self,
        owner_id: Optional[str],
        transcript: TranscriptRecord,
        strict: bool = False,
    ) -> SaveOutcome:
        """
        성적표 저장 (항상 새로 생성, 기존 행은 수정하지 않음)

        Args:
            owner_id: 호출자가 전달한 사용자 ID (검증하지 않음)
            transcript: 추출된 성적표
            strict: True면 과목 저장 실패 시 PartialPersistenceFailure raise

        Returns:
            SaveOutcome
        """
        stage = SaveStage.PENDING_PARENT
        logger.info(f"성적표 저장 시작: user_id={owner_id}, 과목 {len(transcript.subjects)}개")

        parent_id: Optional[str] = None
        try:
            parent_id = await self.store.insert_transcript(build_transcript_row(owner_id, transcript))
            stage = _advance(stage, SaveStage.PARENT_PERSISTED)
            logger.info(f"성적표 생성 완료, ID: {parent_id}")
        except StoreWriteError as e:
            # 성적표 없이도 과목 데이터는 저장
            stage = _advance(stage, SaveStage.PARENT_SKIPPED)
            logger.warning(f"성적표 생성 실패 (course_grades만 저장): {e}")

        rows = to_persistence_rows(transcript, parent_id, owner_id)
        stage = _advance(stage, SaveStage.ROWS_PERSISTING)

        if self.write_mode == RowWriteMode.PER_ROW:
            failures = await self._save_rows_individually(rows)
        else:
            failures = await self._save_rows_batch(rows)

        stage = _advance(stage, SaveStage.COMPLETED)
        outcome = SaveOutcome(
            success=not failures,
            parent_record_id=parent_id,
            saved_count=len(rows) - len(failures),
            failed_count=len(failures),
            failure_detail=failures,
            stage=stage.value,
        )
        logger.info(f"저장 결과: {outcome.saved_count}개 성공, {outcome.failed_count}개 실패")

        if strict and failures:
            raise PartialPersistenceFailure(outcome)
        return outcome

    async def _save_rows_batch(self, rows: List[PersistenceRow]) -> List[RowFailure]:
        if not rows:
            logger.info("저장할 과목이 없습니다.")
            return []
        try:
            await self.store.insert_course_rows([row.model_dump() for row in rows])
        except StoreWriteError as e:
            logger.error(f"과목 일괄 저장 실패 ({len(rows)}개 전체 실패 처리): {e}")
            return [RowFailure(row=row, cause=str(e)) for row in rows]
        return []

    async def _save_rows_individually(self, rows: List[PersistenceRow]) -> List[RowFailure]:
        failures = []
        for row in rows:
            try:
                await self.store.insert_course_rows([row.model_dump()])
            except StoreWriteError as e:
                logger.warning(f"과목 저장 실패: {row.course_name!r} - {e}")
                failures.append(RowFailure(row=row, cause=str(e)))
        return failures


class TranscriptReader:
    """저장된 행으로 성적표 복원 / 삭제"""

    def __init__(self, store: TranscriptStore):
        self.store = store

    async def get_transcript(self, owner_id: str) -> Optional[TranscriptRecord]:
        """
        사용자의 최신 성적표 조회

        성적표(transcripts)가 없으면 transcript_id 없이 저장된 과목으로 복원합니다.
        과목 순서는 학기 정규화 키 기준 (연도 → 학기 번호).
        """
        parent = await self.store.find_latest_transcript(owner_id)
        if parent is not None:
            rows = await self.store.fetch_course_rows(transcript_id=str(parent['id']))
        else:
            rows = await self.store.fetch_course_rows(user_id=owner_id)
            if not rows:
                return None
            parent = {}

        rows = sorted(rows, key=lambda row: semester_sort_key(normalize_semester(row.get('semester'))))
        subjects = [
            SubjectRecord(
                name=row.get('course_name') or '',
                credits=row.get('credits'),
                grade=row.get('grade') or '',
                course_type=row.get('course_type') or '',
                semester=row.get('semester') or '',
            )
            for row in rows
        ]

        return TranscriptRecord(
            university=parent.get('university') or '',
            student_name=parent.get('student_name') or '',
            student_id=parent.get('student_id') or '',
            major=parent.get('major') or '',
            double_major=parent.get('double_major') or None,
            minor=parent.get('minor') or None,
            subjects=subjects,
            total_credits=sum(subject.credits or 0 for subject in subjects),
            gpa=parent.get('gpa') or 0.0,
        )

    async def delete_transcript(self, owner_id: str) -> int:
        deleted = await self.store.delete_user_transcripts(owner_id)
        logger.info(f"성적표 삭제 완료: user_id={owner_id}, {deleted}건")
        return deleted
