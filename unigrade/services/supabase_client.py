"""
Supabase 클라이언트 서비스
transcripts / course_grades 테이블 접근
"""
import asyncio
from typing import Any, Dict, List, Optional

from supabase import create_client, Client

from ..config import Settings
from ..config.logging_config import setup_logger
from .errors import StoreError, StoreWriteError

logger = setup_logger('supabase')

TRANSCRIPTS_TABLE = 'transcripts'
COURSE_GRADES_TABLE = 'course_grades'


class SupabaseTranscriptStore:
    """성적표 저장소 (Supabase)"""

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> 'SupabaseTranscriptStore':
        """설정값으로 Supabase 클라이언트 생성"""
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            logger.error("❌ Missing Supabase environment variables (SUPABASE_URL, SUPABASE_KEY)")
            raise RuntimeError("Missing Supabase environment variables - .env 파일에 환경 변수를 설정해주세요.")
        return cls(create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY))

    async def insert_transcript(self, data: Dict[str, Any]) -> str:
        """transcripts 테이블에 성적표 1건 생성 후 id 반환"""
        try:
            response = await asyncio.to_thread(
                self.client.table(TRANSCRIPTS_TABLE).insert(data).execute
            )
        except Exception as e:
            raise StoreWriteError(f"성적표 생성 실패: {e}") from e

        if not response.data:
            raise StoreWriteError("성적표 생성 실패: 응답에 생성된 행이 없습니다")
        return str(response.data[0]['id'])

    async def insert_course_rows(self, rows: List[Dict[str, Any]]) -> None:
        """course_grades 테이블에 여러 행을 한 번에 insert (부분 성공 여부는 알 수 없음)"""
        if not rows:
            return
        try:
            await asyncio.to_thread(
                self.client.table(COURSE_GRADES_TABLE).insert(rows).execute
            )
        except Exception as e:
            raise StoreWriteError(f"과목 저장 실패: {e}") from e

    async def find_latest_transcript(self, user_id: str) -> Optional[Dict[str, Any]]:
        """사용자의 가장 최근 성적표 조회"""
        try:
            response = await asyncio.to_thread(
                self.client.table(TRANSCRIPTS_TABLE)
                .select('*')
                .eq('user_id', user_id)
                .order('created_at', desc=True)
                .limit(1)
                .execute
            )
        except Exception as e:
            raise StoreError(f"성적표 조회 실패: {e}") from e
        return response.data[0] if response.data else None

    async def fetch_course_rows(
        self,
        transcript_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        과목 행 조회

        transcript_id가 있으면 해당 성적표의 과목, 없으면 성적표와 연결되지 않은 사용자 과목
        """
        query = self.client.table(COURSE_GRADES_TABLE).select('*')
        if transcript_id is not None:
            query = query.eq('transcript_id', transcript_id)
        else:
            query = query.eq('user_id', user_id).is_('transcript_id', 'null')

        try:
            response = await asyncio.to_thread(query.execute)
        except Exception as e:
            raise StoreError(f"과목 데이터 조회 실패: {e}") from e
        return response.data or []

    async def delete_user_transcripts(self, user_id: str) -> int:
        """사용자의 과목 → 성적표 순서로 삭제 (외래키 제약)"""
        try:
            response = await asyncio.to_thread(
                self.client.table(TRANSCRIPTS_TABLE).select('id').eq('user_id', user_id).execute
            )
            transcript_ids = [row['id'] for row in response.data or []]

            await asyncio.to_thread(
                self.client.table(COURSE_GRADES_TABLE).delete().eq('user_id', user_id).execute
            )
            if transcript_ids:
                await asyncio.to_thread(
                    self.client.table(COURSE_GRADES_TABLE)
                    .delete()
                    .in_('transcript_id', transcript_ids)
                    .execute
                )
                await asyncio.to_thread(
                    self.client.table(TRANSCRIPTS_TABLE).delete().eq('user_id', user_id).execute
                )
        except Exception as e:
            raise StoreError(f"성적표 삭제 실패: {e}") from e

        return len(transcript_ids)
