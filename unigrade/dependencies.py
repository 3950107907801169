"""
서비스 객체 생성 (FastAPI Depends)

설정값은 여기서만 읽고 각 서비스에는 명시적으로 전달합니다.
테스트에서는 app.dependency_overrides로 교체합니다.
"""
from functools import lru_cache

from .config import get_settings
from .services.extraction_service import GeminiTranscriptExtractor
from .services.gpa_simulator import GpaSimulatorClient
from .services.persistence import RowWriteMode, TranscriptPersistenceCoordinator, TranscriptReader
from .services.supabase_client import SupabaseTranscriptStore
from .services.transcript_service import TranscriptService


@lru_cache()
def get_gpa_simulator() -> GpaSimulatorClient:
    return GpaSimulatorClient.from_settings(get_settings())


@lru_cache()
def get_transcript_service() -> TranscriptService:
    settings = get_settings()
    store = SupabaseTranscriptStore.from_settings(settings)
    return TranscriptService(
        extractor=GeminiTranscriptExtractor.from_settings(settings),
        coordinator=TranscriptPersistenceCoordinator(
            store, write_mode=RowWriteMode(settings.COURSE_ROW_WRITE_MODE)
        ),
        reader=TranscriptReader(store),
        simulator=get_gpa_simulator(),
    )
