"""
환경 변수 설정
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Supabase
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""

    # Gemini (성적표 PDF 추출용)
    GEMINI_API_KEY: str = ""

    # GPA 시뮬레이터 (외부 계산 서버)
    GPA_SIMULATOR_URL: str = "http://localhost:8000"
    GPA_SIMULATOR_TIMEOUT: float = 5.0

    # 과목 저장 방식: batch (한 번에 insert) | per_row (과목별 insert)
    COURSE_ROW_WRITE_MODE: str = "batch"

    # Server
    BACKEND_PORT: int = 8000
    FRONTEND_URL: str = "http://localhost:5173"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # .env의 VITE_* 등 미정의 변수 무시


@lru_cache()
def get_settings() -> Settings:
    return Settings()
