"""
FastAPI 메인 애플리케이션
성적표 분석 / GPA 시뮬레이션 백엔드 서버
"""
import traceback

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import get_settings
from .config.logging_config import setup_logger
from .routers import gpa, transcripts

settings = get_settings()
logger = setup_logger('main', settings.LOG_LEVEL)

# FastAPI 앱 생성
app = FastAPI(
    title="유니그레이드 API",
    description="성적표 분석 및 GPA 시뮬레이션 백엔드",
    version="1.0.0",
)

# CORS 설정 (프론트엔드 연결)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:5173",
        "http://localhost:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 라우터 등록
app.include_router(transcripts.router, prefix="/api/transcripts", tags=["성적표"])
app.include_router(gpa.router, prefix="/api/gpa", tags=["GPA 시뮬레이션"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """요청 형식 오류는 400으로 반환"""
    return JSONResponse(status_code=400, content={"detail": jsonable_errors(exc)})


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """미처리 예외 시에도 JSON 반환해 프론트에서 detail 표시 가능하도록"""
    logger.error(f"❌ [전역 예외] {exc}\n{traceback.format_exc()}")
    if isinstance(exc, HTTPException):
        detail = exc.detail if exc.detail is not None and str(exc.detail).strip() else "오류"
        return JSONResponse(status_code=exc.status_code, content={"detail": detail})
    detail = str(exc).strip() if str(exc) else "서버 오류 (원인 미상)"
    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/api/health")
async def health_check():
    """헬스 체크"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "unigrade.main:app",
        host="0.0.0.0",
        port=settings.BACKEND_PORT,
        reload=True,
    )
