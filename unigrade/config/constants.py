"""
상수 정의
"""

# 파일 업로드 설정
MAX_FILE_SIZE_MB = 10
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

# 4.5 만점 기준 등급 → 평점 (A0/B0/C0/D0 표기는 A/B/C/D로 통일해서 조회)
GRADE_POINTS = {
    "A+": 4.5,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.5,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.5,
    "C": 2.0,
    "C-": 1.7,
    "D+": 1.5,
    "D": 1.0,
    "D-": 0.7,
    "F": 0.0,
}

# 평점 계산에서 제외되는 성적 (Pass/Non-pass, Satisfactory/Unsatisfactory)
NON_GRADABLE_MARKS = {"P", "NP", "S", "U"}

# 학기 연도 허용 범위
MIN_SEMESTER_YEAR = 1900
MAX_SEMESTER_YEAR = 2100

# 시뮬레이션 기본값
DEFAULT_SCALE_MAX = 4.5
DEFAULT_PROGRAM_TERMS = 8  # 4년제 8학기
DEFAULT_PLANNED_CREDITS = 18
DEFAULT_MAX_CREDITS = 21

# Gemini 모델
GEMINI_LITE_MODEL = "gemini-2.5-flash-lite"  # 문서 처리용 (고속)
