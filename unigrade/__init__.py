"""
unigrade - 성적표 정규화 및 GPA 시뮬레이션 백엔드
"""

__version__ = "1.0.0"
