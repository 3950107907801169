"""
로거 설정
"""
import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str, level: str = None) -> logging.Logger:
    """
    모듈별 로거 생성 (unigrade.<name>)

    핸들러는 한 번만 붙이므로 여러 번 호출해도 로그가 중복되지 않습니다.
    """
    logger = logging.getLogger(f"unigrade.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))
    return logger
