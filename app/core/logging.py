"""
logging.py

로깅 초기화.

- 앱 시작 시 한 번만 호출 (app.main)
- 각 모듈은 logging.getLogger(__name__) 으로 logger를 가져다 쓴다

"""

import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
