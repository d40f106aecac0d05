"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

이 파일은 .env 환경 변수들을 Pydantic BaseSettings를 통해 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 로컬 저장소(key-value) 데이터베이스 연결 정보
- 월 회비(후원금) 고정 금액
- 로그 레벨
- CORS 허용 도메인 목록

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 로컬 / 테스트 환경을 .env로 분리하여 관리
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- app.main               : CORS 및 로깅 초기화 시 설정 사용
- app.core.deps          : 원장(ledger) 생성 시 DUES_AMOUNT 사용
- app.db.session         : DATABASE_URL 사용

"""

from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# .env 파일에 정의된 환경 변수를 로드하는 설정 클래스
# extra="ignore" 옵션으로 정의되지 않은 환경 변수는 무시
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # 단일 사용자 로컬 실행이 기본이므로 SQLite 파일을 기본값으로 사용
    DATABASE_URL: str = "sqlite:///./fundraising.db"
    TEST_DATABASE_URL: str | None = None

    # 후원자 1명이 한 달에 내는 고정 금액 (집계 totalValue 계산용)
    DUES_AMOUNT: Decimal = Decimal("50")

    LOG_LEVEL: str = "INFO"

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]


# 애플리케이션 전역에서 import하여 사용하는 Settings 인스턴스
# 실행 시 한 번만 생성됨
settings = Settings()
