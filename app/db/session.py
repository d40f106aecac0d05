"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

이 파일은 SQLAlchemy Engine과 SessionLocal을 생성하여
key-value 저장소(SqlKeyValueStore)가 사용하는 DB 연결을 관리한다.

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- SQLite 사용 시 스레드풀(FastAPI sync 엔드포인트)에서 접근할 수 있도록
  check_same_thread=False 지정
- pool_pre_ping=True로 유휴 연결 오류 방지

관련 파일:
- app.core.config        : DATABASE_URL 설정
- app.db.store           : SqlKeyValueStore

"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.core.config import settings


def make_engine(url: str) -> Engine:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


engine = make_engine(settings.DATABASE_URL)

# 저장소 호출 단위로 사용할 세션 팩토리
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)
