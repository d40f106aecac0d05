"""
deps.py

FastAPI 의존성 모음.

- get_store            : SQLAlchemy 기반 key-value 저장소
- get_supporter_ledger : 프로세스당 하나의 후원자 원장 (최초 호출 시 스냅샷 로드)
- get_event_ledger     : 프로세스당 하나의 행사 원장

테스트에서는 app.dependency_overrides 로 메모리 저장소를 쓰는 원장을 주입한다.

"""

from functools import lru_cache

from app.core.config import settings
from app.db.session import SessionLocal
from app.db.store import KeyValueStore, SqlKeyValueStore
from app.services.events import EventLedger
from app.services.supporters import SupporterLedger


@lru_cache
def get_store() -> KeyValueStore:
    return SqlKeyValueStore(SessionLocal)


@lru_cache
def get_supporter_ledger() -> SupporterLedger:
    ledger = SupporterLedger(get_store(), dues_amount=settings.DUES_AMOUNT)
    # 읽기 실패해도 서버는 뜨고, 목록 응답의 notice 로 알린다
    ledger.load_or_empty()
    return ledger


@lru_cache
def get_event_ledger() -> EventLedger:
    ledger = EventLedger(get_store())
    ledger.load_or_empty()
    return ledger
