"""
store.py

원장 스냅샷을 보관하는 key-value 저장소 어댑터.

원장(SupporterLedger / EventLedger)은 KeyValueStore 인터페이스에만 의존하고,
실제 구현은 주입받는다.

- get(key)         : 저장된 스냅샷 문자열 또는 None
- set(key, value)  : 기존 값을 통째로 교체하여 저장 (실패 시 StorageWriteError)

SqlKeyValueStore는 kv_store 테이블에 row 하나로 저장하며,
SQLAlchemy 오류는 StorageReadError / StorageWriteError 로 감싸서 올린다.

관련 파일:
- app.models.kv_store    : KeyValueEntry 모델
- app.services.ledger    : 스냅샷 로드/저장 공통 로직

"""

import logging
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.errors import StorageReadError, StorageWriteError
from app.models.kv_store import KeyValueEntry

logger = logging.getLogger(__name__)

SUPPORTERS_KEY = "supporters"
EVENTS_KEY = "events"


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...


class SqlKeyValueStore(KeyValueStore):
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def get(self, key: str) -> str | None:
        try:
            with self._session_factory() as db:
                return db.scalar(select(KeyValueEntry.value).where(KeyValueEntry.key == key))
        except SQLAlchemyError as e:
            logger.warning("store_get_failed", extra={"key": key, "error": str(e)})
            raise StorageReadError(key, "could not read snapshot") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self._session_factory() as db:
                entry = db.get(KeyValueEntry, key)
                if entry is None:
                    db.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
                db.commit()
        except SQLAlchemyError as e:
            logger.error("store_set_failed", extra={"key": key, "error": str(e)})
            raise StorageWriteError(key, "could not write snapshot") from e
