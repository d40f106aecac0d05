"""
services/ledger.py

스냅샷 기반 원장(ledger)의 공통 동작 모음.

후원자 원장과 행사 원장은 같은 구조를 가진다.
- 메모리 컬렉션 하나를 소유
- 변경 시: 컬렉션 사본 수정 → 전체 직렬화 → store.set → 성공하면 메모리 컬렉션 교체
- 시작 시: store.get → 역직렬화 → 메모리 컬렉션

설계 원칙:
- 저장 실패 시 메모리 컬렉션은 마지막으로 저장에 성공한 상태 그대로 유지
- 원장 하나당 lock 하나로 load-수정-저장 순서를 직렬화 (원장끼리는 독립)
- 읽기 실패(손상된 스냅샷)는 load()에서 그대로 올리고,
  load_or_empty()는 빈 컬렉션으로 시작하되 notice를 남긴다

관련 파일:
- app.db.store               : KeyValueStore 인터페이스
- app.services.supporters    : SupporterLedger
- app.services.events        : EventLedger

"""

import logging
import threading
import uuid
from typing import ClassVar, Generic, Sequence, TypeVar

import pydantic
from pydantic import BaseModel, TypeAdapter

from app.core.errors import NotFoundError, StorageReadError, StorageWriteError
from app.db.store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

READ_FAILURE_NOTICE = "Saved data could not be read. Starting with an empty list."


def new_id() -> str:
    return uuid.uuid4().hex


class SnapshotLedger(Generic[T]):
    key: ClassVar[str]
    kind: ClassVar[str]
    entity_type: ClassVar[type[BaseModel]]

    def __init__(self, store: KeyValueStore):
        self._store = store
        self._adapter = TypeAdapter(list[self.entity_type])
        self._entries: list[T] = []
        self._lock = threading.RLock()
        self.notice: str | None = None

    @property
    def entries(self) -> list[T]:
        with self._lock:
            return list(self._entries)

    def get(self, entity_id: str) -> T:
        with self._lock:
            return self._entries[self._index_of(entity_id)]

    """
    스냅샷 직렬화 / 역직렬화

    - 필드명은 camelCase alias 그대로 기록
    - 역직렬화 실패(JSON 깨짐, 필드 누락, id 중복)는 StorageReadError

    """

    def encode(self, entries: Sequence[T]) -> str:
        return self._adapter.dump_json(list(entries), by_alias=True).decode("utf-8")

    def decode(self, raw: str) -> list[T]:
        try:
            entries = self._adapter.validate_json(raw)
        except pydantic.ValidationError as e:
            raise StorageReadError(self.key, f"snapshot is not a valid {self.kind} list: {e.error_count()} error(s)") from e

        ids = [e.id for e in entries]
        if len(ids) != len(set(ids)):
            raise StorageReadError(self.key, f"snapshot contains duplicate {self.kind} ids")
        return entries

    def load(self) -> list[T]:
        with self._lock:
            try:
                raw = self._store.get(self.key)
            except StorageReadError:
                raise
            except Exception as e:
                logger.warning("ledger_read_failed", extra={"key": self.key, "error": str(e)})
                raise StorageReadError(self.key, "could not read snapshot") from e
            entries = [] if raw is None else self.decode(raw)
            self._entries = entries
            self.notice = None
            logger.info("ledger_loaded", extra={"key": self.key, "count": len(entries)})
            return list(entries)

    def load_or_empty(self) -> list[T]:
        try:
            return self.load()
        except StorageReadError as e:
            logger.warning("ledger_load_failed", extra={"key": self.key, "error": str(e)})
            with self._lock:
                self._entries = []
                self.notice = READ_FAILURE_NOTICE
            return []

    # 호출 측에서 self._lock 을 잡은 상태로 호출해야 한다
    def _persist(self, entries: list[T]) -> None:
        raw = self.encode(entries)
        try:
            self._store.set(self.key, raw)
        except StorageWriteError:
            raise
        except Exception as e:
            logger.error("ledger_persist_failed", extra={"key": self.key, "error": str(e)})
            raise StorageWriteError(self.key, "could not write snapshot") from e

        self._entries = entries
        self.notice = None

    def _index_of(self, entity_id: str) -> int:
        for i, entry in enumerate(self._entries):
            if entry.id == entity_id:
                return i
        raise NotFoundError(self.kind, entity_id)

    def _delete(self, entity_id: str) -> bool:
        with self._lock:
            remaining = [e for e in self._entries if e.id != entity_id]
            if len(remaining) == len(self._entries):
                logger.debug("ledger_delete_missing", extra={"key": self.key, "id": entity_id})
                return False
            self._persist(remaining)
        logger.info("ledger_deleted", extra={"key": self.key, "id": entity_id})
        return True

    # 외부 스냅샷(이전 앱에서 내보낸 JSON)을 검증 후 통째로 저장
    def import_snapshot(self, raw: str) -> list[T]:
        entries = self.decode(raw)
        with self._lock:
            self._persist(entries)
        logger.info("ledger_imported", extra={"key": self.key, "count": len(entries)})
        return list(entries)
