# tests/helpers.py
from app.core.errors import StorageReadError, StorageWriteError
from app.db.store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    """dict 하나로 흉내 낸 저장소. writes 로 set 호출 횟수를 확인한다."""

    def __init__(self, initial: dict | None = None):
        self.data: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
        self.writes += 1


class FailingWriteStore(InMemoryKeyValueStore):
    """fail_writes=True 인 동안 set 이 StorageWriteError 를 낸다."""

    def __init__(self, initial: dict | None = None):
        super().__init__(initial)
        self.fail_writes = False

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError(key, "disk full")
        super().set(key, value)


class BrokenReadStore(InMemoryKeyValueStore):
    def get(self, key: str) -> str | None:
        raise StorageReadError(key, "device unavailable")


class FixedClock:
    """호출 시 month 값을 돌려주는 clock. 테스트 중간에 month 를 바꿔 월 변경을 흉내 낸다."""

    def __init__(self, month: str = "2026-01"):
        self.month = month

    def __call__(self) -> str:
        return self.month


class UnreachableStore(InMemoryKeyValueStore):
    """저장소 계층이 감싸지 못한 예외(OSError 등)를 그대로 내는 store."""

    def get(self, key: str) -> str | None:
        raise OSError("disk gone")
