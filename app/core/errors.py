"""
errors.py

원장(ledger) 도메인 예외 정의 파일.

서비스 계층은 이 예외만 발생시키고,
라우터에서 HTTPException(400 / 404 / 503)으로 변환한다.

- ValidationError    : 입력값 누락/형식 오류 (이름 공백, 숫자 파싱 실패 등)
- NotFoundError      : 존재하지 않는 id 참조
- StorageReadError   : 저장소 읽기 실패 또는 스냅샷 디코딩 실패
- StorageWriteError  : 저장소 쓰기 실패

ValidationError는 ValueError를 상속하므로
기존처럼 `except ValueError` 로도 잡힌다.

"""


class LedgerError(Exception):
    pass


class ValidationError(LedgerError, ValueError):
    pass


class NotFoundError(LedgerError, LookupError):
    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} not found: {entity_id}")
        self.kind = kind
        self.entity_id = entity_id


class StorageError(LedgerError):
    def __init__(self, key: str, message: str):
        super().__init__(f"{message} (key={key!r})")
        self.key = key


class StorageReadError(StorageError):
    pass


class StorageWriteError(StorageError):
    pass
