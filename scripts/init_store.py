"""

로컬 저장소 초기화 스크립트.

- 최초 설치 시 한 번 실행하는 용도
- kv_store 테이블이 없으면 생성한다
- .env에 LEGACY_SUPPORTERS_FILE / LEGACY_EVENTS_FILE 이 지정되어 있으면
  이전 모바일 앱에서 내보낸 스냅샷(JSON)을 검증한 뒤 저장소에 넣는다.
  이미 값이 있는 키는 덮어쓰지 않는다.

사용 방법
- 가상환경 접속
- (.venv) ~\fundraising~$ python -m scripts.init_store

"""

import os
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.db.store import SqlKeyValueStore
from app.models.kv_store import KeyValueEntry  # noqa: F401
from app.services.events import EventLedger
from app.services.supporters import SupporterLedger


def import_legacy(ledger, path: str) -> None:
    if ledger.load():
        print(f"✅ '{ledger.key}' already has data. Skip import.")
        return

    raw = Path(path).read_text(encoding="utf-8")
    # 깨진 파일이면 StorageReadError 로 중단
    entries = ledger.import_snapshot(raw)
    print(f"📥 imported {len(entries)} {ledger.kind}(s) into '{ledger.key}'")


def main():
    Base.metadata.create_all(bind=engine)
    print("✅ kv_store table ready.")

    store = SqlKeyValueStore(SessionLocal)

    supporters_file = os.environ.get("LEGACY_SUPPORTERS_FILE")
    if supporters_file:
        import_legacy(SupporterLedger(store), supporters_file)

    events_file = os.environ.get("LEGACY_EVENTS_FILE")
    if events_file:
        import_legacy(EventLedger(store), events_file)


if __name__ == "__main__":
    main()
