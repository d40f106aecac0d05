"""

SQLAlchemy key-value 저장소 테스트.
- 없는 키는 None, set은 기존 값을 교체,
  원장과 붙였을 때 재시작(새 원장 인스턴스) 후에도 데이터 유지,
  테이블이 없으면 StorageReadError / StorageWriteError 를 확인한다.

"""

import pytest
from sqlalchemy.orm import sessionmaker

from app.core.errors import StorageReadError, StorageWriteError
from app.db.session import make_engine
from app.db.store import EVENTS_KEY, SUPPORTERS_KEY, SqlKeyValueStore
from app.services.events import EventLedger, add_draft_item, begin_draft
from app.services.supporters import SupporterLedger

from tests.helpers import FixedClock


def test_get_missing_key_returns_none(sql_store):
    assert sql_store.get(SUPPORTERS_KEY) is None


def test_set_replaces_value(sql_store):
    sql_store.set(EVENTS_KEY, "[]")
    sql_store.set(EVENTS_KEY, '[{"x": 1}]')
    assert sql_store.get(EVENTS_KEY) == '[{"x": 1}]'
    assert sql_store.get(SUPPORTERS_KEY) is None


def test_ledgers_survive_restart(sql_store):
    supporters = SupporterLedger(sql_store, clock=FixedClock("2026-03"))
    ana = supporters.add_supporter("Ana")
    supporters.register_payment(ana.id)

    events = EventLedger(sql_store)
    draft = begin_draft().model_copy(update={"name": "Bazaar", "date": "2024-06-01", "amount_spent": "100"})
    event = events.commit_draft(add_draft_item(draft, "Cake", "40"))

    assert SupporterLedger(sql_store).load() == supporters.entries
    assert EventLedger(sql_store).load() == [event]


def test_missing_table_raises_storage_errors(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    store = SqlKeyValueStore(sessionmaker(bind=engine))

    with pytest.raises(StorageReadError):
        store.get(SUPPORTERS_KEY)
    with pytest.raises(StorageWriteError):
        store.set(SUPPORTERS_KEY, "[]")
    engine.dispose()
