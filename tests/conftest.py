import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.main import app as fastapi_app
from app.core.deps import get_event_ledger, get_store, get_supporter_ledger
from app.db.base import Base
from app.db.session import make_engine
from app.db.store import SqlKeyValueStore
from app.services.events import EventLedger
from app.services.supporters import SupporterLedger

# ✅ 모델 import (Base.metadata에 테이블 등록)
import app.models.kv_store  # noqa: F401

from tests.helpers import FixedClock, InMemoryKeyValueStore


@pytest.fixture()
def clock():
    return FixedClock("2026-01")


@pytest.fixture()
def store():
    return InMemoryKeyValueStore()


@pytest.fixture()
def supporter_ledger(store, clock):
    ledger = SupporterLedger(store, clock=clock, dues_amount=50)
    ledger.load()
    return ledger


@pytest.fixture()
def event_ledger(store):
    ledger = EventLedger(store)
    ledger.load()
    return ledger


@pytest.fixture()
def sql_store(tmp_path):
    """임시 SQLite 파일 위에 kv_store 테이블을 만든 저장소"""
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield SqlKeyValueStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))
    engine.dispose()


@pytest.fixture()
def client(store, supporter_ledger, event_ledger):
    fastapi_app.dependency_overrides[get_store] = lambda: store
    fastapi_app.dependency_overrides[get_supporter_ledger] = lambda: supporter_ledger
    fastapi_app.dependency_overrides[get_event_ledger] = lambda: event_ledger
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
