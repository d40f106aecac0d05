"""

스냅샷 직렬화 테스트.
- 빈 컬렉션 / 중첩 항목이 있는 컬렉션의 encode → decode 왕복,
  저장 필드명(camelCase), 이전 앱 스냅샷(포르투갈어 상태값) 읽기,
  손상된 스냅샷 처리(StorageReadError / notice)를 확인한다.

"""

import json
from decimal import Decimal

import pytest

from app.core.errors import StorageReadError
from app.schemas.event import Event, EventItem
from app.schemas.supporter import PaymentHistoryEntry, PaymentStatus, Supporter
from app.services.events import EventLedger, add_draft_item, begin_draft
from app.services.ledger import READ_FAILURE_NOTICE
from app.services.supporters import SupporterLedger

from tests.helpers import BrokenReadStore, InMemoryKeyValueStore, UnreachableStore


def _supporters() -> list[Supporter]:
    return [
        Supporter(
            id="s1",
            name="Ana",
            payment_status=PaymentStatus.PAID,
            payment_history=(
                PaymentHistoryEntry(month="2026-01", status=PaymentStatus.PENDING),
                PaymentHistoryEntry(month="2026-01", status=PaymentStatus.PAID),
            ),
        ),
        Supporter(
            id="s2",
            name="Bruno",
            payment_status=PaymentStatus.PENDING,
            payment_history=(
                PaymentHistoryEntry(month="2025-12", status=PaymentStatus.PENDING),
                PaymentHistoryEntry(month="2026-01", status=PaymentStatus.PAID),
            ),
        ),
    ]


def _events() -> list[Event]:
    return [
        Event(
            id="e1",
            name="Bazaar",
            date="2024-06-01",
            amount_spent=Decimal("100"),
            items=(
                EventItem(id="i1", name="Cake", amount=Decimal("40.10")),
                EventItem(id="i2", name="Raffle", amount=Decimal("90")),
            ),
        ),
        Event(
            id="e2",
            name="Dinner",
            date="2024-07-15",
            amount_spent=Decimal("250.75"),
            items=(
                EventItem(id="i1", name="Tickets", amount=Decimal("300")),
                EventItem(id="i2", name="Drinks", amount=Decimal("12.5")),
            ),
        ),
    ]


@pytest.mark.parametrize(
    "ledger_cls, entries",
    [
        (SupporterLedger, []),
        (SupporterLedger, _supporters()),
        (EventLedger, []),
        (EventLedger, _events()),
    ],
)
def test_round_trip(ledger_cls, entries):
    ledger = ledger_cls(InMemoryKeyValueStore())
    assert ledger.decode(ledger.encode(entries)) == entries


def test_supporter_snapshot_uses_stored_field_names():
    ledger = SupporterLedger(InMemoryKeyValueStore())
    record = json.loads(ledger.encode(_supporters()))[0]

    assert set(record) == {"id", "name", "paymentStatus", "paymentHistory"}
    assert record["paymentStatus"] == "Paid"
    assert record["paymentHistory"][0] == {"month": "2026-01", "status": "Pending"}


def test_event_snapshot_uses_stored_field_names_and_numbers():
    ledger = EventLedger(InMemoryKeyValueStore())
    record = json.loads(ledger.encode(_events()))[0]

    assert set(record) == {"id", "name", "date", "amountSpent", "items"}
    assert record["amountSpent"] == 100
    assert record["items"][0] == {"id": "i1", "name": "Cake", "amount": 40.1}


def test_decode_legacy_portuguese_statuses():
    raw = json.dumps([
        {
            "id": "1717000000000",
            "name": "Ana",
            "paymentStatus": "Pago",
            "paymentHistory": [
                {"month": "2024-05", "status": "Pendente"},
                {"month": "2024-06", "status": "Pago"},
            ],
        }
    ])
    ledger = SupporterLedger(InMemoryKeyValueStore({"supporters": raw}))
    [ana] = ledger.load()

    assert ana.payment_status == PaymentStatus.PAID
    assert [h.status for h in ana.payment_history] == [PaymentStatus.PENDING, PaymentStatus.PAID]
    # 다시 저장하면 표준 상태값으로 기록
    assert '"Pago"' not in ledger.encode([ana])


def test_load_without_snapshot_is_empty():
    assert SupporterLedger(InMemoryKeyValueStore()).load() == []
    assert EventLedger(InMemoryKeyValueStore()).load() == []


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        '{"id": "s1"}',
        '[{"id": "s1", "name": "Ana", "paymentStatus": "Paid", "paymentHistory": []}]',
        '[{"id": "s1", "name": "Ana", "paymentStatus": "Unknown", "paymentHistory": [{"month": "2026-01", "status": "Paid"}]}]',
        '[{"id": "s1", "name": "Ana", "paymentStatus": "Paid", "paymentHistory": [{"month": "2026-13", "status": "Paid"}]}]',
    ],
)
def test_corrupt_supporter_snapshot_raises_read_error(raw):
    ledger = SupporterLedger(InMemoryKeyValueStore({"supporters": raw}))
    with pytest.raises(StorageReadError):
        ledger.load()


def test_duplicate_ids_in_snapshot_rejected():
    ledger = EventLedger(InMemoryKeyValueStore())
    raw = ledger.encode(_events()[:1] * 2)
    with pytest.raises(StorageReadError):
        ledger.decode(raw)


def test_load_or_empty_keeps_notice_on_corrupt_snapshot():
    store = InMemoryKeyValueStore({"events": "[{broken"})
    ledger = EventLedger(store)

    assert ledger.load_or_empty() == []
    assert ledger.notice == READ_FAILURE_NOTICE
    # 손상된 원본은 그대로 남아 있음
    assert store.data["events"] == "[{broken"


def test_load_or_empty_on_store_failure():
    ledger = SupporterLedger(BrokenReadStore())
    assert ledger.load_or_empty() == []
    assert ledger.notice == READ_FAILURE_NOTICE


def test_import_snapshot_normalizes_and_persists():
    store = InMemoryKeyValueStore()
    ledger = SupporterLedger(store)
    raw = json.dumps([
        {"id": "1", "name": "Ana", "paymentStatus": "Pendente", "paymentHistory": [{"month": "2024-05", "status": "Pendente"}]},
    ])

    entries = ledger.import_snapshot(raw)

    assert ledger.entries == entries
    assert json.loads(store.data["supporters"])[0]["paymentStatus"] == "Pending"


def test_unexpected_store_error_becomes_read_error():
    ledger = SupporterLedger(UnreachableStore())

    with pytest.raises(StorageReadError) as exc:
        ledger.load()
    assert isinstance(exc.value.__cause__, OSError)

    assert ledger.load_or_empty() == []
    assert ledger.notice == READ_FAILURE_NOTICE


@pytest.mark.parametrize("amount", ["0.1", "0.10", "12.35", "999999999999.99"])
def test_committed_amounts_survive_reload(amount):
    store = InMemoryKeyValueStore()
    ledger = EventLedger(store)
    draft = begin_draft().model_copy(update={"name": "Bazaar", "date": "2024-06-01", "amount_spent": amount})
    event = ledger.commit_draft(add_draft_item(draft, "Cake", amount))

    reloaded = EventLedger(store).load()

    assert reloaded == [event]
    assert reloaded[0].amount_spent == Decimal(amount)
    assert reloaded[0].items[0].amount == Decimal(amount)
