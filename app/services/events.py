"""
services/events.py

행사(Event) 원장 비즈니스 로직.

행사마다 지출액(amount_spent)과 모금 항목(items)을 기록하고,
모금 합계 / 수익을 계산한다.

편집 흐름:
    Closed --begin_draft--> Drafting --commit_draft--> Closed
                                    --(취소: draft 폐기)--> Closed

- draft는 불변 값(EventDraft)이며 항목 추가/삭제는 새 draft를 돌려준다
- commit 전까지 저장소와 메모리 컬렉션은 바뀌지 않는다
- commit 시 기존 행사면 같은 위치에서 교체(id 유지), 신규면 뒤에 추가

관련 파일:
- app.services.ledger    : 스냅샷 로드/저장 공통 로직
- app.schemas.event      : Event / EventItem / EventDraft
- app.routers.events     : 행사 API

"""

import logging
from decimal import Decimal, InvalidOperation

from app.core.errors import ValidationError
from app.db.store import EVENTS_KEY
from app.schemas.common import CENTS, MAX_AMOUNT
from app.schemas.event import Event, EventDraft, EventItem, EventTotals
from app.services.ledger import SnapshotLedger, new_id

logger = logging.getLogger(__name__)


"""
화면 입력 금액 파싱

- 공백/빈 문자열이면 "required"
- 숫자가 아니거나 NaN/Infinity, 자릿수 구분용 '_' 가 섞여 있으면 "must be a number"
- 음수 불가, MAX_AMOUNT 초과 불가
- 소수점 아래는 2자리까지 (스냅샷의 JSON number 로 정확히 왕복되는 값만 허용)

"""

def parse_amount(raw, field: str) -> Decimal:
    if isinstance(raw, (Decimal, int, float)) and not isinstance(raw, bool):
        text = str(raw)
    else:
        text = (raw or "").strip()
    if not text:
        raise ValidationError(f"{field} is required")
    # Decimal("1_000") 은 1000 으로 읽히므로 따로 막는다
    if "_" in text:
        raise ValidationError(f"{field} must be a number")

    try:
        value = Decimal(text)
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number")

    if not value.is_finite():
        raise ValidationError(f"{field} must be a number")
    if value < 0:
        raise ValidationError(f"{field} must not be negative")
    if value > MAX_AMOUNT:
        raise ValidationError(f"{field} is too large")
    if value != value.quantize(CENTS):
        raise ValidationError(f"{field} must have at most 2 decimal places")
    return value


def compute_totals(event: Event) -> EventTotals:
    collected = sum((i.amount for i in event.items), Decimal("0"))
    return EventTotals(total_collected=collected, profit=collected - event.amount_spent)


def begin_draft(existing: Event | None = None) -> EventDraft:
    if existing is None:
        return EventDraft()
    return EventDraft(
        source_id=existing.id,
        name=existing.name,
        date=existing.date,
        amount_spent=str(existing.amount_spent),
        items=existing.items,
    )


def add_draft_item(draft: EventDraft, name: str, amount) -> EventDraft:
    name = (name or "").strip()
    if not name:
        raise ValidationError("item name is required")
    value = parse_amount(amount, "item amount")

    taken = {i.id for i in draft.items}
    item_id = new_id()
    while item_id in taken:
        item_id = new_id()

    return draft.model_copy(update={"items": (*draft.items, EventItem(id=item_id, name=name, amount=value))})


def remove_draft_item(draft: EventDraft, item_id: str) -> EventDraft:
    return draft.model_copy(update={"items": tuple(i for i in draft.items if i.id != item_id)})


class EventLedger(SnapshotLedger[Event]):
    key = EVENTS_KEY
    kind = "event"
    entity_type = Event

    def begin_draft(self, event_id: str | None = None) -> EventDraft:
        if event_id is None:
            return begin_draft()
        return begin_draft(self.get(event_id))

    """
    draft 확정(commit)

    - name / date 공백 불가, amount_spent 는 0 이상 숫자
    - 항목도 add_draft_item 과 같은 규칙으로 다시 검사 (이름 공백 불가, 금액 형식)
    - date 는 'YYYY-MM-DD' 형태를 기대하지만 달력 검증 없이 입력값 그대로 저장
    - source_id 가 가리키는 행사가 이미 삭제되었으면 NotFoundError

    """
    def commit_draft(self, draft: EventDraft) -> Event:
        name = draft.name.strip()
        if not name:
            raise ValidationError("event name is required")
        if not draft.date.strip():
            raise ValidationError("event date is required")
        amount_spent = parse_amount(draft.amount_spent, "amount spent")
        # 화면이 보낸 draft 는 add_draft_item 을 거치지 않았을 수 있다
        for item in draft.items:
            if not item.name.strip():
                raise ValidationError("item name is required")
            parse_amount(item.amount, "item amount")

        with self._lock:
            entries = list(self._entries)
            if draft.source_id is not None:
                i = self._index_of(draft.source_id)
                event = Event(id=draft.source_id, name=name, date=draft.date, amount_spent=amount_spent, items=draft.items)
                entries[i] = event
            else:
                event = Event(id=new_id(), name=name, date=draft.date, amount_spent=amount_spent, items=draft.items)
                entries.append(event)
            self._persist(entries)

        logger.info(
            "event_committed",
            extra={"id": event.id, "updated": draft.source_id is not None, "items": len(event.items)},
        )
        return event

    def delete_event(self, event_id: str) -> None:
        self._delete(event_id)

    def totals(self, event_id: str) -> EventTotals:
        return compute_totals(self.get(event_id))
