"""
event.py

행사(Event) 스키마.

- EventItem   : 행사에서 모금된 항목 한 건 (id는 행사 안에서만 유일)
- Event       : 저장소 스냅샷에 들어가는 확정(commit)된 행사
- EventDraft  : 편집 중인 행사 사본. 화면 입력값(이름/날짜/지출액)을 문자열 그대로 들고 있고,
                commit 전까지는 저장소와 아무 관계가 없다.
- EventTotals : 모금 합계 / 수익 (저장하지 않고 매번 계산)

"""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.schemas.common import LedgerModel, Money


class EventItem(LedgerModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    amount: Money = Field(..., ge=0)


def _ensure_unique_item_ids(items: tuple[EventItem, ...]) -> None:
    ids = [i.id for i in items]
    if len(ids) != len(set(ids)):
        raise ValueError("item ids must be unique within an event")


class Event(LedgerModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    date: str = Field(..., examples=["2024-06-01"])
    amount_spent: Money = Field(..., ge=0)
    items: tuple[EventItem, ...] = ()

    @model_validator(mode="after")
    def _unique_items(self):
        _ensure_unique_item_ids(self.items)
        return self


class EventDraft(LedgerModel):
    """
    source_id 가 있으면 기존 행사 수정, 없으면 신규 생성.
    """

    source_id: Optional[str] = None
    name: str = ""
    date: str = ""
    amount_spent: str = ""
    items: tuple[EventItem, ...] = ()

    @model_validator(mode="after")
    def _unique_items(self):
        _ensure_unique_item_ids(self.items)
        return self


class EventTotals(LedgerModel):
    total_collected: Money
    profit: Money


class EventResponse(Event):
    total_collected: Money
    profit: Money
    display: dict[str, str]


class DraftBeginRequest(LedgerModel):
    event_id: Optional[str] = None


class DraftItemAddRequest(LedgerModel):
    draft: EventDraft
    name: str = ""
    amount: str = Field("", examples=["40.00"])


class DraftItemRemoveRequest(LedgerModel):
    draft: EventDraft
    item_id: str


class EventListResponse(BaseModel):
    events: list[EventResponse]
    notice: Optional[str] = None
