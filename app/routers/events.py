"""
events.py

행사(Event) 원장 API 모음.

이 파일은 행사 목록 조회와 draft 기반 편집 흐름을 HTTP로 노출한다.
draft는 서버에 보관하지 않는다. 화면이 draft를 들고 있다가
항목 추가/삭제/commit 요청 때마다 body로 그대로 보낸다.

주요 기능:
- 행사 목록 조회 (모금 합계 / 수익 포함)
- draft 시작 (신규 / 기존 행사 수정)
- draft 항목 추가 / 삭제
- draft commit (신규 추가 또는 기존 행사 교체)
- 행사 삭제
- CSV 내보내기

설계 원칙:
- 취소(cancel)는 화면에서 draft를 버리는 것으로 끝 (API 호출 없음)
- ValidationError → 400, NotFoundError → 404, 저장 실패 → 503

관련 파일:
- app.services.events    : EventLedger / draft 함수 / compute_totals
- app.schemas.event      : 요청/응답 스키마

"""

import csv
import io

from fastapi import APIRouter, Depends, HTTPException
from starlette import status
from starlette.responses import Response, StreamingResponse

from app.core.deps import get_event_ledger
from app.core.errors import NotFoundError, StorageWriteError, ValidationError
from app.schemas.common import format_money
from app.schemas.event import (
    DraftBeginRequest,
    DraftItemAddRequest,
    DraftItemRemoveRequest,
    Event,
    EventDraft,
    EventListResponse,
    EventResponse,
    EventTotals,
)
from app.services.events import EventLedger, add_draft_item, compute_totals, remove_draft_item

router = APIRouter(prefix="/events", tags=["events"])


def _to_response(event: Event) -> EventResponse:
    totals = compute_totals(event)
    return EventResponse(
        **event.model_dump(),
        total_collected=totals.total_collected,
        profit=totals.profit,
        display={
            "amountSpent": format_money(event.amount_spent),
            "totalCollected": format_money(totals.total_collected),
            "profit": format_money(totals.profit),
        },
    )


@router.get("", response_model=EventListResponse)
def list_events(ledger: EventLedger = Depends(get_event_ledger)):
    return EventListResponse(
        events=[_to_response(e) for e in ledger.entries],
        notice=ledger.notice,
    )


@router.get("/export")
def export_events_csv(ledger: EventLedger = Depends(get_event_ledger)):
    events = ledger.entries

    def generate():
        # Excel에서 UTF-8 CSV 깨짐 방지를 위해 BOM 먼저 출력
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(["id", "name", "date", "amount_spent", "items", "total_collected", "profit"])
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for e in events:
            totals = compute_totals(e)
            writer.writerow([
                e.id,
                e.name,
                e.date,
                format_money(e.amount_spent),
                len(e.items),
                format_money(totals.total_collected),
                format_money(totals.profit),
            ])
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    headers = {"Content-Disposition": 'attachment; filename="events.csv"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, ledger: EventLedger = Depends(get_event_ledger)):
    try:
        return _to_response(ledger.get(event_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{event_id}/totals", response_model=EventTotals)
def event_totals(event_id: str, ledger: EventLedger = Depends(get_event_ledger)):
    try:
        return ledger.totals(event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


"""
draft 시작 API

- event_id 없으면 빈 draft
- event_id 있으면 해당 행사의 값/항목을 복사한 draft

"""
@router.post("/drafts", response_model=EventDraft)
def begin_draft(
    body: DraftBeginRequest,
    ledger: EventLedger = Depends(get_event_ledger),
):
    try:
        return ledger.begin_draft(body.event_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/drafts/items", response_model=EventDraft)
def add_item(body: DraftItemAddRequest):
    try:
        return add_draft_item(body.draft, body.name, body.amount)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/drafts/items/remove", response_model=EventDraft)
def remove_item(body: DraftItemRemoveRequest):
    return remove_draft_item(body.draft, body.item_id)


"""
draft commit API

- source_id 있으면 기존 행사를 같은 위치에서 교체 (id 유지)
- 없으면 새 id로 추가

"""
@router.post("/drafts/commit", response_model=EventResponse)
def commit_draft(
    draft: EventDraft,
    ledger: EventLedger = Depends(get_event_ledger),
):
    try:
        return _to_response(ledger.commit_draft(draft))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, ledger: EventLedger = Depends(get_event_ledger)):
    try:
        ledger.delete_event(event_id)
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
