"""
supporters.py

후원자(Supporter) 원장 API 모음.

이 파일은 화면(프론트엔드)이 후원자 원장 기능을 호출하기 위한
얇은 HTTP 어댑터이다. 비즈니스 규칙은 모두 service 계층에 있다.

주요 기능:
- 후원자 목록 조회 (이름 검색) + 집계(전체 / 납부 / 총 수납액)
- 후원자 추가 / 삭제
- 납부 등록 / 납부 취소
- 새 달 시작 시 전체 Pending 초기화
- CSV / Excel(xlsx) 내보내기

설계 원칙:
- 원장 의존성(get_supporter_ledger)을 통해서만 데이터 접근
- ValidationError → 400, NotFoundError → 404, 저장 실패 → 503
- 삭제는 존재하지 않는 id여도 204 (멱등)

관련 파일:
- app.services.supporters  : SupporterLedger / search / aggregate
- app.schemas.supporter    : 요청/응답 스키마

"""

import csv
import io

from fastapi import APIRouter, Depends, HTTPException, Query
from openpyxl import Workbook
from starlette import status
from starlette.responses import Response, StreamingResponse

from app.core.deps import get_supporter_ledger
from app.core.errors import NotFoundError, StorageWriteError, ValidationError
from app.schemas.common import format_money
from app.schemas.supporter import (
    NoticeResponse,
    PaymentStatus,
    Supporter,
    SupporterCreateRequest,
    SupporterListResponse,
    SupporterSummaryResponse,
)
from app.services.supporters import SupporterLedger, aggregate, search

router = APIRouter(prefix="/supporters", tags=["supporters"])

EXPORT_HEADER = ["id", "name", "status", "history_months", "last_paid_month"]


def _summary(ledger: SupporterLedger) -> SupporterSummaryResponse:
    s = aggregate(ledger.entries, ledger.dues_amount)
    return SupporterSummaryResponse(
        total=s.total,
        paid=s.paid,
        total_value=s.total_value,
        total_value_display=format_money(s.total_value),
    )


def _export_row(s: Supporter) -> list:
    paid_months = [h.month for h in s.payment_history if h.status == PaymentStatus.PAID]
    return [
        s.id,
        s.name,
        s.payment_status.value,
        len(s.payment_history),
        paid_months[-1] if paid_months else "",
    ]


"""
후원자 목록 조회 API

- q 지정 시 이름 부분 일치(대소문자 무시)로 필터링
- 집계(summary)는 검색과 무관하게 전체 후원자 기준
- 시작 시 스냅샷을 읽지 못했으면 notice 포함

"""
@router.get("", response_model=SupporterListResponse)
def list_supporters(
    q: str = Query(default="", description="이름 검색어"),
    ledger: SupporterLedger = Depends(get_supporter_ledger),
):
    return SupporterListResponse(
        supporters=search(q, ledger.entries),
        summary=_summary(ledger),
        notice=ledger.notice,
    )


@router.get("/summary", response_model=SupporterSummaryResponse)
def supporters_summary(ledger: SupporterLedger = Depends(get_supporter_ledger)):
    return _summary(ledger)


@router.post("", response_model=Supporter)
def add_supporter(
    body: SupporterCreateRequest,
    ledger: SupporterLedger = Depends(get_supporter_ledger),
):
    try:
        return ledger.add_supporter(body.name)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))


"""
납부 등록 API

- 상태 Paid, 이력에 현재 월 Paid 한 건 추가

"""
@router.post("/{supporter_id}/payment", response_model=Supporter)
def register_payment(
    supporter_id: str,
    ledger: SupporterLedger = Depends(get_supporter_ledger),
):
    try:
        return ledger.register_payment(supporter_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))


"""
납부 취소 API

- 상태만 Pending 으로 되돌림 (이력은 유지)

"""
@router.delete("/{supporter_id}/payment", response_model=Supporter)
def remove_payment(
    supporter_id: str,
    ledger: SupporterLedger = Depends(get_supporter_ledger),
):
    try:
        return ledger.remove_payment(supporter_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/reset-month", response_model=NoticeResponse)
def reset_for_new_month(ledger: SupporterLedger = Depends(get_supporter_ledger)):
    try:
        return NoticeResponse(message=ledger.reset_all_for_new_month())
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))


# 삭제 확인 팝업은 화면 쪽 책임
@router.delete("/{supporter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supporter(
    supporter_id: str,
    ledger: SupporterLedger = Depends(get_supporter_ledger),
):
    try:
        ledger.delete_supporter(supporter_id)
    except StorageWriteError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


"""
후원자 현황 CSV 다운로드 API

- 현재 상태와 이력 건수, 마지막 납부 월을 후원자별로 한 줄씩
- UTF-8 BOM을 추가하여 Excel에서 바로 열 수 있도록 처리

"""
@router.get("/export")
def export_supporters_csv(ledger: SupporterLedger = Depends(get_supporter_ledger)):
    supporters = ledger.entries

    def generate():
        yield "\ufeff"

        output = io.StringIO()
        writer = csv.writer(output)

        writer.writerow(EXPORT_HEADER)
        yield output.getvalue()
        output.seek(0)
        output.truncate(0)

        for s in supporters:
            writer.writerow(_export_row(s))
            yield output.getvalue()
            output.seek(0)
            output.truncate(0)

    headers = {"Content-Disposition": 'attachment; filename="supporters.csv"'}
    return StreamingResponse(generate(), media_type="text/csv; charset=utf-8", headers=headers)


@router.get("/export.xlsx")
def export_supporters_xlsx(ledger: SupporterLedger = Depends(get_supporter_ledger)):
    wb = Workbook()
    ws = wb.active
    ws.title = "supporters"

    ws.append(EXPORT_HEADER)
    for s in ledger.entries:
        ws.append(_export_row(s))

    # 마지막 줄에 집계
    summary = aggregate(ledger.entries, ledger.dues_amount)
    ws.append([])
    ws.append(["total", summary.total, "paid", summary.paid, float(summary.total_value)])

    buf = io.BytesIO()
    wb.save(buf)

    headers = {"Content-Disposition": 'attachment; filename="supporters.xlsx"'}
    return Response(
        content=buf.getvalue(),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers=headers,
    )
