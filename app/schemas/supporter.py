"""
supporter.py

후원자(Supporter) 스키마.

- PaymentStatus        : 현재 회차 납부 상태 (Pending / Paid)
- PaymentHistoryEntry  : 월별 납부 이력 한 건
- Supporter            : 저장소 스냅샷에 들어가는 엔티티 그대로의 형태
- 요청/응답 스키마     : 라우터(app.routers.supporters)에서 사용

"""

from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from app.core.clock import validate_month
from app.schemas.common import LedgerModel, Money


class PaymentStatus(str, Enum):
    PENDING = "Pending"
    PAID = "Paid"


# 이전 모바일 앱이 저장한 스냅샷은 포르투갈어 상태값을 사용
LEGACY_STATUS = {
    "Pendente": PaymentStatus.PENDING.value,
    "Pago": PaymentStatus.PAID.value,
}


def _accept_legacy_status(value: Any) -> Any:
    if isinstance(value, str):
        return LEGACY_STATUS.get(value, value)
    return value


Status = Annotated[PaymentStatus, BeforeValidator(_accept_legacy_status)]


class PaymentHistoryEntry(LedgerModel):
    month: str = Field(..., examples=["2026-01"])
    status: Status

    @field_validator("month")
    @classmethod
    def _month_format(cls, v: str) -> str:
        return validate_month(v)


class Supporter(LedgerModel):
    """
    payment_history 는 생성 시점의 Pending 한 건으로 시작하며 비어 있을 수 없다.
    """

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    payment_status: Status = PaymentStatus.PENDING
    payment_history: tuple[PaymentHistoryEntry, ...] = Field(..., min_length=1)


class SupporterCreateRequest(BaseModel):
    name: str = Field(..., examples=["Ana"])


class SupporterSummary(LedgerModel):
    total: int
    paid: int
    total_value: Money


class SupporterSummaryResponse(SupporterSummary):
    total_value_display: str


class SupporterListResponse(LedgerModel):
    supporters: list[Supporter]
    summary: SupporterSummaryResponse
    notice: Optional[str] = None


class NoticeResponse(BaseModel):
    message: str
