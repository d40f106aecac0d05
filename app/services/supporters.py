"""
services/supporters.py

후원자(Supporter) 원장 비즈니스 로직.

매달 고정 금액을 내는 후원자 명단과 회차별 납부 상태를 관리한다.

주요 기능:
- 후원자 추가 / 삭제
- 납부 등록(Paid) / 납부 취소(Pending)
- 새 달 시작 시 전체 Pending 초기화
- 이름 검색, 집계(전체 수 / 납부자 수 / 총 수납액)

설계 원칙:
- 납부 등록은 이력(payment_history)에 한 건 추가하지만,
  납부 취소와 월 초기화는 이력을 건드리지 않는다
- 같은 달에 두 번 납부 등록하면 이력도 두 건 남는다 (중복 제거 없음)
- 현재 월은 주입받은 clock 으로만 계산

관련 파일:
- app.services.ledger      : 스냅샷 로드/저장 공통 로직
- app.schemas.supporter    : Supporter / PaymentHistoryEntry
- app.routers.supporters   : 후원자 API

"""

import logging
from decimal import Decimal
from typing import Iterable

from app.core.clock import Clock, current_month
from app.core.config import settings
from app.core.errors import ValidationError
from app.db.store import SUPPORTERS_KEY, KeyValueStore
from app.schemas.supporter import PaymentHistoryEntry, PaymentStatus, Supporter, SupporterSummary
from app.services.ledger import SnapshotLedger, new_id

logger = logging.getLogger(__name__)

RESET_NOTICE = 'All supporters were set to "Pending" for the new month.'


def search(query: str, supporters: Iterable[Supporter]) -> list[Supporter]:
    needle = (query or "").lower()
    return [s for s in supporters if needle in s.name.lower()]


def aggregate(supporters: Iterable[Supporter], dues_amount: Decimal) -> SupporterSummary:
    supporters = list(supporters)
    paid = sum(1 for s in supporters if s.payment_status == PaymentStatus.PAID)
    return SupporterSummary(total=len(supporters), paid=paid, total_value=paid * Decimal(dues_amount))


class SupporterLedger(SnapshotLedger[Supporter]):
    key = SUPPORTERS_KEY
    kind = "supporter"
    entity_type = Supporter

    def __init__(self, store: KeyValueStore, *, clock: Clock = current_month, dues_amount: Decimal | None = None):
        super().__init__(store)
        self._clock = clock
        self.dues_amount = settings.DUES_AMOUNT if dues_amount is None else Decimal(dues_amount)

    def add_supporter(self, name: str) -> Supporter:
        name = (name or "").strip()
        if not name:
            raise ValidationError("supporter name is required")

        supporter = Supporter(
            id=new_id(),
            name=name,
            payment_status=PaymentStatus.PENDING,
            payment_history=(PaymentHistoryEntry(month=self._clock(), status=PaymentStatus.PENDING),),
        )
        with self._lock:
            self._persist([*self._entries, supporter])

        logger.info("supporter_added", extra={"id": supporter.id})
        return supporter

    """
    납부 등록

    - 존재하지 않는 id면 NotFoundError
    - 상태 Paid + 이력에 {현재 월, Paid} 추가

    """
    def register_payment(self, supporter_id: str) -> Supporter:
        with self._lock:
            i = self._index_of(supporter_id)
            current = self._entries[i]
            updated = current.model_copy(update={
                "payment_status": PaymentStatus.PAID,
                "payment_history": (
                    *current.payment_history,
                    PaymentHistoryEntry(month=self._clock(), status=PaymentStatus.PAID),
                ),
            })
            entries = list(self._entries)
            entries[i] = updated
            self._persist(entries)

        logger.info("supporter_payment_registered", extra={"id": supporter_id})
        return updated

    # 이력은 그대로 두고 상태만 Pending 으로 되돌린다
    def remove_payment(self, supporter_id: str) -> Supporter:
        with self._lock:
            i = self._index_of(supporter_id)
            updated = self._entries[i].model_copy(update={"payment_status": PaymentStatus.PENDING})
            entries = list(self._entries)
            entries[i] = updated
            self._persist(entries)

        logger.info("supporter_payment_removed", extra={"id": supporter_id})
        return updated

    def reset_all_for_new_month(self) -> str:
        with self._lock:
            entries = [s.model_copy(update={"payment_status": PaymentStatus.PENDING}) for s in self._entries]
            self._persist(entries)

        logger.info("supporters_reset_for_new_month", extra={"count": len(entries)})
        return RESET_NOTICE

    def delete_supporter(self, supporter_id: str) -> None:
        self._delete(supporter_id)

    def search(self, query: str) -> list[Supporter]:
        return search(query, self.entries)

    def summary(self) -> SupporterSummary:
        return aggregate(self.entries, self.dues_amount)
