"""
common.py

원장 스키마 공통 타입.

- LedgerModel : 스냅샷/응답 모두 camelCase 필드명(paymentStatus, amountSpent ...)을 사용.
                저장 포맷의 필드명이 기존 앱과 같아야 하므로 alias로 맞춘다.
- Money       : 내부는 Decimal, JSON 직렬화 시에는 숫자(float)로 기록
- format_money: 화면 표시용 고정 소수점 2자리 문자열
- CENTS / MAX_AMOUNT : 입력 금액의 자릿수 / 크기 상한 (float 왕복이 정확한 범위)

"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class LedgerModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# 기존 스냅샷은 금액을 JSON number로 저장했으므로 같은 형태를 유지
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

CENTS = Decimal("0.01")

# 소수점 2자리 금액이 float(JSON number)로 정확히 왕복되는 범위
MAX_AMOUNT = Decimal("999999999999.99")


def format_money(value: Decimal) -> str:
    return str(Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))
