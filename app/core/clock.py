"""
clock.py

"현재 월(YYYY-MM)" 계산.

원장은 시스템 시간을 직접 읽지 않고 Clock(인자 없는 callable)을 주입받는다.
테스트에서는 고정된 월을 돌려주는 함수를 넘겨 월 변경 동작을 재현한다.

"""

import re
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], str]

_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def current_month() -> str:
    # 기존 앱과 동일하게 UTC 기준 월 사용
    return datetime.now(timezone.utc).strftime("%Y-%m")


"""
월(month) 문자열 형식 검증

- 'YYYY-MM' 형식만 허용
- 월(month)은 01 ~ 12 범위만 허용
- 형식이 잘못되면 ValueError 발생

"""

def validate_month(month: str) -> str:
    if not _MONTH_RE.match(month):
        raise ValueError("month must be in 'YYYY-MM' format")

    if not 1 <= int(month[5:]) <= 12:
        raise ValueError("month must be between 01 and 12")
    return month
