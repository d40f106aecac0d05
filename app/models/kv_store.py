"""
kv_store.py

로컬 key-value 저장소 테이블 모델.

원장 하나당 row 하나 ("supporters", "events")를 두고,
value 컬럼에 컬렉션 전체 스냅샷(JSON 텍스트)을 통째로 저장한다.
부분 갱신은 없고 항상 전체 값을 교체한다.

"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KeyValueEntry(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )
