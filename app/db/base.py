"""
base.py

SQLAlchemy ORM Base 정의 파일.

저장소 테이블(kv_store) 모델은 이 Base를 상속하며,
Alembic 마이그레이션과 scripts/init_store.py 도
이 Base.metadata 를 기준으로 테이블을 만든다.

관련 파일:
- app.models.kv_store     : KeyValueEntry 모델
- scripts/init_store.py   : 최초 테이블 생성

"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
