"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

이 파일은 후원자/행사 원장을 화면에 노출하는 로컬 HTTP 어댑터를 조립한다.

주요 역할:
- 로깅 초기화
- FastAPI 앱 인스턴스 생성
- CORS 미들웨어 설정
- 원장별 라우터(supporters, events) 등록
- 헬스 체크 및 저장소 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임

관련 파일:
- app.core.config        : 환경 변수 및 설정 로드
- app.core.deps          : 저장소 / 원장 의존성
- app.routers.*          : 기능별 API 라우터

"""

from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.deps import get_store
from app.core.errors import StorageReadError
from app.core.logging import configure_logging
from app.db.store import SUPPORTERS_KEY, KeyValueStore
from app.routers import supporters, events

configure_logging()

app = FastAPI(title="Fundraising Ledger")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(supporters.router)
app.include_router(events.router)

"""
서버 헬스 체크 엔드포인트

- 애플리케이션 프로세스가 정상 동작 중인지 확인

"""
@app.get("/health")
def health():
    return {"status": "ok"}

"""
저장소 연결 상태 확인 엔드포인트

- 후원자 스냅샷 키를 읽어 저장소 접근 가능 여부 확인
- 서버는 살아 있으나 저장소(DB 파일)가 죽은 상황을 분리해서 감지

"""
@app.get("/store-ping")
def store_ping(store: KeyValueStore = Depends(get_store)):
    try:
        raw = store.get(SUPPORTERS_KEY)
    except StorageReadError as e:
        raise HTTPException(status_code=503, detail=str(e))
    return {"store": "ok", "has_supporters": raw is not None}
