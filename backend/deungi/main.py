"""FastAPI 애플리케이션 엔트리포인트

실행: uvicorn deungi.main:app --reload  (backend/ 에서)
"""

import logging

from fastapi import FastAPI

from deungi.api.registry import router as registry_router
from deungi.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.API_TITLE,
    version="0.1.0",
    description="등기부등본 파싱 + 리스크 점수 + 4단계 검증 API",
)

app.include_router(registry_router)


@app.get("/health")
def health_check():
    """헬스 체크"""
    return {"status": "ok"}
