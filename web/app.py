"""
FastAPI 애플리케이션

라우터 등록, 예외 처리기, 앱 설정.
"""

import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.constants import APP_VERSION
from core.ledger.errors import LedgerError, StorageError, ValidationError
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import books, expenses, health, labels, summary

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter
    from core.ledger.schema import init_ledger_schema

    settings = get_settings()

    # 시작 시 - DB 스키마 자동 초기화
    async with SQLiteAdapter(settings.db_path) as db:
        await init_ledger_schema(db)

    logger.info(f"Web: 장부 DB 준비 완료 ({settings.db_path})")

    yield


app = FastAPI(
    title="Ledger API",
    description="개인 가계부 - 장부 / 거래 / 라벨 / 장부 마감 API",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS 설정 (프론트엔드 개발 서버 허용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# 예외 처리기
# =========================================================================


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """도메인 오류 → status_code / kind / retryable"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} 실패: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} 거부: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """요청 스키마 오류 → 400 validation"""
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{field}: {error.get('msg')}" if field else str(error.get("msg")))
    error = ValidationError("; ".join(messages) or "Invalid request")
    logger.info(f"{request.method} {request.url.path} 거부: {error.message}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(sqlite3.Error)
async def storage_error_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    """저장소 오류 → 500 storage (트랜잭션은 이미 롤백됨)"""
    logger.error(f"{request.method} {request.url.path} 저장소 오류: {exc}")
    error = StorageError(f"Storage failure: {exc}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(books.router)
app.include_router(labels.router)
app.include_router(expenses.router)
app.include_router(summary.router)
