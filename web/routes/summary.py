"""
요약 라우트

대시보드 카드 / 지출 차트 API
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.types import ChartView
from web.dependencies import get_app_settings, get_db
from web.models.responses import (
    LabelBreakdownResponse,
    SpendingSeriesResponse,
    SummaryResponse,
)
from web.services.summary_service import SummaryService

router = APIRouter(prefix="/api/summary", tags=["Summary"])


@router.get("", response_model=SummaryResponse)
async def get_summary(
    book_id: str | None = Query(default=None, alias="bookId"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SummaryResponse:
    """수입/지출 합계와 오늘/이번 주/이번 달/올해 잔액"""
    service = SummaryService(db, tz=settings.timezone)
    return SummaryResponse(**await service.get_summary(book_id or None))


@router.get("/spending", response_model=SpendingSeriesResponse)
async def get_spending_series(
    book_id: str | None = Query(default=None, alias="bookId"),
    view: ChartView = Query(default=ChartView.WEEKLY),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SpendingSeriesResponse:
    """기간별 지출 막대 차트 (weekly / monthly / yearly)"""
    service = SummaryService(db, tz=settings.timezone)
    return SpendingSeriesResponse(**await service.get_spending_series(book_id or None, view))


@router.get("/labels", response_model=LabelBreakdownResponse)
async def get_label_breakdown(
    book_id: str | None = Query(default=None, alias="bookId"),
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LabelBreakdownResponse:
    """라벨별 지출 합계"""
    service = SummaryService(db, tz=settings.timezone)
    return LabelBreakdownResponse(**await service.get_label_breakdown(book_id or None))
