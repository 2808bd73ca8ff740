"""
요약 서비스

대시보드 카드(기간별 잔액)와 지출 차트(기간 막대 / 라벨 비중) 데이터.
미보관 거래만 집계하며, 기간 경계는 설정된 표시 타임존 기준.
"""

import calendar
from datetime import date, datetime, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults, Money
from core.ledger.balance import compute_balance, summarize, to_money
from core.ledger.store import LedgerStore
from core.ledger.types import Transaction
from core.types import ChartView, TransactionKind
from core.utils.timezone import now_utc, to_local


def period_ranges(local_now: datetime) -> dict[str, tuple[datetime, datetime]]:
    """오늘 / 이번 주(월요일 시작) / 이번 달 / 올해 구간 [start, end)

    Args:
        local_now: 표시 타임존 기준 현재 시각

    Returns:
        {"today": (start, end), "week": ..., "month": ..., "year": ...}
    """
    tz = local_now.tzinfo
    today = datetime(local_now.year, local_now.month, local_now.day, tzinfo=tz)
    week_start = today - timedelta(days=today.weekday())
    month_start = today.replace(day=1)
    if month_start.month == 12:
        next_month = month_start.replace(year=month_start.year + 1, month=1)
    else:
        next_month = month_start.replace(month=month_start.month + 1)
    year_start = today.replace(month=1, day=1)

    return {
        "today": (today, today + timedelta(days=1)),
        "week": (week_start, week_start + timedelta(days=7)),
        "month": (month_start, next_month),
        "year": (year_start, year_start.replace(year=year_start.year + 1)),
    }


class SummaryService:
    """요약 서비스

    Args:
        db: SQLite 어댑터
        tz: 표시 타임존 (기본 UTC)
    """

    def __init__(self, db: SQLiteAdapter, tz: tzinfo = timezone.utc):
        self.db = db
        self.store = LedgerStore(db)
        self.tz = tz

    async def get_summary(
        self,
        book_id: str | None = None,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """장부 요약

        Returns:
            book_id, income, expense, balance, count, periods(today/week/month/year 잔액)
        """
        transactions = await self.store.list_transactions(book_id=book_id)
        totals = summarize(transactions)
        local_now = to_local(now or now_utc(), self.tz)

        periods: dict[str, Decimal] = {}
        for name, (start, end) in period_ranges(local_now).items():
            periods[name] = compute_balance(
                tx for tx in transactions if start <= to_local(tx.date, self.tz) < end
            )

        return {
            "book_id": book_id,
            "income": totals.income,
            "expense": totals.expense,
            "balance": totals.balance,
            "count": totals.count,
            "periods": periods,
        }

    async def get_spending_series(
        self,
        book_id: str | None = None,
        view: ChartView = ChartView.WEEKLY,
        now: datetime | None = None,
    ) -> dict[str, Any]:
        """기간별 지출 막대 차트 데이터 (지출만)

        - weekly: 이번 주 7일
        - monthly: 이번 달 일별
        - yearly: 올해 12개월

        Returns:
            view, points([{label, amount}])
        """
        expenses = await self._expenses(book_id)
        local_now = to_local(now or now_utc(), self.tz)

        if view == ChartView.YEARLY:
            keys: list[Any] = [(local_now.year, month) for month in range(1, 13)]
            labels = [date(local_now.year, month, 1).strftime("%b") for month in range(1, 13)]

            def key_of(dt: datetime) -> Any:
                return (dt.year, dt.month)

        else:
            if view == ChartView.WEEKLY:
                first = local_now.date() - timedelta(days=local_now.weekday())
                days = [first + timedelta(days=i) for i in range(7)]
                labels = [d.strftime("%a %d") for d in days]
            else:
                month_days = calendar.monthrange(local_now.year, local_now.month)[1]
                days = [date(local_now.year, local_now.month, d) for d in range(1, month_days + 1)]
                labels = [d.strftime("%d") for d in days]
            keys = list(days)

            def key_of(dt: datetime) -> Any:
                return dt.date()

        totals: dict[Any, Decimal] = {key: Money.ZERO for key in keys}
        for tx in expenses:
            key = key_of(to_local(tx.date, self.tz))
            if key in totals:
                totals[key] += tx.amount

        return {
            "view": view.value,
            "points": [
                {"label": label, "amount": to_money(totals[key])}
                for label, key in zip(labels, keys)
            ],
        }

    async def get_label_breakdown(self, book_id: str | None = None) -> dict[str, Any]:
        """라벨별 지출 합계 (지출만)

        합계가 0인 라벨은 제외. 라벨 없음 / 삭제된 라벨은 "Other"로 묶음.

        Returns:
            items([{label_id, name, color, total}])
        """
        expenses = await self._expenses(book_id)
        labels = await self.store.list_labels()
        known = {label.id for label in labels}

        totals: dict[str | None, Decimal] = {}
        for tx in expenses:
            key = tx.label_id if tx.label_id in known else None
            totals[key] = totals.get(key, Money.ZERO) + tx.amount

        items = [
            {
                "label_id": label.id,
                "name": label.name,
                "color": label.color,
                "total": to_money(totals[label.id]),
            }
            for label in labels
            if totals.get(label.id, Money.ZERO) > Money.ZERO
        ]
        if totals.get(None, Money.ZERO) > Money.ZERO:
            items.append({
                "label_id": None,
                "name": Defaults.UNLABELED_NAME,
                "color": Defaults.UNLABELED_COLOR,
                "total": to_money(totals[None]),
            })

        return {"items": items}

    async def _expenses(self, book_id: str | None) -> list[Transaction]:
        transactions = await self.store.list_transactions(book_id=book_id)
        return [tx for tx in transactions if tx.kind == TransactionKind.EXPENSE]
