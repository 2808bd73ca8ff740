"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 JSON 숫자, 시각은 ISO-8601 문자열.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from core.ledger.types import Book, Label, Transaction

# Decimal(소수점 2자리) → JSON 숫자
MoneyNumber = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")


class ErrorResponse(BaseModel):
    """오류 응답"""

    error: str = Field(..., description="오류 메시지")
    kind: str = Field(..., description="validation / not_found / conflict / storage")
    retryable: bool = Field(..., description="재시도 가능 여부 (storage만 True)")


class SuccessResponse(BaseModel):
    """삭제 등 단순 성공 응답"""

    success: bool = True


class BookResponse(BaseModel):
    """장부 응답"""

    id: str
    name: str
    start_date: datetime
    end_date: datetime | None = None
    created_at: datetime

    @classmethod
    def from_book(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id,
            name=book.name,
            start_date=book.start_date,
            end_date=book.end_date,
            created_at=book.created_at,
        )


class LabelResponse(BaseModel):
    """라벨 응답"""

    id: str
    name: str
    color: str
    created_at: datetime

    @classmethod
    def from_label(cls, label: Label) -> "LabelResponse":
        return cls(
            id=label.id,
            name=label.name,
            color=label.color,
            created_at=label.created_at,
        )


class TransactionResponse(BaseModel):
    """거래 응답"""

    id: str
    amount: MoneyNumber
    description: str
    date: datetime
    type: str = Field(..., description="expense / income")
    is_archived: bool
    book_id: str
    label_id: str | None = None

    @classmethod
    def from_transaction(cls, tx: Transaction) -> "TransactionResponse":
        return cls(
            id=tx.id,
            amount=tx.amount,
            description=tx.description,
            date=tx.date,
            type=tx.kind.value,
            is_archived=tx.is_archived,
            book_id=tx.book_id,
            label_id=tx.label_id,
        )


class CloseBookResponse(BaseModel):
    """장부 마감 응답"""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    balance: MoneyNumber = Field(..., description="마감 장부 잔액 (Σ수입 − Σ지출)")
    new_book_id: str = Field(..., alias="newBookId", description="새로 열린 장부 ID")


class PeriodBalances(BaseModel):
    """기간별 잔액"""

    today: MoneyNumber
    week: MoneyNumber
    month: MoneyNumber
    year: MoneyNumber


class SummaryResponse(BaseModel):
    """장부 요약 응답"""

    book_id: str | None = None
    income: MoneyNumber
    expense: MoneyNumber
    balance: MoneyNumber
    count: int
    periods: PeriodBalances


class SeriesPoint(BaseModel):
    """차트 막대 하나"""

    label: str
    amount: MoneyNumber


class SpendingSeriesResponse(BaseModel):
    """기간별 지출 차트 응답"""

    view: str
    points: list[SeriesPoint] = Field(default_factory=list)


class LabelBreakdownItem(BaseModel):
    """라벨별 지출 합계"""

    label_id: str | None = None
    name: str
    color: str
    total: MoneyNumber


class LabelBreakdownResponse(BaseModel):
    """라벨별 지출 차트 응답"""

    items: list[LabelBreakdownItem] = Field(default_factory=list)
