"""
장부 도메인 타입

Book / Transaction / Label 레코드와 마감 결과 정의.
DB 행을 그대로 옮긴 불변 데이터클래스.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from core.types import TransactionKind


@dataclass(frozen=True)
class Book:
    """장부 (기간 단위 원장)

    end_date가 None이면 열린 장부.
    """

    id: str
    name: str
    start_date: datetime
    end_date: datetime | None
    created_at: datetime

    @property
    def is_open(self) -> bool:
        return self.end_date is None


@dataclass(frozen=True)
class Transaction:
    """수입/지출 거래

    amount는 항상 양수. 잔액 기여 부호는 kind로만 결정.
    """

    id: str
    amount: Decimal
    description: str
    date: datetime
    kind: TransactionKind
    is_archived: bool
    book_id: str
    label_id: str | None
    created_at: datetime

    @property
    def signed_amount(self) -> Decimal:
        """잔액 기여분 (수입 +, 지출 -)"""
        if self.kind == TransactionKind.INCOME:
            return self.amount
        return -self.amount


@dataclass(frozen=True)
class Label:
    """거래 분류 라벨"""

    id: str
    name: str
    color: str
    created_at: datetime


@dataclass(frozen=True)
class CloseResult:
    """장부 마감 결과"""

    closed_book_id: str
    new_book_id: str
    balance: Decimal
    seed_transaction_id: str | None = None
