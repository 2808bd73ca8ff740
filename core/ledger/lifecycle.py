"""
장부 마감 (Book Lifecycle)

열린 장부를 닫고 잔액을 다음 장부로 이월하는 다단계 작업.
전 과정이 하나의 트랜잭션 - 중간 실패 시 아무것도 반영되지 않음.

처리 순서:
1. 장부의 미보관 거래 조회
2. 잔액 계산 (Σ수입 − Σ지출)
3. 같은 조건으로 거래 일괄 보관
4. 장부 종료 시각 설정
5. 새 장부 생성
6. (이월 시) 잔액이 0이 아니면 새 장부에 기초 잔액 거래 1건 생성
"""

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults, Money, SeedDescriptions
from core.ledger.balance import compute_balance
from core.ledger.errors import (
    BookClosedError,
    LedgerError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from core.ledger.store import LedgerStore
from core.ledger.types import CloseResult
from core.types import TransactionKind
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeedEntry:
    """이월 기초 잔액 거래 내용"""

    kind: TransactionKind
    amount: Decimal
    description: str


def build_seed_entry(balance: Decimal) -> SeedEntry | None:
    """잔액으로부터 이월 거래 내용 결정

    - 양수: 수입, 금액 = 잔액
    - 음수: 지출, 금액 = |잔액|
    - 0: 이월 거래 없음

    Args:
        balance: 마감 장부 잔액

    Returns:
        SeedEntry 또는 None
    """
    if balance > Money.ZERO:
        return SeedEntry(
            kind=TransactionKind.INCOME,
            amount=balance,
            description=SeedDescriptions.CARRIED_FORWARD,
        )
    if balance < Money.ZERO:
        return SeedEntry(
            kind=TransactionKind.EXPENSE,
            amount=abs(balance),
            description=SeedDescriptions.DEFICIT,
        )
    return None


class BookLifecycleManager:
    """장부 마감 관리자

    BEGIN IMMEDIATE 트랜잭션으로 쓰기 락을 잡은 상태에서 마감을 수행하므로
    같은 장부에 대한 거래 추가 / 장부 삭제와 직렬화됨.

    Args:
        db: SQLite 어댑터 (연결된 상태)
        successor_name: 마감 시 생성되는 새 장부 이름
        clock: 현재 시각 함수 (테스트용 주입)
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        successor_name: str = Defaults.SUCCESSOR_BOOK_NAME,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.db = db
        self.store = LedgerStore(db)
        self.successor_name = successor_name
        self._clock = clock

    async def close_book(self, book_id: str, carry_forward: bool = False) -> CloseResult:
        """장부 마감 + 잔액 이월

        Args:
            book_id: 마감할 장부 ID
            carry_forward: 잔액을 새 장부로 이월할지 여부

        Returns:
            CloseResult (잔액, 새 장부 ID 등)

        Raises:
            ValidationError: book_id 누락
            NotFoundError: 장부 없음
            BookClosedError: 이미 마감된 장부
            StorageError: 저장소 오류 (전체 롤백됨, 재시도 가능)
        """
        if not book_id:
            raise ValidationError("bookId is required")

        try:
            async with self.db.transaction(immediate=True):
                result = await self._close(book_id, carry_forward)
        except LedgerError:
            raise
        except sqlite3.Error as e:
            logger.error(f"장부 마감 실패 (롤백): {book_id}: {e}")
            raise StorageError(f"Failed to close book: {e}") from e

        logger.info(
            f"장부 마감 완료: {book_id} → {result.new_book_id}",
            extra={
                "balance": str(result.balance),
                "carry_forward": carry_forward,
                "seed_transaction_id": result.seed_transaction_id,
            },
        )
        return result

    async def _close(self, book_id: str, carry_forward: bool) -> CloseResult:
        """트랜잭션 내부 마감 단계"""
        book = await self.store.get_book(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        if not book.is_open:
            raise BookClosedError(book_id)

        now = self._clock()

        # 1~2. 미보관 거래 조회 및 잔액 계산
        open_transactions = await self.store.list_transactions(book_id=book_id)
        balance = compute_balance(open_transactions)

        # 3. 일괄 보관 (조회와 같은 조건)
        archived = await self.store.archive_open_transactions(book_id)
        if archived != len(open_transactions):
            raise StorageError(
                f"Book {book_id} changed during close: "
                f"read {len(open_transactions)}, archived {archived}"
            )

        # 4. 장부 종료
        if not await self.store.close_book(book_id, now):
            raise BookClosedError(book_id)

        # 5. 새 장부
        new_book = await self.store.insert_book(self.successor_name, now)

        # 6. 잔액 이월
        seed_transaction_id = None
        seed = build_seed_entry(balance) if carry_forward else None
        if seed is not None:
            seed_tx = await self.store.insert_transaction(
                book_id=new_book.id,
                amount=seed.amount,
                description=seed.description,
                date=now,
                kind=seed.kind,
                label_id=None,
                created_at=now,
            )
            seed_transaction_id = seed_tx.id

        return CloseResult(
            closed_book_id=book_id,
            new_book_id=new_book.id,
            balance=balance,
            seed_transaction_id=seed_transaction_id,
        )
