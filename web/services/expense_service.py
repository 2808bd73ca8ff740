"""
거래 내역 서비스

장부/보관 여부 기준 거래 조회와 단건 생성/수정/삭제.
"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.errors import NotFoundError, ValidationError
from core.ledger.store import LedgerStore
from core.ledger.types import Transaction
from core.ledger.validation import require_amount, require_text
from core.types import TransactionKind
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


class ExpenseService:
    """거래 내역 서비스

    Args:
        db: SQLite 어댑터
        clock: 현재 시각 함수
    """

    def __init__(self, db: SQLiteAdapter, clock: Callable[[], datetime] = now_utc):
        self.db = db
        self.store = LedgerStore(db)
        self._clock = clock

    async def list_transactions(
        self,
        book_id: str | None = None,
        include_archived: bool = False,
    ) -> list[Transaction]:
        """거래 목록 조회 (발생 시각 내림차순)

        book_id를 생략하면 모든 장부의 미보관 거래를 반환.
        일반 사용 시에는 항상 장부를 지정할 것.

        Args:
            book_id: 장부 필터 (선택)
            include_archived: 보관된 거래 포함 여부

        Returns:
            거래 목록
        """
        return await self.store.list_transactions(
            book_id=book_id,
            include_archived=include_archived,
        )

    async def get_transaction(self, transaction_id: str) -> Transaction:
        tx = await self.store.get_transaction(transaction_id)
        if tx is None:
            raise NotFoundError("Expense", transaction_id)
        return tx

    async def create_transaction(
        self,
        amount: Decimal | int | float | str,
        description: str,
        book_id: str,
        date: datetime | None = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
        label_id: str | None = None,
    ) -> Transaction:
        """거래 생성

        Args:
            amount: 금액 (> 0)
            description: 설명 (비어 있지 않음)
            book_id: 소속 장부 (존재해야 함)
            date: 발생 시각 (생략 시 현재)
            kind: expense / income
            label_id: 라벨 (선택, 존재해야 함)

        Raises:
            ValidationError: 필수 값 누락, 0 이하 금액, 없는 장부/라벨
        """
        amount = require_amount(amount)
        description = require_text(description, "description")
        book_id = require_text(book_id, "bookId")
        now = self._clock()

        async with self.db.transaction():
            if await self.store.get_book(book_id) is None:
                raise ValidationError(f"Unknown bookId: {book_id}")
            await self._check_label(label_id)

            tx = await self.store.insert_transaction(
                book_id=book_id,
                amount=amount,
                description=description,
                date=date or now,
                kind=kind,
                label_id=label_id,
                created_at=now,
            )

        logger.info(
            f"Expense created: {tx.id}",
            extra={"book_id": book_id, "kind": kind.value, "amount": str(amount)},
        )
        return tx

    async def update_transaction(
        self,
        transaction_id: str,
        amount: Decimal | int | float | str,
        description: str,
        date: datetime | None = None,
        kind: TransactionKind = TransactionKind.EXPENSE,
        label_id: str | None = None,
    ) -> Transaction:
        """거래 수정

        kind / label_id는 요청 값으로 덮어씀. date 생략 시 기존 발생 시각 유지.
        소속 장부와 보관 여부는 바꿀 수 없음.

        Raises:
            ValidationError: 필수 값 누락, 0 이하 금액, 없는 라벨
            NotFoundError: 거래 없음
        """
        amount = require_amount(amount)
        description = require_text(description, "description")

        async with self.db.transaction():
            current = await self.store.get_transaction(transaction_id)
            if current is None:
                raise NotFoundError("Expense", transaction_id)
            await self._check_label(label_id)

            await self.store.update_transaction(
                transaction_id,
                amount=amount,
                description=description,
                date=date or current.date,
                kind=kind,
                label_id=label_id,
            )
            tx = await self.store.get_transaction(transaction_id)

        assert tx is not None
        return tx

    async def delete_transaction(self, transaction_id: str) -> None:
        """거래 삭제

        Raises:
            NotFoundError: 거래 없음
        """
        async with self.db.transaction():
            if not await self.store.delete_transaction(transaction_id):
                raise NotFoundError("Expense", transaction_id)

        logger.info(f"Expense deleted: {transaction_id}")

    async def _check_label(self, label_id: str | None) -> None:
        if label_id is not None and await self.store.get_label(label_id) is None:
            raise ValidationError(f"Unknown label_id: {label_id}")
