"""
Ledger 저장소

books / expenses / labels 테이블의 행 단위 SQL.
커밋하지 않음 - 트랜잭션 경계는 호출자(서비스, 마감 관리자)가 소유.
"""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from core.ledger.balance import to_money
from core.ledger.types import Book, Label, Transaction
from core.types import TransactionKind
from core.utils.timezone import from_db_ts, to_db_ts

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


BOOK_COLUMNS = "id, name, start_date, end_date, created_at"
LABEL_COLUMNS = "id, name, color, created_at"
TRANSACTION_COLUMNS = (
    "id, amount, description, date, type, is_archived, book_id, label_id, created_at"
)


def _row_to_book(row: tuple[Any, ...]) -> Book:
    return Book(
        id=row[0],
        name=row[1],
        start_date=from_db_ts(row[2]),
        end_date=from_db_ts(row[3]),
        created_at=from_db_ts(row[4]),
    )


def _row_to_label(row: tuple[Any, ...]) -> Label:
    return Label(
        id=row[0],
        name=row[1],
        color=row[2],
        created_at=from_db_ts(row[3]),
    )


def _row_to_transaction(row: tuple[Any, ...]) -> Transaction:
    return Transaction(
        id=row[0],
        amount=to_money(row[1]),
        description=row[2],
        date=from_db_ts(row[3]),
        kind=TransactionKind(row[4]),
        is_archived=bool(row[5]),
        book_id=row[6],
        label_id=row[7],
        created_at=from_db_ts(row[8]),
    )


class LedgerStore:
    """Ledger 저장소

    장부, 거래, 라벨을 저장하고 조회하는 클래스.
    금액은 TEXT(Decimal 문자열)로 저장하여 정밀도 손실 없음.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    # =========================================================================
    # Books
    # =========================================================================

    async def list_books(self) -> list[Book]:
        """장부 목록 (최신 시작일 순)"""
        rows = await self.db.fetchall(
            f"SELECT {BOOK_COLUMNS} FROM books ORDER BY start_date DESC, created_at DESC"
        )
        return [_row_to_book(row) for row in rows]

    async def get_book(self, book_id: str) -> Book | None:
        row = await self.db.fetchone(
            f"SELECT {BOOK_COLUMNS} FROM books WHERE id = ?",
            (book_id,),
        )
        return _row_to_book(row) if row else None

    async def insert_book(self, name: str, start_date: datetime) -> Book:
        """장부 생성

        Args:
            name: 장부 이름
            start_date: 시작 시각 (created_at도 같은 값)

        Returns:
            생성된 Book
        """
        book_id = str(uuid4())
        ts = to_db_ts(start_date)
        await self.db.execute(
            "INSERT INTO books (id, name, start_date, end_date, created_at) VALUES (?, ?, ?, NULL, ?)",
            (book_id, name, ts, ts),
        )
        return Book(
            id=book_id,
            name=name,
            start_date=from_db_ts(ts),
            end_date=None,
            created_at=from_db_ts(ts),
        )

    async def rename_book(self, book_id: str, name: str) -> bool:
        """장부 이름 변경

        Returns:
            대상 장부가 있었으면 True
        """
        cursor = await self.db.execute(
            "UPDATE books SET name = ? WHERE id = ?",
            (name, book_id),
        )
        return cursor.rowcount > 0

    async def close_book(self, book_id: str, end_date: datetime) -> bool:
        """장부 종료 시각 설정

        열린 장부(end_date IS NULL)만 대상.

        Returns:
            실제로 닫혔으면 True
        """
        cursor = await self.db.execute(
            "UPDATE books SET end_date = ? WHERE id = ? AND end_date IS NULL",
            (to_db_ts(end_date), book_id),
        )
        return cursor.rowcount > 0

    async def delete_book(self, book_id: str) -> bool:
        """장부 행 삭제 (소속 거래는 먼저 delete_book_transactions로 삭제할 것)"""
        cursor = await self.db.execute("DELETE FROM books WHERE id = ?", (book_id,))
        return cursor.rowcount > 0

    # =========================================================================
    # Transactions
    # =========================================================================

    async def list_transactions(
        self,
        book_id: str | None = None,
        include_archived: bool = False,
    ) -> list[Transaction]:
        """거래 목록 (발생 시각 내림차순)

        Args:
            book_id: 장부 필터 (None이면 전체 장부)
            include_archived: 보관된 거래 포함 여부
        """
        sql = f"SELECT {TRANSACTION_COLUMNS} FROM expenses WHERE 1 = 1"
        params: list[Any] = []

        if not include_archived:
            sql += " AND is_archived = 0"

        if book_id is not None:
            sql += " AND book_id = ?"
            params.append(book_id)

        sql += " ORDER BY date DESC, created_at DESC"

        rows = await self.db.fetchall(sql, tuple(params))
        return [_row_to_transaction(row) for row in rows]

    async def get_transaction(self, transaction_id: str) -> Transaction | None:
        row = await self.db.fetchone(
            f"SELECT {TRANSACTION_COLUMNS} FROM expenses WHERE id = ?",
            (transaction_id,),
        )
        return _row_to_transaction(row) if row else None

    async def insert_transaction(
        self,
        book_id: str,
        amount: Decimal,
        description: str,
        date: datetime,
        kind: TransactionKind,
        label_id: str | None,
        created_at: datetime,
    ) -> Transaction:
        """거래 생성 (항상 is_archived = 0)"""
        transaction_id = str(uuid4())
        amount = to_money(amount)
        await self.db.execute(
            f"""
            INSERT INTO expenses ({TRANSACTION_COLUMNS})
            VALUES (?, ?, ?, ?, ?, 0, ?, ?, ?)
            """,
            (
                transaction_id,
                str(amount),
                description,
                to_db_ts(date),
                kind.value,
                book_id,
                label_id,
                to_db_ts(created_at),
            ),
        )
        return Transaction(
            id=transaction_id,
            amount=amount,
            description=description,
            date=from_db_ts(to_db_ts(date)),
            kind=kind,
            is_archived=False,
            book_id=book_id,
            label_id=label_id,
            created_at=from_db_ts(to_db_ts(created_at)),
        )

    async def update_transaction(
        self,
        transaction_id: str,
        amount: Decimal,
        description: str,
        date: datetime,
        kind: TransactionKind,
        label_id: str | None,
    ) -> bool:
        """거래 수정

        소속 장부(book_id)와 보관 여부(is_archived)는 변경하지 않음.
        """
        cursor = await self.db.execute(
            """
            UPDATE expenses
            SET amount = ?, description = ?, date = ?, type = ?, label_id = ?
            WHERE id = ?
            """,
            (
                str(to_money(amount)),
                description,
                to_db_ts(date),
                kind.value,
                label_id,
                transaction_id,
            ),
        )
        return cursor.rowcount > 0

    async def delete_transaction(self, transaction_id: str) -> bool:
        cursor = await self.db.execute(
            "DELETE FROM expenses WHERE id = ?",
            (transaction_id,),
        )
        return cursor.rowcount > 0

    async def delete_book_transactions(self, book_id: str) -> int:
        """장부 소속 거래 전체 삭제

        Returns:
            삭제된 행 수
        """
        cursor = await self.db.execute(
            "DELETE FROM expenses WHERE book_id = ?",
            (book_id,),
        )
        return cursor.rowcount

    async def archive_open_transactions(self, book_id: str) -> int:
        """장부의 미보관 거래를 일괄 보관

        조회와 같은 조건(book_id, is_archived = 0)으로 갱신.

        Returns:
            보관 처리된 행 수
        """
        cursor = await self.db.execute(
            "UPDATE expenses SET is_archived = 1 WHERE book_id = ? AND is_archived = 0",
            (book_id,),
        )
        return cursor.rowcount

    # =========================================================================
    # Labels
    # =========================================================================

    async def list_labels(self) -> list[Label]:
        """라벨 목록 (생성 순)"""
        rows = await self.db.fetchall(
            f"SELECT {LABEL_COLUMNS} FROM labels ORDER BY created_at ASC, id ASC"
        )
        return [_row_to_label(row) for row in rows]

    async def get_label(self, label_id: str) -> Label | None:
        row = await self.db.fetchone(
            f"SELECT {LABEL_COLUMNS} FROM labels WHERE id = ?",
            (label_id,),
        )
        return _row_to_label(row) if row else None

    async def insert_label(self, name: str, color: str, created_at: datetime) -> Label:
        label_id = str(uuid4())
        ts = to_db_ts(created_at)
        await self.db.execute(
            f"INSERT INTO labels ({LABEL_COLUMNS}) VALUES (?, ?, ?, ?)",
            (label_id, name, color, ts),
        )
        return Label(id=label_id, name=name, color=color, created_at=from_db_ts(ts))

    async def update_label(self, label_id: str, name: str, color: str) -> bool:
        cursor = await self.db.execute(
            "UPDATE labels SET name = ?, color = ? WHERE id = ?",
            (name, color, label_id),
        )
        return cursor.rowcount > 0

    async def delete_label(self, label_id: str) -> bool:
        cursor = await self.db.execute("DELETE FROM labels WHERE id = ?", (label_id,))
        return cursor.rowcount > 0

    async def count_label_references(self, label_id: str) -> int:
        """라벨을 참조하는 거래 수"""
        row = await self.db.fetchone(
            "SELECT COUNT(*) FROM expenses WHERE label_id = ?",
            (label_id,),
        )
        return row[0] if row else 0

    async def detach_label(self, label_id: str) -> int:
        """라벨 참조 해제 (label_id → NULL)

        Returns:
            갱신된 거래 수
        """
        cursor = await self.db.execute(
            "UPDATE expenses SET label_id = NULL WHERE label_id = ?",
            (label_id,),
        )
        return cursor.rowcount
