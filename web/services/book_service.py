"""
장부 서비스

books 테이블 CRUD. 삭제는 소속 거래까지 하나의 트랜잭션으로 처리.
"""

import logging
import sqlite3
from datetime import datetime
from typing import Callable

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.errors import LedgerError, NotFoundError, StorageError
from core.ledger.store import LedgerStore
from core.ledger.types import Book
from core.ledger.validation import require_text
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


class BookService:
    """장부 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        clock: 현재 시각 함수
    """

    def __init__(self, db: SQLiteAdapter, clock: Callable[[], datetime] = now_utc):
        self.db = db
        self.store = LedgerStore(db)
        self._clock = clock

    async def list_books(self) -> list[Book]:
        """장부 목록 (최신 시작일 순)"""
        return await self.store.list_books()

    async def get_book(self, book_id: str) -> Book:
        book = await self.store.get_book(book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    async def create_book(self, name: str) -> Book:
        """장부 생성 (시작 시각 = 현재)"""
        name = require_text(name, "name")

        async with self.db.transaction():
            book = await self.store.insert_book(name, self._clock())

        logger.info(f"Book created: {book.id}", extra={"book_name": name})
        return book

    async def rename_book(self, book_id: str, name: str) -> Book:
        """장부 이름 변경

        Raises:
            ValidationError: 빈 이름
            NotFoundError: 장부 없음
        """
        name = require_text(name, "name")

        async with self.db.transaction():
            if not await self.store.rename_book(book_id, name):
                raise NotFoundError("Book", book_id)
            book = await self.store.get_book(book_id)

        assert book is not None
        return book

    async def delete_book(self, book_id: str) -> int:
        """장부 삭제 (소속 거래 → 장부 순서)

        둘 중 하나라도 실패하면 전체 롤백.

        Returns:
            함께 삭제된 거래 수

        Raises:
            NotFoundError: 장부 없음 (거래 삭제도 롤백)
            StorageError: 저장소 오류 (전체 롤백됨, 재시도 가능)
        """
        try:
            async with self.db.transaction(immediate=True):
                deleted = await self.store.delete_book_transactions(book_id)
                if not await self.store.delete_book(book_id):
                    raise NotFoundError("Book", book_id)
        except LedgerError:
            raise
        except sqlite3.Error as e:
            logger.error(f"장부 삭제 실패 (롤백): {book_id}: {e}")
            raise StorageError(f"Failed to delete book: {e}") from e

        logger.info(f"Book deleted: {book_id}", extra={"deleted_transactions": deleted})
        return deleted
