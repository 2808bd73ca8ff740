"""
장부 스키마 초기화

Web 시작 시 자동으로 books / labels / expenses 테이블과 인덱스 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

주의: expenses → books 외래 키에 ON DELETE CASCADE를 쓰지 않음.
장부 삭제 시 거래 삭제는 애플리케이션 트랜잭션에서 명시적으로 수행.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """장부 스키마 초기화 (테이블 + 인덱스)

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    await _create_ledger_indexes(db)
    await db.commit()
    logger.info("장부 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """장부 테이블 생성"""

    # books 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS books (
            id               TEXT PRIMARY KEY,
            name             TEXT NOT NULL,
            start_date       TEXT NOT NULL,
            end_date         TEXT,
            created_at       TEXT NOT NULL
        )
    """)

    # labels 테이블
    await db.execute("""
        CREATE TABLE IF NOT EXISTS labels (
            id               TEXT PRIMARY KEY,
            name             TEXT NOT NULL,
            color            TEXT NOT NULL,
            created_at       TEXT NOT NULL
        )
    """)

    # expenses 테이블 (수입/지출 거래)
    await db.execute("""
        CREATE TABLE IF NOT EXISTS expenses (
            id               TEXT PRIMARY KEY,
            amount           TEXT NOT NULL,
            description      TEXT NOT NULL,
            date             TEXT NOT NULL,
            type             TEXT NOT NULL DEFAULT 'expense'
                             CHECK (type IN ('expense', 'income')),
            is_archived      INTEGER NOT NULL DEFAULT 0,
            book_id          TEXT NOT NULL,
            label_id         TEXT,
            created_at       TEXT NOT NULL,
            FOREIGN KEY (book_id) REFERENCES books(id),
            FOREIGN KEY (label_id) REFERENCES labels(id)
        )
    """)


async def _create_ledger_indexes(db: "SQLiteAdapter") -> None:
    """조회/마감용 인덱스 생성"""

    # 마감 시 (book_id, is_archived) 조건으로 조회 + 일괄 갱신
    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_expenses_book_archived
        ON expenses(book_id, is_archived)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_expenses_date
        ON expenses(date)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_expenses_label
        ON expenses(label_id)
    """)

    await db.execute("""
        CREATE INDEX IF NOT EXISTS ix_books_start_date
        ON books(start_date)
    """)
