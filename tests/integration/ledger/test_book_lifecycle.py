"""
장부 마감 통합 테스트

잔액 계산, 일괄 보관, 새 장부 생성, 잔액 이월, 원자성
"""

import asyncio
import sqlite3
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import SeedDescriptions
from core.ledger.errors import BookClosedError, NotFoundError, StorageError, ValidationError
from core.ledger.lifecycle import BookLifecycleManager
from core.ledger.store import LedgerStore
from core.ledger.types import Book
from core.types import TransactionKind
from web.services.expense_service import ExpenseService

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
CLOSE_AT = datetime(2024, 2, 1, 0, 0, tzinfo=timezone.utc)


async def _seed_book(
    db: SQLiteAdapter,
    entries: list[tuple[str, TransactionKind]],
    name: str = "January",
) -> Book:
    """장부 + 거래 생성 후 커밋"""
    store = LedgerStore(db)
    book = await store.insert_book(name, T0)
    for i, (amount, kind) in enumerate(entries):
        ts = T0 + timedelta(minutes=i)
        await store.insert_transaction(book.id, Decimal(amount), f"tx {i}", ts, kind, None, ts)
    await db.commit()
    return book


@pytest.fixture
def manager(db: SQLiteAdapter) -> BookLifecycleManager:
    return BookLifecycleManager(db, successor_name="New Book", clock=lambda: CLOSE_AT)


class TestCloseWithCarryForward:
    """잔액 이월 마감"""

    @pytest.mark.asyncio
    async def test_positive_balance(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        """100 수입, 30/20 지출 → 50 이월 (수입)"""
        book = await _seed_book(db, [
            ("100.00", TransactionKind.INCOME),
            ("30.00", TransactionKind.EXPENSE),
            ("20.00", TransactionKind.EXPENSE),
        ])

        result = await manager.close_book(book.id, carry_forward=True)

        assert result.balance == Decimal("50.00")
        assert result.closed_book_id == book.id

        store = LedgerStore(db)
        closed = await store.get_book(book.id)
        assert closed.end_date == CLOSE_AT

        archived = await store.list_transactions(book_id=book.id, include_archived=True)
        assert len(archived) == 3
        assert all(t.is_archived for t in archived)
        assert await store.list_transactions(book_id=book.id) == []

        new_book = await store.get_book(result.new_book_id)
        assert new_book.is_open is True
        assert new_book.name == "New Book"
        assert new_book.start_date == CLOSE_AT

        seeds = await store.list_transactions(book_id=new_book.id)
        assert len(seeds) == 1
        assert seeds[0].id == result.seed_transaction_id
        assert seeds[0].kind == TransactionKind.INCOME
        assert seeds[0].amount == Decimal("50.00")
        assert seeds[0].description == SeedDescriptions.CARRIED_FORWARD
        assert seeds[0].label_id is None

    @pytest.mark.asyncio
    async def test_negative_balance(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        """20 수입, 50 지출 → 30 적자 이월 (지출)"""
        book = await _seed_book(db, [
            ("20.00", TransactionKind.INCOME),
            ("50.00", TransactionKind.EXPENSE),
        ])

        result = await manager.close_book(book.id, carry_forward=True)

        assert result.balance == Decimal("-30.00")

        seeds = await LedgerStore(db).list_transactions(book_id=result.new_book_id)
        assert len(seeds) == 1
        assert seeds[0].kind == TransactionKind.EXPENSE
        assert seeds[0].amount == Decimal("30.00")
        assert seeds[0].description == SeedDescriptions.DEFICIT

    @pytest.mark.asyncio
    async def test_zero_balance_creates_no_seed(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        book = await _seed_book(db, [
            ("40.00", TransactionKind.INCOME),
            ("40.00", TransactionKind.EXPENSE),
        ])

        result = await manager.close_book(book.id, carry_forward=True)

        assert result.balance == Decimal("0.00")
        assert result.seed_transaction_id is None
        assert await LedgerStore(db).list_transactions(book_id=result.new_book_id) == []

    @pytest.mark.asyncio
    async def test_empty_book(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        """거래 없는 장부도 마감 가능"""
        book = await _seed_book(db, [])

        result = await manager.close_book(book.id, carry_forward=True)

        assert result.balance == Decimal("0.00")
        assert (await LedgerStore(db).get_book(book.id)).is_open is False


class TestCloseWithoutCarryForward:
    @pytest.mark.asyncio
    async def test_new_book_is_empty(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        """이월하지 않으면 잔액은 반환만 하고 새 장부는 비어 있음"""
        book = await _seed_book(db, [("100.00", TransactionKind.INCOME)])

        result = await manager.close_book(book.id)

        assert result.balance == Decimal("100.00")
        assert result.seed_transaction_id is None
        assert await LedgerStore(db).list_transactions(book_id=result.new_book_id) == []


class TestCloseScope:
    """다른 장부에 영향 없음"""

    @pytest.mark.asyncio
    async def test_other_books_untouched(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        target = await _seed_book(db, [("10.00", TransactionKind.INCOME)], name="Target")
        other = await _seed_book(db, [("99.00", TransactionKind.EXPENSE)], name="Other")

        result = await manager.close_book(target.id, carry_forward=True)

        assert result.balance == Decimal("10.00")

        store = LedgerStore(db)
        assert (await store.get_book(other.id)).is_open is True
        other_txs = await store.list_transactions(book_id=other.id)
        assert len(other_txs) == 1
        assert other_txs[0].is_archived is False

    @pytest.mark.asyncio
    async def test_already_archived_not_counted(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        """보관된 거래는 잔액에서 제외"""
        book = await _seed_book(db, [("500.00", TransactionKind.INCOME)])
        store = LedgerStore(db)
        await store.archive_open_transactions(book.id)
        await store.insert_transaction(book.id, Decimal("5.00"), "late", T0, TransactionKind.EXPENSE, None, T0)
        await db.commit()

        result = await manager.close_book(book.id, carry_forward=True)

        assert result.balance == Decimal("-5.00")


class TestCloseErrors:
    """마감 실패 케이스"""

    @pytest.mark.asyncio
    async def test_missing_book_id(self, manager: BookLifecycleManager) -> None:
        with pytest.raises(ValidationError, match="bookId is required"):
            await manager.close_book("")

    @pytest.mark.asyncio
    async def test_unknown_book(self, manager: BookLifecycleManager) -> None:
        with pytest.raises(NotFoundError):
            await manager.close_book("does-not-exist")

    @pytest.mark.asyncio
    async def test_close_twice(self, db: SQLiteAdapter, manager: BookLifecycleManager) -> None:
        """이미 마감된 장부는 거부, 새 장부 추가 생성 없음"""
        book = await _seed_book(db, [("10.00", TransactionKind.INCOME)])
        await manager.close_book(book.id, carry_forward=True)
        books_before = await LedgerStore(db).list_books()

        with pytest.raises(BookClosedError) as exc_info:
            await manager.close_book(book.id, carry_forward=True)

        assert exc_info.value.status_code == 400
        assert len(await LedgerStore(db).list_books()) == len(books_before)


class TestCloseAtomicity:
    """중간 실패 시 전체 롤백"""

    @pytest.mark.asyncio
    async def test_failure_rolls_back_everything(
        self,
        db: SQLiteAdapter,
        manager: BookLifecycleManager,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        book = await _seed_book(db, [
            ("100.00", TransactionKind.INCOME),
            ("30.00", TransactionKind.EXPENSE),
        ])

        async def failing_insert_book(name: str, start_date: datetime) -> Book:
            raise sqlite3.OperationalError("disk I/O error")

        monkeypatch.setattr(manager.store, "insert_book", failing_insert_book)

        with pytest.raises(StorageError) as exc_info:
            await manager.close_book(book.id, carry_forward=True)

        assert exc_info.value.retryable is True

        store = LedgerStore(db)
        assert (await store.get_book(book.id)).is_open is True
        txs = await store.list_transactions(book_id=book.id)
        assert len(txs) == 2
        assert not any(t.is_archived for t in txs)
        assert [b.id for b in await store.list_books()] == [book.id]

    @pytest.mark.asyncio
    async def test_retry_after_failure(
        self,
        db: SQLiteAdapter,
        manager: BookLifecycleManager,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """롤백 후 재시도하면 정상 마감"""
        book = await _seed_book(db, [("25.00", TransactionKind.INCOME)])

        async def failing_insert_book(name: str, start_date: datetime) -> Book:
            raise sqlite3.OperationalError("database is locked")

        monkeypatch.setattr(manager.store, "insert_book", failing_insert_book)
        with pytest.raises(StorageError):
            await manager.close_book(book.id, carry_forward=True)

        monkeypatch.undo()
        result = await manager.close_book(book.id, carry_forward=True)

        assert result.balance == Decimal("25.00")
        assert result.seed_transaction_id is not None


class TestCloseSerialization:
    """다른 연결에서의 동시 거래 추가와 직렬화"""

    @pytest.mark.asyncio
    async def test_concurrent_add_waits_for_close(
        self,
        db: SQLiteAdapter,
        manager: BookLifecycleManager,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """마감 중 추가된 거래는 잔액에 섞이지 않고 마감 이후 미보관 상태로 기록"""
        book = await _seed_book(db, [("5.00", TransactionKind.INCOME)])

        archiving = asyncio.Event()
        original_archive = manager.store.archive_open_transactions

        async def slow_archive(book_id: str) -> int:
            archiving.set()
            await asyncio.sleep(0.2)
            return await original_archive(book_id)

        monkeypatch.setattr(manager.store, "archive_open_transactions", slow_archive)

        async with SQLiteAdapter(db.db_path) as other:
            expenses = ExpenseService(other, clock=lambda: CLOSE_AT)

            async def add_during_close():
                # 마감 트랜잭션이 쓰기 락을 잡은 뒤 추가 시도
                await archiving.wait()
                return await expenses.create_transaction(
                    "7.00", "late", book.id, kind=TransactionKind.INCOME
                )

            result, late = await asyncio.gather(
                manager.close_book(book.id, carry_forward=True),
                add_during_close(),
            )

        assert result.balance == Decimal("5.00")

        store = LedgerStore(db)
        rows = {
            t.description: t
            for t in await store.list_transactions(book_id=book.id, include_archived=True)
        }
        assert rows["tx 0"].is_archived is True
        assert rows["late"].id == late.id
        assert rows["late"].is_archived is False

        seeds = await store.list_transactions(book_id=result.new_book_id)
        assert [s.amount for s in seeds] == [Decimal("5.00")]
