"""
장부 (Ledger) 시스템

기간 단위 장부(Book)에 수입/지출 거래를 기록하고,
장부 마감 시 잔액을 계산하여 다음 장부로 이월.

사용 예시:
```python
from core.ledger import BookLifecycleManager, LedgerStore, compute_balance

# 잔액 조회
store = LedgerStore(db)
balance = compute_balance(await store.list_transactions(book_id=book_id))

# 장부 마감 + 이월
manager = BookLifecycleManager(db)
result = await manager.close_book(book_id, carry_forward=True)
```
"""

from core.ledger.balance import BalanceSummary, compute_balance, summarize, to_money
from core.ledger.errors import (
    BookClosedError,
    LabelInUseError,
    LedgerError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from core.ledger.lifecycle import BookLifecycleManager, SeedEntry, build_seed_entry
from core.ledger.schema import init_ledger_schema
from core.ledger.store import LedgerStore
from core.ledger.types import Book, CloseResult, Label, Transaction

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "BookLifecycleManager",
    # 레코드
    "Book",
    "Transaction",
    "Label",
    "CloseResult",
    "SeedEntry",
    "BalanceSummary",
    # 함수
    "compute_balance",
    "summarize",
    "to_money",
    "build_seed_entry",
    "init_ledger_schema",
    # 오류
    "LedgerError",
    "ValidationError",
    "BookClosedError",
    "LabelInUseError",
    "NotFoundError",
    "StorageError",
]
