"""
잔액 계산기 테스트

to_money / compute_balance / summarize
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from core.ledger.balance import compute_balance, summarize, to_money
from core.ledger.types import Transaction
from core.types import TransactionKind


def _tx(amount: str, kind: TransactionKind, tx_id: str = "t") -> Transaction:
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Transaction(
        id=tx_id,
        amount=Decimal(amount),
        description="test",
        date=ts,
        kind=kind,
        is_archived=False,
        book_id="b1",
        label_id=None,
        created_at=ts,
    )


class TestToMoney:
    """to_money 테스트"""

    def test_quantize_to_cents(self) -> None:
        assert to_money("10") == Decimal("10.00")
        assert to_money(Decimal("3.14159")) == Decimal("3.14")

    def test_round_half_up(self) -> None:
        """0.005는 올림"""
        assert to_money("0.005") == Decimal("0.01")
        assert to_money("2.675") == Decimal("2.68")

    def test_float_goes_through_str(self) -> None:
        """float 이진 오차를 가져오지 않음"""
        assert to_money(0.1) == Decimal("0.10")
        assert to_money(2.675) == Decimal("2.68")

    @pytest.mark.parametrize("value", ["abc", "", "NaN", "Infinity", True])
    def test_invalid(self, value: object) -> None:
        with pytest.raises(ValueError):
            to_money(value)  # type: ignore[arg-type]


class TestComputeBalance:
    """compute_balance 테스트"""

    def test_income_minus_expense(self) -> None:
        """100 수입 - 30 지출 - 20 지출 = 50"""
        txs = [
            _tx("100.00", TransactionKind.INCOME, "a"),
            _tx("30.00", TransactionKind.EXPENSE, "b"),
            _tx("20.00", TransactionKind.EXPENSE, "c"),
        ]

        assert compute_balance(txs) == Decimal("50.00")

    def test_negative_balance(self) -> None:
        txs = [
            _tx("20.00", TransactionKind.INCOME, "a"),
            _tx("50.00", TransactionKind.EXPENSE, "b"),
        ]

        assert compute_balance(txs) == Decimal("-30.00")

    def test_empty(self) -> None:
        assert compute_balance([]) == Decimal("0.00")

    def test_order_independent(self) -> None:
        """순서와 무관"""
        txs = [
            _tx("0.10", TransactionKind.INCOME, "a"),
            _tx("0.20", TransactionKind.INCOME, "b"),
            _tx("0.30", TransactionKind.EXPENSE, "c"),
        ]

        assert compute_balance(txs) == compute_balance(reversed(txs)) == Decimal("0.00")


class TestSummarize:
    def test_summary(self) -> None:
        txs = [
            _tx("100.00", TransactionKind.INCOME, "a"),
            _tx("12.34", TransactionKind.EXPENSE, "b"),
        ]

        summary = summarize(txs)

        assert summary.income == Decimal("100.00")
        assert summary.expense == Decimal("12.34")
        assert summary.balance == Decimal("87.66")
        assert summary.count == 2
