"""
잔액 계산기

부동소수점 대신 Decimal로만 계산 (소수점 2자리 고정).
부수효과 없는 순수 함수.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from core.constants import Money
from core.ledger.types import Transaction
from core.types import TransactionKind


@dataclass(frozen=True)
class BalanceSummary:
    """수입/지출 합계"""

    income: Decimal
    expense: Decimal
    balance: Decimal
    count: int


def to_money(value: Decimal | int | float | str) -> Decimal:
    """금액을 소수점 2자리 Decimal로 변환

    float은 str을 거쳐 변환하여 이진 표현 오차를 가져오지 않음.

    Args:
        value: 금액 (Decimal, int, float, 숫자 문자열)

    Returns:
        0.01 단위로 반올림(ROUND_HALF_UP)된 Decimal

    Raises:
        ValueError: 숫자로 해석할 수 없거나 유한하지 않은 값
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = value if isinstance(value, Decimal) else Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount.quantize(Money.QUANTUM, rounding=ROUND_HALF_UP)


def compute_balance(transactions: Iterable[Transaction]) -> Decimal:
    """순잔액 계산: Σ수입 − Σ지출

    순서와 무관. 저장된 금액의 부호가 아닌 kind로 부호 결정.
    """
    total = Money.ZERO
    for tx in transactions:
        total += tx.signed_amount
    return to_money(total)


def summarize(transactions: Iterable[Transaction]) -> BalanceSummary:
    """수입/지출/잔액/건수 요약"""
    income = Money.ZERO
    expense = Money.ZERO
    count = 0
    for tx in transactions:
        if tx.kind == TransactionKind.INCOME:
            income += tx.amount
        else:
            expense += tx.amount
        count += 1
    return BalanceSummary(
        income=to_money(income),
        expense=to_money(expense),
        balance=to_money(income - expense),
        count=count,
    )
