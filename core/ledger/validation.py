"""
입력 검증 헬퍼

API 스키마 검증과 별개로 서비스 계층에서도 같은 규칙을 강제.
"""

from decimal import Decimal

from core.constants import Money
from core.ledger.balance import to_money
from core.ledger.errors import ValidationError


def require_text(value: str | None, field: str) -> str:
    """비어 있지 않은 문자열 검증 (앞뒤 공백 제거)"""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def require_amount(value: Decimal | int | float | str | None) -> Decimal:
    """양수 금액 검증 (소수점 2자리로 정규화 후 > 0)"""
    if value is None:
        raise ValidationError("amount is required")
    try:
        amount = to_money(value)
    except ValueError as e:
        raise ValidationError(str(e)) from e
    if amount <= Money.ZERO:
        raise ValidationError("amount must be greater than 0")
    return amount
