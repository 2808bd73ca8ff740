"""
입력 검증 헬퍼 테스트
"""

from decimal import Decimal

import pytest

from core.ledger.errors import ValidationError
from core.ledger.validation import require_amount, require_text


class TestRequireText:
    def test_strips(self) -> None:
        assert require_text("  Lunch ", "description") == "Lunch"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank(self, value: str | None) -> None:
        with pytest.raises(ValidationError, match="description is required"):
            require_text(value, "description")


class TestRequireAmount:
    """require_amount 테스트"""

    def test_valid(self) -> None:
        assert require_amount("12.5") == Decimal("12.50")

    def test_missing(self) -> None:
        with pytest.raises(ValidationError, match="amount is required"):
            require_amount(None)

    @pytest.mark.parametrize("value", [0, "-1", "0.004"])
    def test_not_positive(self, value: object) -> None:
        """0 이하 (반올림 후 0 포함) 거부"""
        with pytest.raises(ValidationError, match="greater than 0"):
            require_amount(value)  # type: ignore[arg-type]

    def test_not_a_number(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            require_amount("ten")

        assert exc_info.value.status_code == 400
        assert exc_info.value.retryable is False
