"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증.
키 이름은 프론트엔드와 동일 (bookId, carryForward, label_id, type, date).
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from core.constants import HEX_COLOR_PATTERN
from core.types import TransactionKind

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# NUMERIC(15, 2) 범위
Amount = Annotated[Decimal, Field(gt=0, le=Decimal("9999999999999.99"), description="금액 (> 0)")]

HexColor = Annotated[str, StringConstraints(pattern=HEX_COLOR_PATTERN)]


class BookCreateRequest(BaseModel):
    """장부 생성 요청"""

    name: NonEmptyStr = Field(..., description="장부 이름")


class BookRenameRequest(BaseModel):
    """장부 이름 변경 요청"""

    name: NonEmptyStr = Field(..., description="새 장부 이름")


class LabelRequest(BaseModel):
    """라벨 생성/수정 요청

    color 생략 시 기본 색상.
    """

    name: NonEmptyStr = Field(..., description="라벨 이름")
    color: HexColor | None = Field(default=None, description="표시 색상 (#rrggbb)")

    @field_validator("color", mode="before")
    @classmethod
    def _blank_color_is_default(cls, value: object) -> object:
        return value or None


class _ExpenseFields(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: Amount
    description: NonEmptyStr = Field(..., description="설명")
    date: datetime | None = Field(default=None, description="발생 시각 (생략 시 현재)")
    kind: TransactionKind = Field(
        default=TransactionKind.EXPENSE,
        alias="type",
        description="expense / income",
    )
    label_id: str | None = Field(default=None, description="라벨 ID")

    @field_validator("label_id", mode="before")
    @classmethod
    def _blank_label_is_none(cls, value: object) -> object:
        return value or None


class ExpenseCreateRequest(_ExpenseFields):
    """거래 생성 요청"""

    book_id: NonEmptyStr = Field(..., alias="bookId", description="소속 장부 ID")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "amount": 25000,
                    "description": "Lunch",
                    "type": "expense",
                    "bookId": "9b2f7c1e-...",
                    "label_id": None,
                }
            ]
        },
    )


class ExpenseUpdateRequest(_ExpenseFields):
    """거래 수정 요청 (소속 장부 / 보관 여부는 변경 불가)"""

    pass


class CloseBookRequest(BaseModel):
    """장부 마감 요청"""

    model_config = ConfigDict(populate_by_name=True)

    book_id: NonEmptyStr = Field(..., alias="bookId", description="마감할 장부 ID")
    carry_forward: bool = Field(
        default=False,
        alias="carryForward",
        description="잔액을 새 장부로 이월",
    )
