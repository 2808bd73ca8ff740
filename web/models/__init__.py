"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    BookCreateRequest,
    BookRenameRequest,
    LabelRequest,
    ExpenseCreateRequest,
    ExpenseUpdateRequest,
    CloseBookRequest,
)
from web.models.responses import (
    HealthResponse,
    ErrorResponse,
    SuccessResponse,
    BookResponse,
    LabelResponse,
    TransactionResponse,
    CloseBookResponse,
    SummaryResponse,
    SpendingSeriesResponse,
    LabelBreakdownResponse,
)

__all__ = [
    # Requests
    "BookCreateRequest",
    "BookRenameRequest",
    "LabelRequest",
    "ExpenseCreateRequest",
    "ExpenseUpdateRequest",
    "CloseBookRequest",
    # Responses
    "HealthResponse",
    "ErrorResponse",
    "SuccessResponse",
    "BookResponse",
    "LabelResponse",
    "TransactionResponse",
    "CloseBookResponse",
    "SummaryResponse",
    "SpendingSeriesResponse",
    "LabelBreakdownResponse",
]
