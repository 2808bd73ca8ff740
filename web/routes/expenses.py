"""
거래 내역 라우트

거래 조회 / 생성 / 수정 / 삭제 및 장부 마감 API
"""

from fastapi import APIRouter, Depends, Query

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from core.ledger.lifecycle import BookLifecycleManager
from web.dependencies import get_app_settings, get_db
from web.models.requests import CloseBookRequest, ExpenseCreateRequest, ExpenseUpdateRequest
from web.models.responses import (
    CloseBookResponse,
    ErrorResponse,
    SuccessResponse,
    TransactionResponse,
)
from web.services.expense_service import ExpenseService

router = APIRouter(prefix="/api/expenses", tags=["Expenses"])


@router.get("", response_model=list[TransactionResponse])
async def list_expenses(
    book_id: str | None = Query(default=None, alias="bookId"),
    include_archived: bool = Query(default=False, alias="includeArchived"),
    db: SQLiteAdapter = Depends(get_db),
) -> list[TransactionResponse]:
    """거래 목록 (발생 시각 내림차순)

    bookId 생략 시 모든 장부의 미보관 거래.
    """
    service = ExpenseService(db)
    transactions = await service.list_transactions(
        book_id=book_id or None,
        include_archived=include_archived,
    )
    return [TransactionResponse.from_transaction(tx) for tx in transactions]


@router.post(
    "/close-book",
    response_model=CloseBookResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def close_book(
    request: CloseBookRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> CloseBookResponse:
    """장부 마감

    미보관 거래 보관 → 장부 종료 → 새 장부 생성 → (carryForward) 잔액 이월.
    전 과정이 하나의 트랜잭션.
    """
    manager = BookLifecycleManager(db, successor_name=settings.successor_book_name)
    result = await manager.close_book(request.book_id, carry_forward=request.carry_forward)
    return CloseBookResponse(balance=result.balance, new_book_id=result.new_book_id)


@router.post("", response_model=TransactionResponse, status_code=201)
async def create_expense(
    request: ExpenseCreateRequest,
    db: SQLiteAdapter = Depends(get_db),
) -> TransactionResponse:
    """거래 생성"""
    service = ExpenseService(db)
    tx = await service.create_transaction(
        amount=request.amount,
        description=request.description,
        book_id=request.book_id,
        date=request.date,
        kind=request.kind,
        label_id=request.label_id,
    )
    return TransactionResponse.from_transaction(tx)


@router.put("/{expense_id}", response_model=TransactionResponse)
async def update_expense(
    expense_id: str,
    request: ExpenseUpdateRequest,
    db: SQLiteAdapter = Depends(get_db),
) -> TransactionResponse:
    """거래 수정"""
    service = ExpenseService(db)
    tx = await service.update_transaction(
        expense_id,
        amount=request.amount,
        description=request.description,
        date=request.date,
        kind=request.kind,
        label_id=request.label_id,
    )
    return TransactionResponse.from_transaction(tx)


@router.delete("/{expense_id}", response_model=SuccessResponse)
async def delete_expense(
    expense_id: str,
    db: SQLiteAdapter = Depends(get_db),
) -> SuccessResponse:
    """거래 삭제"""
    service = ExpenseService(db)
    await service.delete_transaction(expense_id)
    return SuccessResponse()
