"""
장부 라우트

장부 목록 / 생성 / 이름 변경 / 삭제 API
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from web.dependencies import get_db
from web.models.requests import BookCreateRequest, BookRenameRequest
from web.models.responses import BookResponse, SuccessResponse
from web.services.book_service import BookService

router = APIRouter(prefix="/api/books", tags=["Books"])


@router.get("", response_model=list[BookResponse])
async def list_books(
    db: SQLiteAdapter = Depends(get_db),
) -> list[BookResponse]:
    """장부 목록 (최신 시작일 순)"""
    service = BookService(db)
    return [BookResponse.from_book(book) for book in await service.list_books()]


@router.post("", response_model=BookResponse, status_code=201)
async def create_book(
    request: BookCreateRequest,
    db: SQLiteAdapter = Depends(get_db),
) -> BookResponse:
    """장부 생성 (시작 시각 = 현재)"""
    service = BookService(db)
    book = await service.create_book(request.name)
    return BookResponse.from_book(book)


@router.put("/{book_id}", response_model=BookResponse)
async def rename_book(
    book_id: str,
    request: BookRenameRequest,
    db: SQLiteAdapter = Depends(get_db),
) -> BookResponse:
    """장부 이름 변경"""
    service = BookService(db)
    book = await service.rename_book(book_id, request.name)
    return BookResponse.from_book(book)


@router.delete("/{book_id}", response_model=SuccessResponse)
async def delete_book(
    book_id: str,
    db: SQLiteAdapter = Depends(get_db),
) -> SuccessResponse:
    """장부 삭제

    소속 거래를 먼저 삭제한 뒤 장부 삭제 (하나의 트랜잭션).
    """
    service = BookService(db)
    await service.delete_book(book_id)
    return SuccessResponse()
