"""
Web 서비스 패키지

비즈니스 로직 처리
"""

from web.services.book_service import BookService
from web.services.label_service import LabelService
from web.services.expense_service import ExpenseService
from web.services.summary_service import SummaryService

__all__ = [
    "BookService",
    "LabelService",
    "ExpenseService",
    "SummaryService",
]
