"""
타입 정의 모듈

Enum 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class TransactionKind(str, Enum):
    """거래 종류 (지출 / 수입)

    잔액 기여 부호는 금액이 아닌 이 값으로만 결정됨.
    """

    EXPENSE = "expense"
    INCOME = "income"


class LabelDeletePolicy(str, Enum):
    """라벨 삭제 시 참조 거래 처리 방식"""

    DETACH = "detach"  # 참조 거래의 label_id를 NULL로
    REJECT = "reject"  # 참조 거래가 있으면 삭제 거부


class ChartView(str, Enum):
    """지출 차트 기간 단위"""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
