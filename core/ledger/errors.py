"""
장부 오류 분류

호출자가 입력 오류(재시도 불필요)와 저장소 오류(재시도 가능)를 구분할 수 있도록
각 예외에 kind / status_code / retryable 속성을 둠.
"""


class LedgerError(Exception):
    """장부 오류 기본 클래스"""

    kind: str = "error"
    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, object]:
        """API 오류 응답 본문"""
        return {
            "error": self.message,
            "kind": self.kind,
            "retryable": self.retryable,
        }


class ValidationError(LedgerError):
    """필수 값 누락 / 빈 문자열 / 0 이하 금액 등 입력 오류"""

    kind = "validation"
    status_code = 400


class BookClosedError(ValidationError):
    """이미 마감된 장부를 다시 마감하려는 경우"""

    def __init__(self, book_id: str):
        super().__init__(f"Book already closed: {book_id}")
        self.book_id = book_id


class LabelInUseError(ValidationError):
    """reject 정책에서 거래가 참조 중인 라벨 삭제 시도"""

    kind = "conflict"
    status_code = 409

    def __init__(self, label_id: str, reference_count: int):
        super().__init__(
            f"Label {label_id} is referenced by {reference_count} transaction(s)"
        )
        self.label_id = label_id
        self.reference_count = reference_count


class NotFoundError(LedgerError):
    """대상 ID가 존재하지 않음"""

    kind = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class StorageError(LedgerError):
    """저장소 오류 (연결 실패, 제약 위반, 락 충돌)

    롤백이 보장되므로 호출자가 안전하게 재시도 가능.
    """

    kind = "storage"
    status_code = 500
    retryable = True
