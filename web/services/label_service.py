"""
라벨 서비스

labels 테이블 CRUD.
삭제 시 참조 거래 처리는 설정(label_delete_policy)을 따름.
"""

import logging
from datetime import datetime
from typing import Callable

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Defaults
from core.ledger.errors import LabelInUseError, NotFoundError
from core.ledger.store import LedgerStore
from core.ledger.types import Label
from core.ledger.validation import require_text
from core.types import LabelDeletePolicy
from core.utils.timezone import now_utc

logger = logging.getLogger(__name__)


class LabelService:
    """라벨 서비스

    Args:
        db: SQLite 어댑터 (쓰기 가능)
        default_color: color 생략 시 사용할 색상
        delete_policy: 참조 중인 라벨 삭제 정책 (detach / reject)
        clock: 현재 시각 함수
    """

    def __init__(
        self,
        db: SQLiteAdapter,
        default_color: str = Defaults.LABEL_COLOR,
        delete_policy: LabelDeletePolicy = LabelDeletePolicy.DETACH,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.db = db
        self.store = LedgerStore(db)
        self.default_color = default_color
        self.delete_policy = delete_policy
        self._clock = clock

    async def list_labels(self) -> list[Label]:
        """라벨 목록 (생성 순)"""
        return await self.store.list_labels()

    async def create_label(self, name: str, color: str | None = None) -> Label:
        name = require_text(name, "name")

        async with self.db.transaction():
            label = await self.store.insert_label(
                name,
                color or self.default_color,
                self._clock(),
            )

        logger.info(f"Label created: {label.id}", extra={"label_name": name})
        return label

    async def update_label(
        self,
        label_id: str,
        name: str,
        color: str | None = None,
    ) -> Label:
        """라벨 수정

        color 생략 시 기본 색상으로 되돌림.

        Raises:
            ValidationError: 빈 이름
            NotFoundError: 라벨 없음
        """
        name = require_text(name, "name")

        async with self.db.transaction():
            if not await self.store.update_label(label_id, name, color or self.default_color):
                raise NotFoundError("Label", label_id)
            label = await self.store.get_label(label_id)

        assert label is not None
        return label

    async def delete_label(self, label_id: str) -> int:
        """라벨 삭제

        - detach: 참조 거래의 label_id를 NULL로 바꾼 뒤 삭제 (한 트랜잭션)
        - reject: 참조 거래가 있으면 LabelInUseError

        Returns:
            참조 해제된 거래 수

        Raises:
            NotFoundError: 라벨 없음
            LabelInUseError: reject 정책에서 참조 거래 존재
        """
        async with self.db.transaction(immediate=True):
            if await self.store.get_label(label_id) is None:
                raise NotFoundError("Label", label_id)

            references = await self.store.count_label_references(label_id)
            detached = 0
            if references:
                if self.delete_policy == LabelDeletePolicy.REJECT:
                    raise LabelInUseError(label_id, references)
                detached = await self.store.detach_label(label_id)

            await self.store.delete_label(label_id)

        logger.info(f"Label deleted: {label_id}", extra={"detached_transactions": detached})
        return detached
