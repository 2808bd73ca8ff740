"""
라벨 라우트

라벨 목록 / 생성 / 수정 / 삭제 API
"""

from fastapi import APIRouter, Depends

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings
from web.dependencies import get_app_settings, get_db
from web.models.requests import LabelRequest
from web.models.responses import LabelResponse, SuccessResponse
from web.services.label_service import LabelService

router = APIRouter(prefix="/api/labels", tags=["Labels"])


def _service(db: SQLiteAdapter, settings: Settings) -> LabelService:
    return LabelService(
        db,
        default_color=settings.default_label_color,
        delete_policy=settings.label_delete_policy,
    )


@router.get("", response_model=list[LabelResponse])
async def list_labels(
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> list[LabelResponse]:
    """라벨 목록 (생성 순)"""
    labels = await _service(db, settings).list_labels()
    return [LabelResponse.from_label(label) for label in labels]


@router.post("", response_model=LabelResponse, status_code=201)
async def create_label(
    request: LabelRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LabelResponse:
    """라벨 생성 (color 생략 시 기본 색상)"""
    label = await _service(db, settings).create_label(request.name, request.color)
    return LabelResponse.from_label(label)


@router.put("/{label_id}", response_model=LabelResponse)
async def update_label(
    label_id: str,
    request: LabelRequest,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> LabelResponse:
    """라벨 수정"""
    label = await _service(db, settings).update_label(label_id, request.name, request.color)
    return LabelResponse.from_label(label)


@router.delete("/{label_id}", response_model=SuccessResponse)
async def delete_label(
    label_id: str,
    db: SQLiteAdapter = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> SuccessResponse:
    """라벨 삭제

    **label_delete_policy**:
    - detach: 참조 거래는 라벨 없음으로 변경
    - reject: 참조 거래가 있으면 409
    """
    await _service(db, settings).delete_label(label_id)
    return SuccessResponse()
