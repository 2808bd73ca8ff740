"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
요청마다 별도 DB 연결을 열고 응답 후 닫음.
"""

from typing import AsyncGenerator

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import Settings, get_settings


def get_app_settings() -> Settings:
    """애플리케이션 설정 반환"""
    return get_settings()


async def get_db() -> AsyncGenerator[SQLiteAdapter, None]:
    """DB 세션 반환

    트랜잭션 경계는 서비스 / 마감 관리자가 소유.
    """
    settings = get_settings()
    async with SQLiteAdapter(settings.db_path) as db:
        yield db
