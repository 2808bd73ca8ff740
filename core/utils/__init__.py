"""
유틸리티 패키지

타임존 처리 등 공통 유틸리티
"""

from core.utils.timezone import (
    now_utc,
    ensure_utc,
    to_db_ts,
    from_db_ts,
    to_local,
)

__all__ = [
    "now_utc",
    "ensure_utc",
    "to_db_ts",
    "from_db_ts",
    "to_local",
]
