"""
타임존 유틸리티

내부 저장: UTC ISO-8601 문자열 | 요약/차트 집계: 설정된 표시 타임존
"""

from datetime import datetime, timezone, tzinfo


def now_utc() -> datetime:
    """현재 UTC 시간 반환 (타임존 명시)

    datetime.now(timezone.utc)의 축약형.

    Returns:
        현재 UTC 시간 (tzinfo=timezone.utc)
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """datetime을 UTC로 정규화

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)

    Returns:
        UTC 타임존의 datetime
    """
    if dt.tzinfo is None:
        # naive datetime은 UTC로 간주
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_db_ts(dt: datetime) -> str:
    """DB 저장용 문자열로 변환

    모든 행이 같은 포맷(UTC, 마이크로초 포함)이어야 문자열 정렬이 시간 순서와 일치.

    Example:
        >>> to_db_ts(datetime(2026, 2, 20, 16, 0, 0, tzinfo=timezone.utc))
        '2026-02-20T16:00:00.000000+00:00'
    """
    return ensure_utc(dt).isoformat(timespec="microseconds")


def from_db_ts(value: str | None) -> datetime | None:
    """DB 문자열을 UTC datetime으로 변환"""
    if value is None:
        return None
    return ensure_utc(datetime.fromisoformat(value))


def to_local(dt: datetime, tz: tzinfo) -> datetime:
    """UTC datetime을 표시 타임존으로 변환

    Args:
        dt: datetime 객체 (naive면 UTC로 간주)
        tz: 표시 타임존

    Returns:
        표시 타임존의 datetime
    """
    return ensure_utc(dt).astimezone(tz)
