"""
core/utils/timezone.py 테스트
"""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from core.utils.timezone import ensure_utc, from_db_ts, now_utc, to_db_ts, to_local


class TestNowUtc:
    def test_has_utc_tzinfo(self) -> None:
        """UTC 타임존 명시"""
        assert now_utc().tzinfo == timezone.utc


class TestEnsureUtc:
    """ensure_utc 테스트"""

    def test_naive_is_treated_as_utc(self) -> None:
        """naive datetime은 UTC로 간주"""
        dt = ensure_utc(datetime(2024, 1, 1, 12, 0))

        assert dt == datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def test_aware_is_converted(self) -> None:
        """다른 타임존은 UTC로 변환"""
        kst = timezone(timedelta(hours=9))
        dt = ensure_utc(datetime(2024, 1, 1, 9, 0, tzinfo=kst))

        assert dt.hour == 0
        assert dt.tzinfo == timezone.utc


class TestDbTimestamp:
    """to_db_ts / from_db_ts 테스트"""

    def test_format_includes_microseconds(self) -> None:
        """항상 마이크로초까지 포함"""
        value = to_db_ts(datetime(2026, 2, 20, 16, 0, 0, tzinfo=timezone.utc))

        assert value == "2026-02-20T16:00:00.000000+00:00"

    def test_string_order_matches_time_order(self) -> None:
        """문자열 정렬 = 시간 정렬"""
        earlier = datetime(2024, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
        later = earlier + timedelta(microseconds=1)

        assert to_db_ts(earlier) < to_db_ts(later)

    def test_parse(self) -> None:
        dt = from_db_ts("2024-03-01T10:00:00.000000+00:00")

        assert dt == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)

    def test_parse_none(self) -> None:
        assert from_db_ts(None) is None


class TestToLocal:
    def test_convert_to_display_timezone(self) -> None:
        """표시 타임존으로 변환"""
        dt = to_local(datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc), ZoneInfo("Asia/Seoul"))

        assert dt.day == 2
        assert dt.hour == 5
