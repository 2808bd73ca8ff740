"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent

APP_VERSION: str = "1.0.0"


class Defaults:
    """기본값 상수"""

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    SUCCESSOR_BOOK_NAME: str = "New Book"
    LABEL_COLOR: str = "#a1a1aa"
    UNLABELED_COLOR: str = "#52525b"
    UNLABELED_NAME: str = "Other"
    TIMEZONE: str = "UTC"

    LOG_LEVEL: str = "INFO"


# 라벨 색상 (#rgb / #rrggbb)
HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}){1,2}$"


class Money:
    """금액 표현 규칙 (통화 최소 단위 = 소수점 2자리)"""

    QUANTUM: Decimal = Decimal("0.01")
    ZERO: Decimal = Decimal("0.00")


class SeedDescriptions:
    """이월 잔액 거래 설명 문구"""

    CARRIED_FORWARD: str = "opening balance (carried forward)"
    DEFICIT: str = "opening balance (deficit)"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일
    DEFAULT_DB: Path = DATA_DIR / "ledger.db"
