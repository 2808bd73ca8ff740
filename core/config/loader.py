"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from core.constants import HEX_COLOR_PATTERN, PROJECT_ROOT, Defaults, Paths
from core.types import LabelDeletePolicy


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정 (settings.yaml에서 로드)

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    successor_book_name: str = Defaults.SUCCESSOR_BOOK_NAME
    default_label_color: str = Defaults.LABEL_COLOR
    label_delete_policy: LabelDeletePolicy = LabelDeletePolicy.DETACH
    timezone: str = Defaults.TIMEZONE


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _resolve_path(raw: str | None) -> Path:
    """상대 경로는 프로젝트 루트 기준으로 해석"""
    if not raw:
        return Paths.DEFAULT_DB
    path = Path(raw)
    if path.is_absolute() or str(raw) == ":memory:":
        return path
    return PROJECT_ROOT / path


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsLoadError(f"settings.yaml의 '{name}' 섹션 형식이 잘못되었습니다")
    return section


def load_config(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    파일이 없으면 기본값으로 구성.

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 형식이 잘못된 경우
        ValueError: 유효하지 않은 label_delete_policy / timezone / default_label_color인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return AppConfig(db_path=Paths.DEFAULT_DB)

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        return AppConfig(db_path=Paths.DEFAULT_DB)

    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    database = _section(data, "database")
    web = _section(data, "web")
    ledger = _section(data, "ledger")

    # label_delete_policy 검증
    policy_str = ledger.get("label_delete_policy", LabelDeletePolicy.DETACH.value)
    try:
        policy = LabelDeletePolicy(policy_str)
    except ValueError as e:
        valid_policies = [p.value for p in LabelDeletePolicy]
        raise ValueError(
            f"유효하지 않은 label_delete_policy입니다: '{policy_str}'. "
            f"유효한 값: {valid_policies}"
        ) from e

    # timezone 검증
    tz_name = ledger.get("timezone", Defaults.TIMEZONE)
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"유효하지 않은 timezone입니다: '{tz_name}'") from e

    # default_label_color 검증
    label_color = ledger.get("default_label_color", Defaults.LABEL_COLOR)
    if not isinstance(label_color, str) or not re.match(HEX_COLOR_PATTERN, label_color):
        raise ValueError(f"유효하지 않은 default_label_color입니다: '{label_color}' (#rgb 또는 #rrggbb)")

    successor_name = ledger.get("successor_book_name", Defaults.SUCCESSOR_BOOK_NAME)
    if not successor_name or not str(successor_name).strip():
        raise SettingsLoadError("settings.yaml의 successor_book_name이 비어 있습니다")

    try:
        web_port = int(web.get("port", Defaults.WEB_PORT))
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"settings.yaml의 web.port가 숫자가 아닙니다: {web.get('port')}") from e

    return AppConfig(
        db_path=_resolve_path(database.get("path")),
        web_host=web.get("host", Defaults.WEB_HOST),
        web_port=web_port,
        successor_book_name=str(successor_name).strip(),
        default_label_color=label_color,
        label_delete_policy=policy,
        timezone=tz_name,
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            self._config = load_config(settings_path)

    @property
    def config(self) -> AppConfig:
        """원본 설정"""
        assert self._config is not None
        return self._config

    @property
    def db_path(self) -> Path:
        """DB 경로"""
        return self.config.db_path

    @property
    def web_host(self) -> str:
        return self.config.web_host

    @property
    def web_port(self) -> int:
        return self.config.web_port

    @property
    def successor_book_name(self) -> str:
        """마감 시 생성되는 새 장부 이름"""
        return self.config.successor_book_name

    @property
    def default_label_color(self) -> str:
        return self.config.default_label_color

    @property
    def label_delete_policy(self) -> LabelDeletePolicy:
        """라벨 삭제 정책"""
        return self.config.label_delete_policy

    @property
    def timezone(self) -> ZoneInfo:
        """요약/차트 표시용 타임존"""
        return ZoneInfo(self.config.timezone)

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
