"""
pytest 공통 fixture 정의

임시 디렉토리, settings.yaml, 스키마가 준비된 임시 DB
"""

import tempfile
from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.ledger.schema import init_ledger_schema


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    settings_content = f"""# 테스트용 settings.yaml
database:
  path: "{(temp_dir / 'ledger_test.db').as_posix()}"

web:
  host: 0.0.0.0
  port: 9000

ledger:
  successor_book_name: Buku Baru
  default_label_color: "#123456"
  label_delete_policy: reject
  timezone: Asia/Jakarta
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest.fixture
def temp_settings_file_invalid_policy(temp_dir: Path) -> Path:
    """잘못된 label_delete_policy의 settings.yaml 파일 생성"""
    settings_content = """ledger:
  label_delete_policy: cascade
"""
    settings_path = temp_dir / "settings_invalid.yaml"
    settings_path.write_text(settings_content, encoding="utf-8")
    return settings_path


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 임시 파일 DB"""
    adapter = SQLiteAdapter(tmp_path / "ledger.db")
    await adapter.connect()
    await init_ledger_schema(adapter)
    yield adapter
    await adapter.close()
