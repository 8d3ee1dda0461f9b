"""
pytest 공통 fixture 정의

인메모리 Ledger DB, 임시 secrets.yaml, 행위자, 원시 SQL 삽입 헬퍼
"""

import tempfile
from datetime import datetime
from pathlib import Path
from typing import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.types import Actor, WorkerRole
from core.utils.timezone import to_db_timestamp

TEST_SECRET_KEY = "test_jwt_secret_key_xyz"


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_secrets_file(temp_dir: Path) -> Path:
    """테스트용 secrets.yaml 파일 생성"""
    db_path = temp_dir / "ledger.db"
    secrets_content = f"""# 테스트용 secrets.yaml
web:
  secret_key: "{TEST_SECRET_KEY}"

database:
  path: "{db_path.as_posix()}"
"""
    secrets_path = temp_dir / "secrets.yaml"
    secrets_path.write_text(secrets_content, encoding="utf-8")
    return secrets_path


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[SQLiteAdapter, None]:
    """스키마가 초기화된 인메모리 DB"""
    adapter = SQLiteAdapter(":memory:")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


@pytest.fixture
def admin() -> Actor:
    return Actor(worker_id=1, role=WorkerRole.ADMIN, username="boss")


@pytest.fixture
def desktop() -> Actor:
    return Actor(worker_id=2, role=WorkerRole.DESKTOP, username="office")


@pytest.fixture
def scanner() -> Actor:
    return Actor(worker_id=3, role=WorkerRole.SCANNER, username="dock")


InsertMovement = Callable[..., Awaitable[int]]


@pytest.fixture
def insert_movement(db: SQLiteAdapter) -> InsertMovement:
    """지정 시각의 입출고 행 직접 삽입 (검증기/기록기 우회)"""

    async def _insert(
        action: str,
        quantity: int,
        at: datetime,
        destination: int | None = None,
        worker_id: int = 9,
    ) -> int:
        cursor = await db.execute(
            """
            INSERT INTO inventory_movement (action, worker_id, quantity, destination, movement_time)
            VALUES (?, ?, ?, ?, ?)
            """,
            (action, worker_id, quantity, destination, to_db_timestamp(at)),
        )
        await db.commit()
        return cursor.lastrowid

    return _insert


@pytest.fixture
def set_anchor(db: SQLiteAdapter) -> Callable[[int, datetime], Awaitable[None]]:
    """기초 재고 행 설정 (관리 작업 대체)"""

    async def _set(starting_qty: int, effective_time: datetime) -> None:
        await db.execute(
            """
            INSERT OR REPLACE INTO inventory_start_balance (id, starting_qty, effective_time)
            VALUES (1, ?, ?)
            """,
            (starting_qty, to_db_timestamp(effective_time)),
        )
        await db.commit()

    return _set
