"""
Ledger 스키마 초기화

Web 시작 시 자동으로 입출고 테이블과 기초 재고 테이블 생성.
CREATE IF NOT EXISTS 패턴으로 안전하게 동작.

주의: SQLite alias로 time, count 사용 금지 (예약어)
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)


MOVEMENT_TABLE = "inventory_movement"
START_BALANCE_TABLE = "inventory_start_balance"


async def init_ledger_schema(db: "SQLiteAdapter") -> None:
    """Ledger 스키마 초기화 (테이블 + 인덱스 + 트리거)

    이미 존재하는 경우 안전하게 건너뜀 (IF NOT EXISTS).

    Args:
        db: SQLiteAdapter 인스턴스
    """
    await _create_ledger_tables(db)
    await _create_append_only_triggers(db)
    await db.commit()
    logger.info("Ledger 스키마 초기화 완료")


async def _create_ledger_tables(db: "SQLiteAdapter") -> None:
    """Ledger 테이블 생성"""

    # 입출고 이벤트 (append-only)
    # movement_time은 저장소가 부여 (UTC, 밀리초)
    await db.execute(f"""
        CREATE TABLE IF NOT EXISTS {MOVEMENT_TABLE} (
            id               INTEGER PRIMARY KEY AUTOINCREMENT,
            action           TEXT NOT NULL CHECK (action IN ('incoming', 'outgoing')),
            worker_id        INTEGER NOT NULL,
            quantity         INTEGER NOT NULL CHECK (quantity BETWEEN 1 AND 10),
            destination      INTEGER,
            movement_time    TEXT NOT NULL DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now')),

            CHECK (
                (action = 'incoming' AND destination IS NULL)
                OR (action = 'outgoing' AND destination IS NOT NULL AND destination BETWEEN 1 AND 5)
            )
        )
    """)

    # 기초 재고 (id = 1 단일 행)
    await db.execute(f"""
        CREATE TABLE IF NOT EXISTS {START_BALANCE_TABLE} (
            id               INTEGER PRIMARY KEY CHECK (id = 1),
            starting_qty     INTEGER NOT NULL,
            effective_time   TEXT NOT NULL
        )
    """)

    await db.execute(f"""
        CREATE INDEX IF NOT EXISTS ix_{MOVEMENT_TABLE}_time
        ON {MOVEMENT_TABLE}(movement_time)
    """)

    await db.execute(f"""
        CREATE INDEX IF NOT EXISTS ix_{MOVEMENT_TABLE}_action_time
        ON {MOVEMENT_TABLE}(action, movement_time)
    """)


async def _create_append_only_triggers(db: "SQLiteAdapter") -> None:
    """입출고 행 수정/삭제 차단 트리거"""

    await db.execute(f"""
        CREATE TRIGGER IF NOT EXISTS trg_{MOVEMENT_TABLE}_no_update
        BEFORE UPDATE ON {MOVEMENT_TABLE}
        BEGIN
            SELECT RAISE(ABORT, '{MOVEMENT_TABLE} is append-only');
        END
    """)

    await db.execute(f"""
        CREATE TRIGGER IF NOT EXISTS trg_{MOVEMENT_TABLE}_no_delete
        BEFORE DELETE ON {MOVEMENT_TABLE}
        BEGIN
            SELECT RAISE(ABORT, '{MOVEMENT_TABLE} is append-only');
        END
    """)
