"""
Ledger 저장소

입출고 이벤트 append-only 저장 및 조회.
비즈니스 규칙 없음 (삽입/조회만 담당).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import aiosqlite

from core.ledger.errors import StorageError
from core.ledger.schema import MOVEMENT_TABLE, START_BALANCE_TABLE
from core.ledger.types import (
    BalanceAnchor,
    IncomingMovement,
    Movement,
    MovementEvent,
    OutgoingMovement,
)
from core.types import MovementAction
from core.utils.timezone import parse_db_timestamp

if TYPE_CHECKING:
    from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

MOVEMENT_COLUMNS = "id, action, worker_id, quantity, destination, movement_time"


def row_to_event(row: tuple[Any, ...]) -> MovementEvent:
    """(id, action, worker_id, quantity, destination, movement_time) 행 변환"""
    return MovementEvent(
        id=row[0],
        action=MovementAction(row[1]),
        worker_id=row[2],
        quantity=row[3],
        destination=row[4],
        movement_time=parse_db_timestamp(row[5]),
    )


class LedgerStore:
    """Ledger 저장소

    inventory_movement 테이블에 대한 삽입/조회.
    id와 movement_time은 DB가 부여.
    드라이버 오류는 모두 StorageError로 변환.

    Args:
        db: SQLite 어댑터
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def append(self, movement: Movement, worker_id: int) -> MovementEvent:
        """입출고 이벤트 1건 추가

        단일 트랜잭션 내에서 INSERT 후 저장된 행을 다시 읽어 반환.
        실패 시 롤백되어 어떤 행도 남지 않음.

        Args:
            movement: 입고/출고 제안
            worker_id: 기록한 작업자 ID

        Returns:
            저장된 MovementEvent

        Raises:
            StorageError: INSERT 또는 커밋 실패
        """
        try:
            async with self.db.transaction():
                if isinstance(movement, OutgoingMovement):
                    cursor = await self.db.execute(
                        f"""
                        INSERT INTO {MOVEMENT_TABLE} (action, worker_id, quantity, destination)
                        VALUES (?, ?, ?, ?)
                        """,
                        (
                            MovementAction.OUTGOING.value,
                            worker_id,
                            movement.quantity,
                            movement.destination,
                        ),
                    )
                elif isinstance(movement, IncomingMovement):
                    # 입고는 destination 컬럼 자체를 INSERT하지 않음
                    cursor = await self.db.execute(
                        f"""
                        INSERT INTO {MOVEMENT_TABLE} (action, worker_id, quantity)
                        VALUES (?, ?, ?)
                        """,
                        (MovementAction.INCOMING.value, worker_id, movement.quantity),
                    )
                else:
                    raise TypeError(f"Unknown movement type: {type(movement).__name__}")

                movement_id = cursor.lastrowid
                row = await self.db.fetchone(
                    f"SELECT {MOVEMENT_COLUMNS} FROM {MOVEMENT_TABLE} WHERE id = ?",
                    (movement_id,),
                )
        except aiosqlite.Error as e:
            logger.error(
                "입출고 저장 실패",
                extra={"action": movement.action.value, "worker_id": worker_id, "error": str(e)},
            )
            raise StorageError(f"failed to record movement: {e}") from e

        if row is None:
            raise StorageError(f"movement {movement_id} not readable after insert")

        event = row_to_event(row)
        logger.debug(
            "입출고 저장 완료",
            extra={"movement_id": event.id, "action": event.action.value},
        )
        return event

    async def get_movement(self, movement_id: int) -> MovementEvent | None:
        """이벤트 단건 조회

        Args:
            movement_id: 이벤트 ID

        Returns:
            MovementEvent (없으면 None)
        """
        row = await self.fetchone(
            f"SELECT {MOVEMENT_COLUMNS} FROM {MOVEMENT_TABLE} WHERE id = ?",
            (movement_id,),
        )
        return row_to_event(row) if row else None

    async def get_anchor(self) -> BalanceAnchor | None:
        """기초 재고 조회 (없으면 None)"""
        row = await self.fetchone(
            f"SELECT starting_qty, effective_time FROM {START_BALANCE_TABLE} WHERE id = 1"
        )
        if row is None:
            return None
        return BalanceAnchor(
            starting_qty=row[0],
            effective_time=parse_db_timestamp(row[1]),
        )

    async def count_all(self) -> int:
        """전체 이벤트 수"""
        row = await self.fetchone(f"SELECT COUNT(*) FROM {MOVEMENT_TABLE}")
        return row[0] if row else 0

    async def get_last_id(self) -> int:
        """마지막 이벤트 ID (없으면 0)"""
        row = await self.fetchone(f"SELECT COALESCE(MAX(id), 0) FROM {MOVEMENT_TABLE}")
        return row[0] if row else 0

    # -------------------------------------------------------------------------
    # 읽기 전용 쿼리 (집계 엔진용)
    # -------------------------------------------------------------------------

    async def fetchone(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> tuple[Any, ...] | None:
        """단일 행 조회 (실패 시 StorageError)"""
        try:
            return await self.db.fetchone(sql, parameters)
        except aiosqlite.Error as e:
            logger.error("Ledger 조회 실패", extra={"error": str(e)})
            raise StorageError(f"failed to query ledger: {e}") from e

    async def fetchall(
        self,
        sql: str,
        parameters: tuple[Any, ...] | None = None,
    ) -> list[tuple[Any, ...]]:
        """전체 행 조회 (실패 시 StorageError)"""
        try:
            return await self.db.fetchall(sql, parameters)
        except aiosqlite.Error as e:
            logger.error("Ledger 조회 실패", extra={"error": str(e)})
            raise StorageError(f"failed to query ledger: {e}") from e
