"""
입출고 기록기

검증된 입출고 요청 + 작업자 신원 → Ledger 1행 추가.
"""

from __future__ import annotations

import logging
from typing import Any

from core.ledger.access import RECORD_ROLES, authorize
from core.ledger.store import LedgerStore
from core.ledger.types import IncomingMovement, MovementEvent
from core.ledger.validator import build_movement
from core.types import Actor, MovementAction

logger = logging.getLogger(__name__)


class MovementRecorder:
    """입출고 기록기

    요청 간 공유 상태 없음. 저장소 커밋 1회로 완료.

    Args:
        store: Ledger 저장소 (요청 단위로 주입)

    사용 예시:
    ```python
    recorder = MovementRecorder(LedgerStore(db))
    event = await recorder.record_outgoing(actor, raw_quantity=3, raw_destination=2)
    ```
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    async def record(
        self,
        action: MovementAction | str,
        worker_id: int,
        quantity: Any,
        destination: Any = None,
    ) -> MovementEvent:
        """입출고 1건 기록

        Args:
            action: incoming / outgoing
            worker_id: 기록한 작업자 ID
            quantity: 수량 (1~10)
            destination: 목적지 (출고만, 1~5)

        Returns:
            저장된 MovementEvent (id, movement_time 포함)

        Raises:
            ValidationError: 입력값 오류 (저장소 접근 없음)
            StorageError: 저장 실패 (행 미생성)
        """
        movement = build_movement(action, quantity, destination)

        if isinstance(movement, IncomingMovement) and destination is not None:
            logger.warning(
                "입고 요청의 destination 무시",
                extra={"worker_id": worker_id, "destination": destination},
            )

        event = await self.store.append(movement, worker_id)

        logger.info(
            f"입출고 기록: {event.action.value} x{event.quantity}",
            extra={
                "movement_id": event.id,
                "worker_id": worker_id,
                "destination": event.destination,
            },
        )
        return event

    async def record_incoming(self, actor: Actor | None, raw_quantity: Any) -> MovementEvent:
        """입고 기록 (인증된 모든 작업자)"""
        actor = authorize(actor, RECORD_ROLES)
        return await self.record(MovementAction.INCOMING, actor.worker_id, raw_quantity)

    async def record_outgoing(
        self,
        actor: Actor | None,
        raw_quantity: Any,
        raw_destination: Any,
    ) -> MovementEvent:
        """출고 기록 (인증된 모든 작업자)"""
        actor = authorize(actor, RECORD_ROLES)
        return await self.record(
            MovementAction.OUTGOING,
            actor.worker_id,
            raw_quantity,
            raw_destination,
        )
