"""
집계 엔진

Ledger 읽기 전용 조회: 일별 합계, 목적지별 합계, 일자 상세, 현재 재고.
모든 조회는 멱등이며 Ledger를 변경하지 않음.

날짜는 movement_time(UTC)의 달력 날짜 기준.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any

from core.ledger.access import AGGREGATION_ROLES, authorize
from core.ledger.errors import ValidationError
from core.ledger.schema import MOVEMENT_TABLE, START_BALANCE_TABLE
from core.ledger.store import MOVEMENT_COLUMNS, LedgerStore, row_to_event
from core.ledger.types import DailyTotal, DestinationTotal, MovementEvent
from core.types import Actor, MovementAction
from core.utils.timezone import parse_iso_date

logger = logging.getLogger(__name__)


def _require_date(value: date | str | None, name: str) -> date:
    """필수 날짜 파라미터 검증 (YYYY-MM-DD)

    Raises:
        ValidationError: 누락 또는 형식 오류
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{name} required")
    try:
        return parse_iso_date(value)
    except (AttributeError, TypeError, ValueError) as e:
        raise ValidationError(f"{name} must be a date (YYYY-MM-DD)") from e


def _require_range(
    start_date: date | str | None,
    end_date: date | str | None,
) -> tuple[date, date]:
    if start_date is None or end_date is None:
        raise ValidationError("startDate and endDate required")
    return _require_date(start_date, "startDate"), _require_date(end_date, "endDate")


class InventoryAggregator:
    """집계 엔진

    관리자/데스크톱 역할만 호출 가능.
    호출자는 감사 로그로 남김.

    Args:
        store: Ledger 저장소 (요청 단위로 주입)
        actor: 현재 행위자 (None이면 AuthenticationError)
    """

    def __init__(self, store: LedgerStore, actor: Actor | None):
        self.store = store
        self.actor = actor

    def _authorize(self, operation: str, **params: Any) -> Actor:
        actor = authorize(self.actor, AGGREGATION_ROLES)
        logger.info(
            f"집계 조회: {operation}",
            extra={"worker_id": actor.worker_id, "role": actor.role.value, **params},
        )
        return actor

    async def daily_totals(
        self,
        start_date: date | str | None,
        end_date: date | str | None,
    ) -> list[DailyTotal]:
        """일자/종류별 수량 합계

        [start_date, end_date] 양 끝 포함.
        날짜 내림차순, 같은 날짜는 incoming → outgoing 순.

        Raises:
            ValidationError: 날짜 누락/형식 오류
        """
        self._authorize("daily_totals", start_date=start_date, end_date=end_date)
        start, end = _require_range(start_date, end_date)

        rows = await self.store.fetchall(
            f"""
            SELECT
                DATE(movement_time) AS day,
                action,
                SUM(quantity) AS total
            FROM {MOVEMENT_TABLE}
            WHERE DATE(movement_time) >= ? AND DATE(movement_time) <= ?
            GROUP BY DATE(movement_time), action
            ORDER BY day DESC, action ASC
            """,
            (start.isoformat(), end.isoformat()),
        )

        return [
            DailyTotal(
                date=date.fromisoformat(row[0]),
                action=MovementAction(row[1]),
                total=int(row[2]),
            )
            for row in rows
        ]

    async def destination_totals(
        self,
        start_date: date | str | None,
        end_date: date | str | None,
    ) -> list[DestinationTotal]:
        """목적지별 출고 합계 및 건수

        합계 내림차순 (동률은 목적지 번호 오름차순).
        """
        self._authorize("destination_totals", start_date=start_date, end_date=end_date)
        start, end = _require_range(start_date, end_date)

        rows = await self.store.fetchall(
            f"""
            SELECT
                destination,
                SUM(quantity) AS total,
                COUNT(*) AS num_movements
            FROM {MOVEMENT_TABLE}
            WHERE action = ?
              AND DATE(movement_time) >= ?
              AND DATE(movement_time) <= ?
            GROUP BY destination
            ORDER BY total DESC, destination ASC
            """,
            (MovementAction.OUTGOING.value, start.isoformat(), end.isoformat()),
        )

        return [
            DestinationTotal(destination=row[0], total=int(row[1]), count=int(row[2]))
            for row in rows
        ]

    async def day_details(self, day: date | str | None) -> list[MovementEvent]:
        """특정 날짜의 이벤트 목록 (최신순)"""
        self._authorize("day_details", day=day)
        target = _require_date(day, "date")

        rows = await self.store.fetchall(
            f"""
            SELECT {MOVEMENT_COLUMNS}
            FROM {MOVEMENT_TABLE}
            WHERE DATE(movement_time) = ?
            ORDER BY julianday(movement_time) DESC, id DESC
            """,
            (target.isoformat(),),
        )

        return [row_to_event(row) for row in rows]

    async def on_hand(self) -> int:
        """현재 재고

        기초 재고 + effective_time 이후 입고 합계 - 출고 합계.
        기초 재고 행이 없으면 0.
        """
        self._authorize("on_hand")

        row = await self.store.fetchone(
            f"""
            SELECT
                sb.starting_qty
                + COALESCE(SUM(CASE WHEN im.action = 'incoming' THEN im.quantity ELSE 0 END), 0)
                - COALESCE(SUM(CASE WHEN im.action = 'outgoing' THEN im.quantity ELSE 0 END), 0)
                AS on_hand
            FROM {START_BALANCE_TABLE} sb
            LEFT JOIN {MOVEMENT_TABLE} im
                ON julianday(im.movement_time) >= julianday(sb.effective_time)
            WHERE sb.id = 1
            GROUP BY sb.starting_qty
            """
        )

        if row is None or row[0] is None:
            # 기초 재고 미설정
            return 0
        return int(row[0])
