"""
Ledger 타입 정의

입출고 제안(태그드 유니온)과 저장된 이벤트, 집계 결과 행
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Union

from core.types import MovementAction


@dataclass(frozen=True)
class IncomingMovement:
    """입고 제안 (목적지 없음)"""

    quantity: int

    @property
    def action(self) -> MovementAction:
        return MovementAction.INCOMING


@dataclass(frozen=True)
class OutgoingMovement:
    """출고 제안 (목적지 필수)"""

    quantity: int
    destination: int

    @property
    def action(self) -> MovementAction:
        return MovementAction.OUTGOING


Movement = Union[IncomingMovement, OutgoingMovement]


@dataclass(frozen=True)
class MovementEvent:
    """저장된 입출고 이벤트 (불변)

    id, movement_time은 저장소가 부여.
    destination은 출고일 때만 값이 있음.
    """

    id: int
    action: MovementAction
    worker_id: int
    quantity: int
    destination: int | None
    movement_time: datetime


@dataclass(frozen=True)
class DailyTotal:
    """일자/종류별 합계"""

    date: date
    action: MovementAction
    total: int


@dataclass(frozen=True)
class DestinationTotal:
    """목적지별 출고 합계"""

    destination: int
    total: int
    count: int


@dataclass(frozen=True)
class BalanceAnchor:
    """기초 재고 (싱글턴)

    effective_time 이후의 이벤트만 on-hand 계산에 합산.
    """

    starting_qty: int
    effective_time: datetime
