"""
대시보드 API 라우트

Ledger 집계 조회 (admin/desktop 전용)
"""

from fastapi import APIRouter, Depends, Query

from core.ledger.aggregation import InventoryAggregator
from core.ledger.store import LedgerStore
from core.types import Actor
from web.dependencies import get_ledger_store, require_dashboard_viewer
from web.models.responses import (
    DailyTotalListResponse,
    DailyTotalResponse,
    DestinationTotalListResponse,
    DestinationTotalResponse,
    MovementListResponse,
    MovementResponse,
    OnHandResponse,
)

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


def get_aggregator(
    actor: Actor = Depends(require_dashboard_viewer),
    store: LedgerStore = Depends(get_ledger_store),
) -> InventoryAggregator:
    """요청 단위 집계 엔진

    권한 확인이 DB 연결보다 먼저 수행됨.
    """
    return InventoryAggregator(store, actor)


@router.get("/daily", response_model=DailyTotalListResponse)
async def get_daily_totals(
    start_date: str | None = Query(default=None, alias="startDate", description="시작일 (YYYY-MM-DD)"),
    end_date: str | None = Query(default=None, alias="endDate", description="종료일 (YYYY-MM-DD)"),
    aggregator: InventoryAggregator = Depends(get_aggregator),
) -> DailyTotalListResponse:
    """일자/종류별 수량 합계

    날짜 내림차순, 같은 날짜는 incoming → outgoing 순.
    """
    rows = await aggregator.daily_totals(start_date, end_date)
    return DailyTotalListResponse(data=[DailyTotalResponse.from_row(r) for r in rows])


@router.get("/destinations", response_model=DestinationTotalListResponse)
async def get_destination_totals(
    start_date: str | None = Query(default=None, alias="startDate", description="시작일 (YYYY-MM-DD)"),
    end_date: str | None = Query(default=None, alias="endDate", description="종료일 (YYYY-MM-DD)"),
    aggregator: InventoryAggregator = Depends(get_aggregator),
) -> DestinationTotalListResponse:
    """목적지별 출고 합계 (합계 내림차순)"""
    rows = await aggregator.destination_totals(start_date, end_date)
    return DestinationTotalListResponse(
        data=[DestinationTotalResponse.from_row(r) for r in rows]
    )


@router.get("/day-details", response_model=MovementListResponse)
async def get_day_details(
    day: str | None = Query(default=None, alias="date", description="날짜 (YYYY-MM-DD)"),
    aggregator: InventoryAggregator = Depends(get_aggregator),
) -> MovementListResponse:
    """특정 날짜의 입출고 목록 (최신순)"""
    events = await aggregator.day_details(day)
    return MovementListResponse(data=[MovementResponse.from_event(e) for e in events])


@router.get("/on-hand", response_model=OnHandResponse)
async def get_on_hand(
    aggregator: InventoryAggregator = Depends(get_aggregator),
) -> OnHandResponse:
    """현재 재고

    기초 재고 + 기준 시각 이후 입고 - 출고. 기초 재고 미설정이면 0.
    """
    return OnHandResponse(on_hand=await aggregator.on_hand())
