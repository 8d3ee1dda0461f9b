"""
입출고 기록 라우트

스캐너 포함 인증된 모든 작업자가 호출 가능.
"""

from fastapi import APIRouter, Depends, status

from core.ledger.recorder import MovementRecorder
from core.ledger.store import LedgerStore
from core.types import Actor
from web.dependencies import get_ledger_store_write, require_recorder
from web.models.requests import IncomingRequest, OutgoingRequest
from web.models.responses import MovementResponse, MovementSavedResponse

router = APIRouter(prefix="/api", tags=["Movements"])


@router.post(
    "/incoming",
    response_model=MovementSavedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_incoming(
    request: IncomingRequest,
    actor: Actor = Depends(require_recorder),
    store: LedgerStore = Depends(get_ledger_store_write),
) -> MovementSavedResponse:
    """입고 기록

    수량 1~10. 요청에 destination이 있어도 저장하지 않음.
    """
    recorder = MovementRecorder(store)
    event = await recorder.record_incoming(actor, request.quantity)

    return MovementSavedResponse(movement=MovementResponse.from_event(event))


@router.post(
    "/outgoing",
    response_model=MovementSavedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def record_outgoing(
    request: OutgoingRequest,
    actor: Actor = Depends(require_recorder),
    store: LedgerStore = Depends(get_ledger_store_write),
) -> MovementSavedResponse:
    """출고 기록

    수량 1~10, 목적지 1~5.
    """
    recorder = MovementRecorder(store)
    event = await recorder.record_outgoing(actor, request.quantity, request.destination)

    return MovementSavedResponse(movement=MovementResponse.from_event(event))
