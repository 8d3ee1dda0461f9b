"""
현재 작업자 라우트

GET /api/me - 토큰에 담긴 작업자 신원 반환
"""

from fastapi import APIRouter, Depends

from core.types import Actor
from web.dependencies import require_actor
from web.models.responses import MeResponse

router = APIRouter(prefix="/api", tags=["Auth"])


@router.get("/me", response_model=MeResponse)
async def get_me(actor: Actor = Depends(require_actor)) -> MeResponse:
    """현재 작업자 정보"""
    return MeResponse(
        worker_id=actor.worker_id,
        role=actor.role.value,
        username=actor.username,
        name=actor.name,
    )
