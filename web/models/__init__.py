"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    IncomingRequest,
    OutgoingRequest,
)
from web.models.responses import (
    DailyTotalListResponse,
    DailyTotalResponse,
    DestinationTotalListResponse,
    DestinationTotalResponse,
    HealthResponse,
    MeResponse,
    MovementListResponse,
    MovementResponse,
    MovementSavedResponse,
    OnHandResponse,
)

__all__ = [
    # Requests
    "IncomingRequest",
    "OutgoingRequest",
    # Responses
    "DailyTotalListResponse",
    "DailyTotalResponse",
    "DestinationTotalListResponse",
    "DestinationTotalResponse",
    "HealthResponse",
    "MeResponse",
    "MovementListResponse",
    "MovementResponse",
    "MovementSavedResponse",
    "OnHandResponse",
]
