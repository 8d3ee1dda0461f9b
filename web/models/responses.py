"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화
"""

from datetime import date as Date, datetime

from pydantic import BaseModel, Field

from core.ledger.types import DailyTotal, DestinationTotal, MovementEvent


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="API 버전")


class MeResponse(BaseModel):
    """현재 행위자 응답"""

    worker_id: int = Field(..., description="작업자 ID")
    role: str = Field(..., description="역할 (scanner/desktop/admin)")
    username: str | None = Field(default=None, description="로그인 ID")
    name: str | None = Field(default=None, description="이름")


class MovementResponse(BaseModel):
    """입출고 이벤트 응답"""

    id: int = Field(..., description="이벤트 ID")
    action: str = Field(..., description="incoming / outgoing")
    worker_id: int = Field(..., description="기록한 작업자 ID")
    quantity: int = Field(..., description="수량")
    destination: int | None = Field(default=None, description="목적지 (출고만)")
    movement_time: datetime = Field(..., description="기록 시간 (UTC)")

    @classmethod
    def from_event(cls, event: MovementEvent) -> "MovementResponse":
        return cls(
            id=event.id,
            action=event.action.value,
            worker_id=event.worker_id,
            quantity=event.quantity,
            destination=event.destination,
            movement_time=event.movement_time,
        )


class MovementSavedResponse(BaseModel):
    """입출고 저장 응답"""

    message: str = Field(default="saved", description="결과 메시지")
    movement: MovementResponse = Field(..., description="저장된 이벤트")


class DailyTotalResponse(BaseModel):
    """일자/종류별 합계"""

    date: Date = Field(..., description="날짜 (UTC)")
    action: str = Field(..., description="incoming / outgoing")
    total: int = Field(..., description="수량 합계")

    @classmethod
    def from_row(cls, row: DailyTotal) -> "DailyTotalResponse":
        return cls(date=row.date, action=row.action.value, total=row.total)


class DailyTotalListResponse(BaseModel):
    """일별 합계 목록"""

    data: list[DailyTotalResponse] = Field(default_factory=list)


class DestinationTotalResponse(BaseModel):
    """목적지별 합계"""

    destination: int = Field(..., description="목적지 번호")
    total: int = Field(..., description="출고 수량 합계")
    count: int = Field(..., description="출고 건수")

    @classmethod
    def from_row(cls, row: DestinationTotal) -> "DestinationTotalResponse":
        return cls(destination=row.destination, total=row.total, count=row.count)


class DestinationTotalListResponse(BaseModel):
    """목적지별 합계 목록"""

    data: list[DestinationTotalResponse] = Field(default_factory=list)


class MovementListResponse(BaseModel):
    """일자 상세 목록"""

    data: list[MovementResponse] = Field(default_factory=list)


class OnHandResponse(BaseModel):
    """현재 재고"""

    on_hand: int = Field(..., serialization_alias="onHand", description="현재 재고 수량")
