"""
요청 스키마 (Pydantic)

수량/목적지는 원시 입력 그대로 받아 Ledger 검증기에서 변환.
"""

from typing import Any

from pydantic import BaseModel, Field


class IncomingRequest(BaseModel):
    """입고 기록 요청

    destination 등 추가 필드는 무시됨.
    """

    quantity: Any = Field(default=None, description="수량 (1~10)")

    model_config = {
        "json_schema_extra": {
            "examples": [{"quantity": 5}]
        }
    }


class OutgoingRequest(BaseModel):
    """출고 기록 요청"""

    quantity: Any = Field(default=None, description="수량 (1~10)")
    destination: Any = Field(default=None, description="목적지 번호 (1~5)")

    model_config = {
        "json_schema_extra": {
            "examples": [{"quantity": 3, "destination": 2}]
        }
    }
