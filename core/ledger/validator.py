"""
입출고 검증기

부수효과 없는 순수 함수. 저장 전에 호출됨.
잘못된 입력은 예외가 아니라 None("invalid")으로 표현.
"""

import math
from typing import Any

from core.constants import MovementLimits
from core.ledger.errors import ValidationError
from core.ledger.types import IncomingMovement, Movement, OutgoingMovement
from core.types import MovementAction


def _coerce_int(raw: Any) -> int | None:
    """숫자 입력을 정수로 변환

    "5", " 5 ", 5.0, "5.0" → 5
    bool, None, 빈 문자열, 소수, NaN/inf, 비ASCII 숫자 → None
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, int):
        return raw

    if isinstance(raw, str):
        text = raw.strip()
        if not text or "_" in text or not text.isascii():
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            raw = float(text)
        except ValueError:
            return None

    if isinstance(raw, float):
        if not math.isfinite(raw) or not raw.is_integer():
            return None
        return int(raw)

    return None


def _validate_range(raw: Any, low: int, high: int) -> int | None:
    value = _coerce_int(raw)
    if value is None or value < low or value > high:
        return None
    return value


def validate_quantity(raw: Any) -> int | None:
    """수량 검증 (1~10 정수)

    Returns:
        정수 수량 (잘못된 입력이면 None)
    """
    return _validate_range(raw, MovementLimits.QUANTITY_MIN, MovementLimits.QUANTITY_MAX)


def validate_destination(raw: Any) -> int | None:
    """목적지 검증 (1~5 정수)

    Returns:
        정수 목적지 (잘못된 입력이면 None)
    """
    return _validate_range(
        raw, MovementLimits.DESTINATION_MIN, MovementLimits.DESTINATION_MAX
    )


def parse_action(raw: MovementAction | str) -> MovementAction:
    """입출고 종류 변환

    Raises:
        ValidationError: 알 수 없는 종류
    """
    try:
        return MovementAction(raw)
    except ValueError as e:
        raise ValidationError(f"invalid action: {raw!r}") from e


def build_movement(
    action: MovementAction | str,
    quantity: Any,
    destination: Any = None,
) -> Movement:
    """검증된 입출고 제안 생성

    입고는 destination을 받지 않음 (전달되어도 결과에 포함되지 않음).

    Raises:
        ValidationError: 수량/목적지/종류가 잘못된 경우
    """
    kind = parse_action(action)

    valid_quantity = validate_quantity(quantity)
    if valid_quantity is None:
        raise ValidationError("invalid quantity")

    if kind == MovementAction.INCOMING:
        return IncomingMovement(quantity=valid_quantity)

    valid_destination = validate_destination(destination)
    if valid_destination is None:
        raise ValidationError("destination must be an integer 1-5")

    return OutgoingMovement(quantity=valid_quantity, destination=valid_destination)
