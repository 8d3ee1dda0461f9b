"""
입출고 Ledger

박스 입고/출고 이벤트를 append-only로 기록하고,
기초 재고 + Ledger 합산으로 현재 재고를 재구성.

사용 예시:
```python
from core.ledger import LedgerStore, MovementRecorder, InventoryAggregator

store = LedgerStore(db)

# 기록
event = await MovementRecorder(store).record_incoming(actor, raw_quantity=5)

# 조회
aggregator = InventoryAggregator(store, actor)
rows = await aggregator.daily_totals("2024-01-01", "2024-01-31")
on_hand = await aggregator.on_hand()
```
"""

from core.ledger.access import AGGREGATION_ROLES, RECORD_ROLES, authorize
from core.ledger.aggregation import InventoryAggregator
from core.ledger.errors import (
    AuthenticationError,
    AuthorizationError,
    InventoryError,
    StorageError,
    ValidationError,
)
from core.ledger.recorder import MovementRecorder
from core.ledger.store import LedgerStore
from core.ledger.types import (
    BalanceAnchor,
    DailyTotal,
    DestinationTotal,
    IncomingMovement,
    Movement,
    MovementEvent,
    OutgoingMovement,
)
from core.ledger.validator import build_movement, validate_destination, validate_quantity

__all__ = [
    # 핵심 클래스
    "LedgerStore",
    "MovementRecorder",
    "InventoryAggregator",
    # 타입
    "IncomingMovement",
    "OutgoingMovement",
    "Movement",
    "MovementEvent",
    "DailyTotal",
    "DestinationTotal",
    "BalanceAnchor",
    # 검증
    "validate_quantity",
    "validate_destination",
    "build_movement",
    # 접근 정책
    "authorize",
    "RECORD_ROLES",
    "AGGREGATION_ROLES",
    # 예외
    "InventoryError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "StorageError",
]
