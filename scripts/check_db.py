#!/usr/bin/env python3
"""Ledger DB 상태 확인 스크립트

사용법:
    python scripts/check_db.py [DB 경로]
"""

import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.constants import Paths
from core.ledger import InventoryAggregator, LedgerStore
from core.types import Actor, WorkerRole

# 운영 스크립트용 내부 행위자
SCRIPT_ACTOR = Actor(worker_id=0, role=WorkerRole.ADMIN, username="check_db")


async def main(db_path: Path) -> None:
    async with SQLiteAdapter(db_path, readonly=True) as db:
        store = LedgerStore(db)
        total = await store.count_all()
        last_id = await store.get_last_id()
        anchor = await store.get_anchor()
        on_hand = await InventoryAggregator(store, SCRIPT_ACTOR).on_hand()

        print(f"DB Path: {db_path}")
        print(f"Total movements: {total}")
        print(f"Last id: {last_id}")
        if anchor:
            print(f"Start balance: {anchor.starting_qty} @ {anchor.effective_time.isoformat()}")
        else:
            print("Start balance: (not set)")
        print(f"On hand: {on_hand}")

        # 최근 이벤트 10개 출력
        recent = [await store.get_movement(i) for i in range(last_id, max(last_id - 10, 0), -1)]
        print(f"\nRecent movements ({sum(1 for e in recent if e)}):")
        for e in recent:
            if e is None:
                continue
            dest = f" -> {e.destination}" if e.destination else ""
            print(f"  - #{e.id} {e.movement_time.isoformat()} {e.action.value} x{e.quantity}{dest} (worker {e.worker_id})")


if __name__ == "__main__":
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else Paths.DB
    asyncio.run(main(path))
