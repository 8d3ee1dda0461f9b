"""
접근 정책

신원 검증은 외부(인증 계층) 책임.
Ledger는 작업별 허용 역할만 선언하고 authorize()로 확인.
"""

import logging
from typing import Iterable

from core.ledger.errors import AuthenticationError, AuthorizationError
from core.types import Actor, WorkerRole

logger = logging.getLogger(__name__)


# 입출고 기록: 인증된 모든 작업자
RECORD_ROLES: frozenset[WorkerRole] = frozenset(WorkerRole)

# 집계 조회: 관리자/데스크톱만
AGGREGATION_ROLES: frozenset[WorkerRole] = frozenset(
    {WorkerRole.ADMIN, WorkerRole.DESKTOP}
)


def authorize(actor: Actor | None, allowed_roles: Iterable[WorkerRole]) -> Actor:
    """행위자 권한 확인

    Args:
        actor: 현재 행위자 (None이면 미인증)
        allowed_roles: 허용 역할 집합

    Returns:
        확인된 Actor

    Raises:
        AuthenticationError: 행위자가 없는 경우
        AuthorizationError: 역할이 허용되지 않은 경우
    """
    if actor is None:
        raise AuthenticationError()

    if actor.role not in set(allowed_roles):
        logger.warning(
            "권한 없는 요청 거부",
            extra={"worker_id": actor.worker_id, "role": actor.role.value},
        )
        raise AuthorizationError(actor.role.value)

    return actor
