"""
타입 정의 모듈

Enum, Dataclass 등 핵심 타입 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from dataclasses import dataclass
from enum import Enum


class MovementAction(str, Enum):
    """입출고 종류"""

    INCOMING = "incoming"
    OUTGOING = "outgoing"


class WorkerRole(str, Enum):
    """작업자 역할

    - SCANNER: 현장 스캐너 (입출고 기록만 가능)
    - DESKTOP: 사무실 관리자 (대시보드 조회)
    - ADMIN: 전체 권한
    """

    SCANNER = "scanner"
    DESKTOP = "desktop"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    """요청 행위자

    인증 계층(외부)이 검증한 작업자 신원.
    Ledger는 worker_id를 이벤트에 기록하고 role을 권한 판단에만 사용.
    """

    worker_id: int
    role: WorkerRole
    username: str | None = None
    name: str | None = None
